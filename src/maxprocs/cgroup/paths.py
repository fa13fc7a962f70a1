"""
Locations of the cgroup control files consulted during detection.
"""
from dataclasses import dataclass, fields
from pathlib import Path

CGROUP_FILE_PATH = "/proc/self/cgroup"
CGROUP_V1_QUOTA_PATH = "/sys/fs/cgroup/cpu/cpu.cfs_quota_us"
CGROUP_V1_PERIOD_PATH = "/sys/fs/cgroup/cpu/cpu.cfs_period_us"
CGROUP_V2_CONTROLLERS_PATH = "/sys/fs/cgroup/cgroup.controllers"
CGROUP_V2_CPU_MAX_PATH = "/sys/fs/cgroup/cpu.max"


@dataclass(frozen=True)
class CgroupPaths:
    """The five files detection looks at. Defaults are the kernel's fixed paths."""
    proc_cgroup: str = CGROUP_FILE_PATH
    v2_controllers: str = CGROUP_V2_CONTROLLERS_PATH
    v2_cpu_max: str = CGROUP_V2_CPU_MAX_PATH
    v1_quota: str = CGROUP_V1_QUOTA_PATH
    v1_period: str = CGROUP_V1_PERIOD_PATH

    @classmethod
    def rooted_at(cls, root) -> "CgroupPaths":
        """Re-anchor every default path under root (e.g. a test's tmp_path)."""
        root = Path(root)
        defaults = cls()
        return cls(**{
            f.name: str(root / getattr(defaults, f.name).lstrip("/"))
            for f in fields(cls)
        })

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CGROUP_PATHS = CgroupPaths()
