"""
Cgroup version detection and CPU quota readers.
"""
from .paths import (
    CgroupPaths,
    DEFAULT_CGROUP_PATHS,
    CGROUP_FILE_PATH,
    CGROUP_V1_QUOTA_PATH,
    CGROUP_V1_PERIOD_PATH,
    CGROUP_V2_CONTROLLERS_PATH,
    CGROUP_V2_CPU_MAX_PATH,
)
from .readers import detect_version, read_quota, read_quota_v1, read_quota_v2

__all__ = [
    "CgroupPaths",
    "DEFAULT_CGROUP_PATHS",
    "CGROUP_FILE_PATH",
    "CGROUP_V1_QUOTA_PATH",
    "CGROUP_V1_PERIOD_PATH",
    "CGROUP_V2_CONTROLLERS_PATH",
    "CGROUP_V2_CPU_MAX_PATH",
    "detect_version",
    "read_quota",
    "read_quota_v1",
    "read_quota_v2",
]
