"""
maxprocs: cgroup-aware CPU counts for containerized Python processes.

    import maxprocs
    maxprocs.count()            # e.g. 2 under a 2.5 CPU quota
    maxprocs.count("ceil")      # 3
    maxprocs.quota()            # 2.5, or None when unlimited
"""
from .config.settings import configure_logging
from .cgroup import CgroupPaths, DEFAULT_CGROUP_PATHS
from .detector import (
    QuotaDetector,
    cgroup_version,
    count,
    get_detector,
    host_processor_count,
    limited,
    quota,
    reset,
    reset_detector,
)
from .exceptions import (
    MaxprocsError,
    ConfigurationError,
    InvalidRoundingError,
    CgroupReadError,
)
from .models import CgroupSnapshot, CgroupVersion, Rounding
from .worker_scaling import calculate_worker_count

__version__ = "0.1.0"

configure_logging()

__all__ = [
    # Accessors
    "count",
    "quota",
    "limited",
    "cgroup_version",
    "reset",
    # Detector
    "QuotaDetector",
    "get_detector",
    "reset_detector",
    "host_processor_count",
    "CgroupPaths",
    "DEFAULT_CGROUP_PATHS",
    # Models
    "CgroupSnapshot",
    "CgroupVersion",
    "Rounding",
    # Worker sizing
    "calculate_worker_count",
    # Exceptions
    "MaxprocsError",
    "ConfigurationError",
    "InvalidRoundingError",
    "CgroupReadError",
]
