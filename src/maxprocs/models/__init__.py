"""
Data models shared by the detector and its callers.
"""
from .cgroup import CgroupSnapshot, CgroupVersion, Rounding

__all__ = [
    "CgroupSnapshot",
    "CgroupVersion",
    "Rounding",
]
