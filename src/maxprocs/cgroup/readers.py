"""Container-aware CPU quota detection.

Works out which cgroup version governs the process and reads its CPU quota
from /sys/fs/cgroup/cpu.max (v2) or /sys/fs/cgroup/cpu/cpu.cfs_quota_us and
cpu.cfs_period_us (v1). Readers return None (unlimited) whenever a file is
missing, unreadable, or malformed.
"""
import logging
import math
import os
from typing import Optional

from maxprocs.cgroup.paths import CgroupPaths, DEFAULT_CGROUP_PATHS
from maxprocs.exceptions import (
    CGROUP_READ_ERRORS,
    MalformedCgroupFileError,
    classify_os_error,
)
from maxprocs.models import CgroupVersion

logger = logging.getLogger(__name__)

V1_UNLIMITED = -1
V2_UNLIMITED = "max"


def _path_exists(path: str) -> bool:
    return os.path.exists(path)


def _read_file(path: str) -> str:
    """Read a whole control file, raising the matching CgroupReadError on failure."""
    try:
        with open(path, 'r') as f:
            return f.read()
    except OSError as e:
        raise classify_os_error(e, path) from e
    except UnicodeDecodeError as e:
        raise MalformedCgroupFileError(path) from e


def _read_int(path: str) -> int:
    content = _read_file(path).strip()
    try:
        return int(content)
    except ValueError as e:
        raise MalformedCgroupFileError(path, content) from e


def _parse_number(token: str, path: str) -> float:
    try:
        value = float(token)
    except ValueError as e:
        raise MalformedCgroupFileError(path, token) from e
    if not math.isfinite(value):
        raise MalformedCgroupFileError(path, token)
    return value


def _ratio(quota, period, path: str) -> float:
    """quota / period as a finite float; overflow counts as malformed content."""
    try:
        result = quota / period
    except OverflowError as e:
        raise MalformedCgroupFileError(path, f"{quota} {period}") from e
    if not math.isfinite(result):
        raise MalformedCgroupFileError(path, f"{quota} {period}")
    return result


def detect_version(paths: CgroupPaths = DEFAULT_CGROUP_PATHS) -> CgroupVersion:
    """Detect the cgroup version from marker file existence. Reads no content."""
    if not _path_exists(paths.proc_cgroup):
        return CgroupVersion.NONE

    # v2 first: a v2-only host may still carry legacy v1 artifacts
    if _path_exists(paths.v2_controllers):
        return CgroupVersion.V2

    if _path_exists(paths.v1_quota):
        return CgroupVersion.V1

    return CgroupVersion.NONE


def read_quota_v1(paths: CgroupPaths = DEFAULT_CGROUP_PATHS) -> Optional[float]:
    """Read cpu.cfs_quota_us / cpu.cfs_period_us. -1 quota means unlimited."""
    try:
        quota = _read_int(paths.v1_quota)
        if quota == V1_UNLIMITED:
            return None
        if quota < 0:
            raise MalformedCgroupFileError(paths.v1_quota, str(quota))

        period = _read_int(paths.v1_period)
        if period <= 0:
            return None

        return _ratio(quota, period, paths.v1_quota)
    except CGROUP_READ_ERRORS as e:
        logger.debug(f"cgroup v1 quota unreadable, treating as unlimited [{e.error_code}]: {e.path}")
        return None


def read_quota_v2(paths: CgroupPaths = DEFAULT_CGROUP_PATHS) -> Optional[float]:
    """Read cpu.max. Format: '$MAX $PERIOD' or 'max $PERIOD'."""
    path = paths.v2_cpu_max
    try:
        parts = _read_file(path).strip().split()
        if not parts:
            raise MalformedCgroupFileError(path, "")

        if parts[0] == V2_UNLIMITED:
            return None
        if len(parts) < 2:
            return None  # Partial file

        max_value = _parse_number(parts[0], path)
        period = _parse_number(parts[1], path)
        if period <= 0:
            return None
        if max_value < 0:
            raise MalformedCgroupFileError(path, parts[0])

        return _ratio(max_value, period, path)
    except CGROUP_READ_ERRORS as e:
        logger.debug(f"cgroup v2 quota unreadable, treating as unlimited [{e.error_code}]: {e.path}")
        return None


def read_quota(version: CgroupVersion, paths: CgroupPaths = DEFAULT_CGROUP_PATHS) -> Optional[float]:
    """Read the CPU quota for the given cgroup version. None means unlimited."""
    if version is CgroupVersion.V2:
        return read_quota_v2(paths)
    if version is CgroupVersion.V1:
        return read_quota_v1(paths)
    return None
