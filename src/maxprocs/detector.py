"""
Cached cgroup CPU quota detector.

QuotaDetector runs version detection and the quota read once, publishes the
result as an immutable CgroupSnapshot, and serves every later accessor call
from that snapshot without locking. reset() discards the snapshot so the next
call detects again.
"""
import logging
import os
import threading
from typing import Callable, Optional, Union

from maxprocs.cgroup import readers
from maxprocs.cgroup.paths import CgroupPaths, DEFAULT_CGROUP_PATHS
from maxprocs.exceptions import InvalidRoundingError
from maxprocs.models import CgroupSnapshot, CgroupVersion, Rounding

logger = logging.getLogger(__name__)

RoundingArg = Union[Rounding, str]


def host_processor_count() -> int:
    """Logical CPUs on the host, ignoring any cgroup quota. Min 1."""
    return os.cpu_count() or 1


def _coerce_rounding(value: RoundingArg) -> Rounding:
    try:
        return Rounding(value)
    except ValueError:
        raise InvalidRoundingError(value)


class QuotaDetector:
    """
    Reports usable CPUs for a process under a cgroup CPU quota.

    Detection (version check, then quota read) happens at most once per
    initialization cycle, even with many threads calling in at the same time.
    Unreadable or invalid cgroup files fail open: quota becomes None and
    count() falls back to the host processor count.
    """

    def __init__(
        self,
        paths: CgroupPaths = DEFAULT_CGROUP_PATHS,
        host_cpu_count: Optional[Callable[[], int]] = None,
    ):
        self.paths = paths
        self._host_cpu_count = host_cpu_count or host_processor_count
        self._lock = threading.Lock()
        self._snapshot: Optional[CgroupSnapshot] = None

    @property
    def initialized(self) -> bool:
        return self._snapshot is not None

    def _ensure_initialized(self) -> CgroupSnapshot:
        # Fast path: check without lock first
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        # Slow path: acquire lock and check again (double-checked locking)
        with self._lock:
            if self._snapshot is None:
                version = readers.detect_version(self.paths)
                quota = readers.read_quota(version, self.paths)
                self._snapshot = CgroupSnapshot(version=version, quota=quota)
                logger.info(f"cgroup detection: version={version.value}, quota={quota}")
            return self._snapshot

    def snapshot(self) -> CgroupSnapshot:
        """Return the cached (version, quota) pair, detecting first if needed."""
        return self._ensure_initialized()

    def count(self, rounding: RoundingArg = Rounding.FLOOR) -> int:
        """
        Number of CPUs available, considering the cgroup quota.

        Args:
            rounding: Rounding.FLOOR (default) or Rounding.CEIL, or "floor"/"ceil"

        Returns:
            CPU count, at least 1

        Raises:
            InvalidRoundingError: If rounding is not floor or ceil
        """
        mode = _coerce_rounding(rounding)
        q = self.quota()
        if q is None:
            return self._host_cpu_count()
        return max(mode.apply(q), 1)

    def quota(self) -> Optional[float]:
        """Raw CPU quota (e.g. 2.5 for 2.5 CPUs), or None if unlimited."""
        return self._ensure_initialized().quota

    def limited(self) -> bool:
        """True if a CPU quota is set."""
        return self.quota() is not None

    def cgroup_version(self) -> CgroupVersion:
        """Detected cgroup version: V1, V2, or NONE."""
        return self._ensure_initialized().version

    def reset(self) -> None:
        """Clear the cached values. The next accessor call re-detects."""
        with self._lock:
            self._snapshot = None
        logger.debug("cgroup detection cache cleared")


# Singleton detector instance
_detector_instance: Optional[QuotaDetector] = None
_detector_lock = threading.Lock()


def get_detector() -> QuotaDetector:
    """Get or create the process-wide QuotaDetector."""
    global _detector_instance
    if _detector_instance is not None:
        return _detector_instance
    with _detector_lock:
        if _detector_instance is None:
            _detector_instance = QuotaDetector()
    return _detector_instance


def reset_detector():
    """Drop the process-wide detector (for testing)."""
    global _detector_instance
    with _detector_lock:
        _detector_instance = None


def count(rounding: RoundingArg = Rounding.FLOOR) -> int:
    return get_detector().count(rounding)


def quota() -> Optional[float]:
    return get_detector().quota()


def limited() -> bool:
    return get_detector().limited()


def cgroup_version() -> CgroupVersion:
    return get_detector().cgroup_version()


def reset() -> None:
    get_detector().reset()
