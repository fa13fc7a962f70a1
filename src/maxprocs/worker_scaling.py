"""Quota-aware worker count calculation based on usable CPUs and memory."""
import logging
from typing import Optional

import psutil

from maxprocs.config import settings

logger = logging.getLogger(__name__)

MB = 1024 ** 2


def calculate_worker_count(
    multiplier: float = 1.0,
    max_workers: Optional[int] = None,
    override: Optional[int] = None,
    memory_per_worker_mb: Optional[int] = None,
    reserved_memory_mb: Optional[int] = None,
    detector=None,
) -> int:
    """Calculate a pool size from the cgroup-aware CPU count.

    Use multiplier > 1 for I/O-bound work, 1.0 for CPU-bound work. When
    memory_per_worker_mb is positive, the count is also capped by available
    memory after reserved_memory_mb is set aside. Unset arguments fall back to
    the MAXPROCS_* environment settings.

    Returns: worker count, at least 1
    """
    if multiplier <= 0:
        raise ValueError(f"multiplier must be positive, got {multiplier}")

    if override is None:
        override = settings.workers_override()
    if override is not None:
        workers = max(1, override)
        logger.info(f"Worker count overridden: {workers}")
        return workers

    if detector is None:
        from maxprocs.detector import get_detector
        detector = get_detector()

    cpu_count = detector.count()
    workers = max(1, int(cpu_count * multiplier))

    cap = max_workers if max_workers is not None else settings.max_workers()
    workers = min(workers, max(1, cap))

    per_worker = memory_per_worker_mb if memory_per_worker_mb is not None else settings.memory_per_worker_mb()
    if per_worker > 0:
        reserved = reserved_memory_mb if reserved_memory_mb is not None else settings.reserved_memory_mb()
        available_mb = psutil.virtual_memory().available / MB
        max_by_memory = max(1, int((available_mb - reserved) / per_worker))
        workers = min(workers, max_by_memory)
        logger.info(f"Worker scaling: memory={available_mb:.0f}MB available, cap={max_by_memory}")

    logger.info(f"Worker count: cpus={cpu_count}, multiplier={multiplier}, workers={workers}")
    return workers
