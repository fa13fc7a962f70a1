"""
Shared pytest fixtures for the test suite.

Provides:
- cgroup_tree: Function-scoped fake cgroup filesystem under tmp_path
- make_detector: Builds a QuotaDetector over the fake tree with a fixed host count
- reset_detector_singleton: Autouse fixture to reset the default detector after each test
- clean_env: Autouse fixture removing MAXPROCS_* variables from the environment
"""
import os
from pathlib import Path

import pytest

from maxprocs import QuotaDetector, reset_detector
from maxprocs.cgroup import CgroupPaths


class CgroupTree:
    """Writes cgroup control files under a temporary root."""

    def __init__(self, root):
        self.root = root
        self.paths = CgroupPaths.rooted_at(root)

    def write(self, path: str, content: str):
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    def v2(self, cpu_max: str = None):
        """Lay out a v2 host; cpu.max is written only when content is given."""
        self.write(self.paths.proc_cgroup, "0::/\n")
        self.write(self.paths.v2_controllers, "cpuset cpu io memory pids\n")
        if cpu_max is not None:
            self.write(self.paths.v2_cpu_max, cpu_max)
        return self

    def v1(self, quota: str = None, period: str = None):
        """Lay out a v1 host; the quota file is the v1 marker."""
        self.write(self.paths.proc_cgroup, "4:cpu,cpuacct:/docker/abc\n")
        self.write(self.paths.v1_quota, quota if quota is not None else "-1\n")
        if period is not None:
            self.write(self.paths.v1_period, period)
        return self


@pytest.fixture
def cgroup_tree(tmp_path):
    """Empty fake cgroup filesystem rooted at tmp_path."""
    return CgroupTree(tmp_path)


@pytest.fixture
def make_detector(cgroup_tree):
    """Factory for detectors reading the fake tree; host count defaults to 4."""
    def _make(host_count: int = 4):
        return QuotaDetector(paths=cgroup_tree.paths, host_cpu_count=lambda: host_count)
    return _make


@pytest.fixture(autouse=True)
def reset_detector_singleton():
    """Reset the default detector after each test to avoid cross-test contamination."""
    yield
    reset_detector()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's MAXPROCS_* settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("MAXPROCS_") or name.startswith("EXPECTED_"):
            monkeypatch.delenv(name, raising=False)
