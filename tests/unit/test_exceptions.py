"""
Unit tests for the typed exception hierarchy.

Tests exception metadata, OSError classification onto the read taxonomy,
and the convenience tuple used by the quota readers.
"""
import errno

import pytest

from maxprocs.exceptions import (
    MaxprocsError,
    ConfigurationError,
    InvalidRoundingError,
    CgroupReadError,
    CgroupFileAbsentError,
    CgroupPermissionError,
    MalformedCgroupFileError,
    CgroupIOError,
    CGROUP_READ_ERRORS,
    classify_os_error,
)

PATH = "/sys/fs/cgroup/cpu.max"


@pytest.mark.unit
class TestMaxprocsErrorMetadata:
    """Test base MaxprocsError carries correct metadata."""

    def test_error_code(self):
        err = MaxprocsError("test error", error_code="TEST_CODE")
        assert err.error_code == "TEST_CODE"

    def test_str_returns_message(self):
        """str(MaxprocsError(...)) returns message, not metadata."""
        err = MaxprocsError("test message", error_code="CODE")
        assert str(err) == "test message"

    def test_configuration_error_has_variable(self):
        err = ConfigurationError("bad", variable="MAXPROCS_LOG_LEVEL")
        assert err.error_code == "CONFIG_ERROR"
        assert err.variable == "MAXPROCS_LOG_LEVEL"

    def test_invalid_rounding_is_value_error(self):
        err = InvalidRoundingError("nearest")
        assert isinstance(err, ValueError)
        assert isinstance(err, MaxprocsError)
        assert err.value == "nearest"
        assert "nearest" in str(err)


@pytest.mark.unit
class TestCgroupReadErrors:
    """Test the read taxonomy types."""

    @pytest.mark.parametrize("err, code", [
        (CgroupFileAbsentError(PATH), "FILE_ABSENT"),
        (CgroupPermissionError(PATH), "PERMISSION_DENIED"),
        (MalformedCgroupFileError(PATH, "abc"), "MALFORMED_CONTENT"),
        (CgroupIOError(PATH, errno.EIO), "OTHER_IO"),
    ])
    def test_codes_and_path(self, err, code):
        assert isinstance(err, CgroupReadError)
        assert err.error_code == code
        assert err.path == PATH
        assert PATH in str(err)

    def test_malformed_keeps_content(self):
        err = MalformedCgroupFileError(PATH, "abc 100000")
        assert err.content == "abc 100000"
        assert "abc 100000" in str(err)

    def test_read_errors_tuple_covers_taxonomy(self):
        assert set(CGROUP_READ_ERRORS) == {
            CgroupFileAbsentError,
            CgroupPermissionError,
            MalformedCgroupFileError,
            CgroupIOError,
        }

    def test_caller_errors_not_in_read_tuple(self):
        """Caller mistakes must never be swallowed as 'unlimited'."""
        assert not isinstance(InvalidRoundingError("x"), CGROUP_READ_ERRORS)
        assert not isinstance(ConfigurationError("x"), CGROUP_READ_ERRORS)


@pytest.mark.unit
class TestClassifyOsError:
    """Test OSError to taxonomy mapping."""

    @pytest.mark.parametrize("exc, expected", [
        (FileNotFoundError(errno.ENOENT, "missing"), CgroupFileAbsentError),
        (PermissionError(errno.EACCES, "denied"), CgroupPermissionError),
        (PermissionError(errno.EPERM, "not permitted"), CgroupPermissionError),
        (OSError(errno.EINVAL, "invalid"), MalformedCgroupFileError),
        (OSError(errno.EIO, "io"), CgroupIOError),
        (IsADirectoryError(errno.EISDIR, "dir"), CgroupIOError),
    ])
    def test_mapping(self, exc, expected):
        result = classify_os_error(exc, PATH)
        assert type(result) is expected
        assert result.path == PATH

    def test_other_io_keeps_errno(self):
        result = classify_os_error(OSError(errno.EIO, "io"), PATH)
        assert result.errno == errno.EIO
