"""
Typed exception hierarchy for cgroup detection and configuration.

Every exception carries a machine-readable error_code so callers and logs can
dispatch on type instead of matching message strings. The CgroupReadError
family is raised by the low-level file helpers and converted to "unlimited"
inside the quota readers; it never reaches callers of the public accessors.
"""
import errno
from typing import Optional


class MaxprocsError(Exception):
    """
    Base exception for all maxprocs errors.

    Carries structured metadata for downstream handling:
    - error_code: Machine-readable error identifier
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code

    def __str__(self) -> str:
        """Return clean message without metadata (keeps logs readable)."""
        return super().__str__()


# ============================================================================
# Caller Errors (Raised To The Caller)
# ============================================================================

class ConfigurationError(MaxprocsError):
    """Environment configuration is invalid."""

    def __init__(self, message: str, variable: Optional[str] = None):
        super().__init__(message=message, error_code="CONFIG_ERROR")
        self.variable = variable


class InvalidRoundingError(MaxprocsError, ValueError):
    """Rounding mode passed to count() is not floor or ceil."""

    def __init__(self, value):
        super().__init__(
            message=f"Unknown rounding mode {value!r}: expected 'floor' or 'ceil'",
            error_code="INVALID_ROUNDING",
        )
        self.value = value


# ============================================================================
# Cgroup Read Errors (Always Recovered As Unlimited)
# ============================================================================

class CgroupReadError(MaxprocsError):
    """
    A cgroup control file could not be turned into a number.

    Examples:
    - File vanished between the existence check and the read
    - Container runtime masks the file (permission denied)
    - File is empty or holds something other than an integer
    """

    def __init__(self, message: str, path: str, error_code: str = "CGROUP_READ_ERROR"):
        super().__init__(message=message, error_code=error_code)
        self.path = path


class CgroupFileAbsentError(CgroupReadError):
    """Control file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            message=f"cgroup file not found: {path}",
            path=path,
            error_code="FILE_ABSENT",
        )


class CgroupPermissionError(CgroupReadError):
    """Control file exists but may not be read."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Permission denied reading cgroup file: {path}",
            path=path,
            error_code="PERMISSION_DENIED",
        )


class MalformedCgroupFileError(CgroupReadError):
    """Control file content is empty, unparsable, or rejected by the kernel."""

    def __init__(self, path: str, content: Optional[str] = None):
        detail = f" (content: {content!r})" if content is not None else ""
        super().__init__(
            message=f"Malformed cgroup file {path}{detail}",
            path=path,
            error_code="MALFORMED_CONTENT",
        )
        self.content = content


class CgroupIOError(CgroupReadError):
    """Any other I/O failure while reading a control file."""

    def __init__(self, path: str, errno_value: Optional[int] = None):
        super().__init__(
            message=f"I/O error reading cgroup file {path} (errno {errno_value})",
            path=path,
            error_code="OTHER_IO",
        )
        self.errno = errno_value


def classify_os_error(exc: OSError, path: str) -> CgroupReadError:
    """
    Map an OSError raised while reading a cgroup file onto the read taxonomy.

    Args:
        exc: The OSError raised by open()/read()
        path: The file being read

    Returns:
        The matching CgroupReadError subclass instance
    """
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return CgroupFileAbsentError(path)
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return CgroupPermissionError(path)
    if exc.errno == errno.EINVAL:
        return MalformedCgroupFileError(path)
    return CgroupIOError(path, exc.errno)


# ============================================================================
# Convenience Tuples for Catch Blocks
# ============================================================================

# Everything the quota readers convert to "unlimited"
CGROUP_READ_ERRORS = (
    CgroupFileAbsentError,
    CgroupPermissionError,
    MalformedCgroupFileError,
    CgroupIOError,
)
