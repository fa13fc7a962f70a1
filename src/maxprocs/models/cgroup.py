"""
Cgroup detection data models.
"""
import math
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CgroupVersion(str, Enum):
    """Which cgroup hierarchy governs the process CPU quota."""

    V1 = "v1"
    V2 = "v2"
    NONE = "none"


class Rounding(str, Enum):
    """How a fractional quota becomes a processor count."""

    FLOOR = "floor"
    CEIL = "ceil"

    def apply(self, value: float) -> int:
        if self is Rounding.CEIL:
            return math.ceil(value)
        return math.floor(value)


class CgroupSnapshot(BaseModel):
    """One detection result: the cgroup version and the CPU quota it imposes."""

    model_config = ConfigDict(frozen=True)

    version: CgroupVersion = Field(..., description="Detected cgroup version")
    quota: Optional[float] = Field(
        default=None,
        ge=0,
        description="Usable CPUs (e.g. 2.5); None means unlimited",
    )

    @field_validator("quota")
    @classmethod
    def validate_quota_finite(cls, v):
        """Reject inf/nan, which cannot be rounded to a count."""
        if v is not None and not math.isfinite(v):
            raise ValueError("quota must be finite")
        return v

    @model_validator(mode="after")
    def validate_unversioned_is_unlimited(self):
        """A process outside any cgroup cannot carry a quota."""
        if self.version is CgroupVersion.NONE and self.quota is not None:
            raise ValueError("quota must be None when cgroup version is none")
        return self

    @property
    def limited(self) -> bool:
        return self.quota is not None
