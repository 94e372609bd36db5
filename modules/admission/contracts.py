"""
Data contracts for the admission cache.
"""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class AdmissionConfig:
    """Configuration for the admission cache.

    Attributes:
        window_sec: Seconds a verified (credential, origin) pair stays trusted (default 120)
    """
    window_sec: float = 120.0

    def __post_init__(self):
        """Validate configuration."""
        if self.window_sec <= 0:
            raise ValueError(f"window_sec must be positive, got {self.window_sec}")


@dataclass(frozen=True)
class AdmissionRecord:
    """A previously verified credential bound to the origin that presented it."""
    credential: str
    origin: str
    issued_at: float


@dataclass
class AdmissionStats:
    """Counters for admission cache activity.

    Attributes:
        lookups: Total number of admission checks
        hits: Checks admitted from a live record
        misses: Checks that fell back to external verification
        verifications: Successful external verifications
        rejections: Failed external verifications
        purged: Records removed after their window elapsed
    """
    lookups: int = 0
    hits: int = 0
    misses: int = 0
    verifications: int = 0
    rejections: int = 0
    purged: int = 0

    @property
    def hit_rate(self) -> float:
        """Fraction of checks served without external verification."""
        return self.hits / self.lookups if self.lookups > 0 else 0.0

    def as_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary for reporting."""
        return {
            "lookups": self.lookups,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "verifications": self.verifications,
            "rejections": self.rejections,
            "purged": self.purged,
        }
