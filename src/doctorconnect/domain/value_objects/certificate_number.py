"""
Certificate number value object.
Format: CERT-{BASE36_MILLIS}-{BASE36_RANDOM}
"""

import os
import re
import time
from dataclasses import dataclass
from typing import Any, Optional

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_PATTERN = re.compile(r"^CERT-[0-9A-Z]+-[0-9A-Z]+$")
_RANDOM_BYTES = 5


def to_base36(value: int) -> str:
    """Upper-case base36 rendering of a non-negative integer."""
    if value < 0:
        raise ValueError("base36 value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


@dataclass(frozen=True)
class CertificateNumber:
    """Immutable certificate number value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate certificate number format."""
        if not self.value:
            raise ValueError("Certificate number cannot be empty")
        if not _PATTERN.match(self.value):
            raise ValueError(f"Invalid certificate number format: {self.value}")

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CertificateNumber):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    @classmethod
    def generate(cls, timestamp_ms: Optional[int] = None) -> "CertificateNumber":
        """Timestamp prefix keeps numbers roughly time-ordered; the random
        suffix separates numbers minted in the same millisecond."""
        if timestamp_ms is None:
            timestamp_ms = time.time_ns() // 1_000_000
        suffix = int.from_bytes(os.urandom(_RANDOM_BYTES), "big")
        return cls(f"CERT-{to_base36(timestamp_ms)}-{to_base36(suffix)}")

    @classmethod
    def from_string(cls, value: str) -> "CertificateNumber":
        return cls(value.strip().upper())
