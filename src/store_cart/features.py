"""Feature flag evaluation."""

from __future__ import annotations

from typing import Iterable, Protocol

AUTOMATIC_PROMOTIONS_FLAG = "FEATURE_NEXT_10058"


class FeatureChecker(Protocol):
    def is_active(self, name: str) -> bool: ...


class FeatureFlags:
    """A fixed set of active feature flags."""

    def __init__(self, active: Iterable[str] = ()) -> None:
        self._active = frozenset(name.strip() for name in active if name.strip())

    @classmethod
    def from_string(cls, value: str) -> FeatureFlags:
        """Parse a comma-separated flag list such as ``"FEATURE_NEXT_10058,FOO"``."""
        return cls(value.split(","))

    @property
    def active(self) -> frozenset[str]:
        return self._active

    def is_active(self, name: str) -> bool:
        return name in self._active
