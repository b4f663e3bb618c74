"""Single-slot carrier for a serialized trace header."""

from __future__ import annotations

from typing import List, Optional


class ScalarCarrier:
    """
    Carrier holding exactly one serialized trace-context value.

    Keys are ignored: whatever the propagator writes under any key replaces the
    stored value, and any key reads it back. The object matches the duck-typed
    contract of OpenTelemetry's default getter/setter, so it can be handed
    directly to ``TextMapPropagator.inject`` and ``extract``.
    """

    def __init__(self, value: Optional[str] = None) -> None:
        self._value = value or ""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._value or default

    def set(self, key: str, value: str) -> None:
        self._value = value

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value)

    def keys(self) -> List[str]:
        return [""] if self._value else []

    def value(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"ScalarCarrier({self._value!r})"
