"""
Manifest domain entities.

Delivery metadata attached to every stored asset, together with the
classification rules used to derive it from a filename.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Pattern


class DeliveryMode(str, Enum):
    """How a loaded script is executed relative to page parsing."""

    SYNC = "sync"
    DEFER = "defer"
    ASYNC = "async"


DEFAULT_CRITICAL = False
DEFAULT_MODE = DeliveryMode.DEFER
DEFAULT_PRIORITY = 2


@dataclass(frozen=True, slots=True)
class DeliveryAttributes:
    """Delivery attributes shared by rules and manifest entries."""

    critical: bool = DEFAULT_CRITICAL
    mode: DeliveryMode = DEFAULT_MODE
    priority: int = DEFAULT_PRIORITY

    def __post_init__(self) -> None:
        if self.priority < 1:
            raise ValueError("priority must be greater than or equal to 1")


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """Delivery metadata for one physical, content-addressed asset."""

    asset_id: str
    critical: bool = DEFAULT_CRITICAL
    mode: DeliveryMode = DEFAULT_MODE
    priority: int = DEFAULT_PRIORITY

    @classmethod
    def from_attributes(
        cls, asset_id: str, attributes: DeliveryAttributes
    ) -> "ManifestEntry":
        return cls(
            asset_id=asset_id,
            critical=attributes.critical,
            mode=attributes.mode,
            priority=attributes.priority,
        )

    @property
    def attributes(self) -> DeliveryAttributes:
        return DeliveryAttributes(
            critical=self.critical, mode=self.mode, priority=self.priority
        )

    def to_document(self) -> Dict[str, Any]:
        """Serialise to the persisted / wire representation."""
        return {
            "hashed": self.asset_id,
            "critical": self.critical,
            "mode": self.mode.value,
            "priority": self.priority,
        }

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ManifestEntry":
        return cls(
            asset_id=str(document["hashed"]),
            critical=bool(document.get("critical", DEFAULT_CRITICAL)),
            mode=DeliveryMode(document.get("mode", DEFAULT_MODE.value)),
            priority=max(1, int(document.get("priority", DEFAULT_PRIORITY))),
        )


@dataclass(frozen=True, slots=True)
class Rule:
    """Classification rule; unset attributes fall back to the defaults."""

    pattern: str
    critical: Optional[bool] = None
    mode: Optional[DeliveryMode] = None
    priority: Optional[int] = None
    _compiled: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.priority is not None and self.priority < 1:
            raise ValueError("priority must be greater than or equal to 1")
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def matches(self, filename: str) -> bool:
        return self._compiled.search(filename) is not None

    def to_attributes(self) -> DeliveryAttributes:
        return DeliveryAttributes(
            critical=DEFAULT_CRITICAL if self.critical is None else self.critical,
            mode=self.mode or DEFAULT_MODE,
            priority=self.priority or DEFAULT_PRIORITY,
        )
