"""
Asset loading domain entities.

These value objects model what the loader injects into a page: the kind
of element, where it is inserted and how its load ended.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from cdnrelay.domain.entities.manifest import DeliveryMode


class AssetKind(str, Enum):
    SCRIPT = "script"
    STYLESHEET = "stylesheet"

    @classmethod
    def from_filename(cls, filename: str) -> Optional["AssetKind"]:
        lowered = filename.lower()
        if lowered.endswith(".js"):
            return cls.SCRIPT
        if lowered.endswith(".css"):
            return cls.STYLESHEET
        return None


class Container(str, Enum):
    HEAD = "head"
    BODY = "body"


class LoadOutcome(str, Enum):
    LOADED = "loaded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(slots=True)
class InjectedElement:
    """A script or link element placed into a page container."""

    asset_id: str
    kind: AssetKind
    url: str
    container: Container
    defer: bool = False
    is_async: bool = False


@dataclass(slots=True)
class LoadResult:
    """Final state of one load operation."""

    asset_id: str
    outcome: LoadOutcome
    url: Optional[str] = None
    attempted_urls: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.outcome is LoadOutcome.LOADED


@dataclass(slots=True)
class PageDocument:
    """Ordered element containers standing in for a page's head and body."""

    head: List[InjectedElement] = field(default_factory=list)
    body: List[InjectedElement] = field(default_factory=list)

    def _elements(self, container: Container) -> List[InjectedElement]:
        return self.head if container is Container.HEAD else self.body

    def insert(self, element: InjectedElement, position: Optional[int] = None) -> None:
        """Insert at ``position`` or append when no position is given."""
        elements = self._elements(element.container)
        if position is None:
            elements.append(element)
        else:
            elements.insert(position, element)

    def remove(self, element: InjectedElement) -> None:
        elements = self._elements(element.container)
        for index, candidate in enumerate(elements):
            if candidate is element:
                del elements[index]
                return


def script_flags(mode: DeliveryMode) -> tuple[bool, bool]:
    """Return ``(defer, async)`` flags for a script delivered with ``mode``."""
    if mode is DeliveryMode.DEFER:
        return True, False
    if mode is DeliveryMode.ASYNC:
        return False, True
    return False, False
