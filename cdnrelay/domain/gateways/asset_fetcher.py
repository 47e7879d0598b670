"""
Asset Fetcher Interface - Domain Layer

Abstraction over the act of loading one injected element from a URL.
"""

from typing import Protocol

from cdnrelay.domain.entities.asset import InjectedElement


class IAssetFetcher(Protocol):
    """Loads the resource referenced by an injected element."""

    async def fetch(self, element: InjectedElement) -> bool:
        """
        Load ``element.url``.

        Returns:
            True when the resource loaded, False on any load failure.
            Implementations must not raise for load failures.
        """
        ...
