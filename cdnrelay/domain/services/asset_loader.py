"""
Manifest-driven asset loading with origin failover.

Critical entries are loaded one at a time in manifest order; a critical
load never starts before the previous one has finished. Optional entries
are started together afterwards and are not ordered relative to each
other.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from cdnrelay.domain.entities.asset import (
    AssetKind,
    Container,
    InjectedElement,
    LoadOutcome,
    LoadResult,
    PageDocument,
    script_flags,
)
from cdnrelay.domain.entities.manifest import ManifestEntry
from cdnrelay.domain.gateways.asset_fetcher import IAssetFetcher


def candidate_urls(
    asset_id: str, origin: Optional[str], local_fallback_base: str
) -> List[str]:
    """Ordered URLs to try for one asset: origin first, local fallback last."""
    local = f"{local_fallback_base.rstrip('/')}/{asset_id}"
    if not origin:
        return [local]
    return [f"{origin.rstrip('/')}/{asset_id}", local]


class AssetLoader:
    """Injects manifest entries into a page document."""

    def __init__(
        self,
        fetcher: IAssetFetcher,
        local_fallback_base: str,
        document: Optional[PageDocument] = None,
    ) -> None:
        self._fetcher = fetcher
        self._local_fallback_base = local_fallback_base
        self.document = document or PageDocument()
        # Number of critical elements already placed at the front of the body.
        self._front = 0
        self._optional_tasks: List[asyncio.Task[LoadResult]] = []

    async def load(
        self, origin: Optional[str], entries: Sequence[ManifestEntry]
    ) -> List[LoadResult]:
        """
        Load every critical entry in order, then start the optional ones.

        Returns the critical results; optional loads keep running in the
        background and are collected with :meth:`wait_optional`.
        """
        critical = [entry for entry in entries if entry.critical]
        optional = [entry for entry in entries if not entry.critical]

        results: List[LoadResult] = []
        for entry in critical:
            results.append(await self.load_entry(origin, entry))

        for entry in optional:
            self._optional_tasks.append(
                asyncio.create_task(self.load_entry(origin, entry))
            )
        return results

    async def wait_optional(self) -> List[LoadResult]:
        tasks, self._optional_tasks = self._optional_tasks, []
        if not tasks:
            return []
        return list(await asyncio.gather(*tasks))

    async def load_entry(
        self, origin: Optional[str], entry: ManifestEntry
    ) -> LoadResult:
        """Try each candidate URL until one loads; never raises on failure."""
        kind = AssetKind.from_filename(entry.asset_id)
        if kind is None:
            return LoadResult(asset_id=entry.asset_id, outcome=LoadOutcome.SKIPPED)

        attempted: List[str] = []
        for url in candidate_urls(entry.asset_id, origin, self._local_fallback_base):
            attempted.append(url)
            element = self._build_element(entry, kind, url)
            self._inject(entry, element)
            try:
                loaded = await self._fetcher.fetch(element)
            except Exception:  # a broken fetcher counts as a failed load
                loaded = False
            if loaded:
                return LoadResult(
                    asset_id=entry.asset_id,
                    outcome=LoadOutcome.LOADED,
                    url=url,
                    attempted_urls=attempted,
                )
            self._eject(entry, element)

        return LoadResult(
            asset_id=entry.asset_id,
            outcome=LoadOutcome.FAILED,
            attempted_urls=attempted,
        )

    def _build_element(
        self, entry: ManifestEntry, kind: AssetKind, url: str
    ) -> InjectedElement:
        if kind is AssetKind.STYLESHEET:
            return InjectedElement(
                asset_id=entry.asset_id,
                kind=kind,
                url=url,
                container=Container.HEAD,
            )
        defer, is_async = script_flags(entry.mode)
        return InjectedElement(
            asset_id=entry.asset_id,
            kind=kind,
            url=url,
            container=Container.BODY,
            defer=defer,
            is_async=is_async,
        )

    def _inject(self, entry: ManifestEntry, element: InjectedElement) -> None:
        if element.kind is AssetKind.SCRIPT and entry.critical:
            self.document.insert(element, position=self._front)
            self._front += 1
        else:
            self.document.insert(element)

    def _eject(self, entry: ManifestEntry, element: InjectedElement) -> None:
        self.document.remove(element)
        if element.kind is AssetKind.SCRIPT and entry.critical:
            self._front -= 1
