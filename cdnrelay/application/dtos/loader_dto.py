"""DTOs summarising one loader session."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from cdnrelay.domain.entities.asset import LoadOutcome, LoadResult


class LoadResultDTO(BaseModel):
    asset_id: str
    outcome: LoadOutcome
    url: Optional[str] = None
    attempted_urls: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: LoadResult) -> "LoadResultDTO":
        return cls(
            asset_id=result.asset_id,
            outcome=result.outcome,
            url=result.url,
            attempted_urls=list(result.attempted_urls),
        )


class PageLoadReportDTO(BaseModel):
    """Outcome of loading every manifest entry for one page."""

    origin: Optional[str] = Field(
        default=None, description="Preferred origin, or None for local only"
    )
    critical: List[LoadResultDTO] = Field(default_factory=list)
    optional: List[LoadResultDTO] = Field(default_factory=list)

    @property
    def failed(self) -> List[LoadResultDTO]:
        return [
            result
            for result in [*self.critical, *self.optional]
            if result.outcome is LoadOutcome.FAILED
        ]
