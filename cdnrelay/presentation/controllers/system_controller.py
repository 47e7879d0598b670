"""System endpoints exposing origin health, selection and the status stream."""

from typing import AsyncGenerator, AsyncIterator

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from cdnrelay.application.dtos.health_dto import AliveOriginDTO, SystemHealthDTO
from cdnrelay.application.use_cases.health_use_cases import (
    GetAliveOriginUseCase,
    GetHealthStatusUseCase,
    StreamOriginStatusUseCase,
)
from cdnrelay.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.get("/health", response_model=SystemHealthDTO)
@inject
async def health(
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """Return the aggregated health of the configured origins."""
    try:
        health_status = await get_health_status_use_case.execute()
        logger.debug("health.check.success", status=health_status.status.value)
        return health_status
    except Exception as exc:  # pragma: no cover
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve origin health status",
        ) from exc


@router.get("/api/alive-cdn.json", response_model=AliveOriginDTO)
@inject
async def alive_cdn(
    get_alive_origin_use_case: GetAliveOriginUseCase = Depends(
        Provide["get_alive_origin_use_case"]
    ),
) -> AliveOriginDTO:
    """Return the base URL of the first healthy origin in priority order."""
    alive = await get_alive_origin_use_case.execute()
    logger.debug("origin.selected", url=alive.url)
    return alive


async def _event_stream(
    payloads: AsyncGenerator[str, None],
) -> AsyncIterator[str]:
    try:
        async for payload in payloads:
            yield f"data: {payload}\n\n"
    finally:
        # Ends the subscription when the client disconnects.
        await payloads.aclose()


@router.get("/sse")
@inject
async def status_stream(
    stream_origin_status_use_case: StreamOriginStatusUseCase = Depends(
        Provide["stream_origin_status_use_case"]
    ),
) -> StreamingResponse:
    """Server-sent events carrying the origin status table on every change."""
    logger.info("sse.client.connected")
    return StreamingResponse(
        _event_stream(stream_origin_status_use_case.execute()),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
