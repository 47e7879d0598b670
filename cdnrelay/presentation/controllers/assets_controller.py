"""
Assets Router - Presentation Layer

This module defines the FastAPI routers for asset storage, the delivery
manifest and asset downloads.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Response,
    UploadFile,
    status,
)

from cdnrelay.application.dtos.manifest_dto import (
    AssetFileDTO,
    AssetUploadDTO,
    ManifestEntryDTO,
)
from cdnrelay.application.use_cases.asset_use_cases import (
    DeleteAssetUseCase,
    GetAssetContentUseCase,
    GetManifestUseCase,
    ListAssetsUseCase,
    RebuildManifestUseCase,
    UploadAssetUseCase,
)
from cdnrelay.domain.entities.errors import (
    AssetNotFoundError,
    AssetStorageError,
    AssetValidationError,
)
from cdnrelay.domain.entities.manifest import DeliveryMode
from cdnrelay.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Assets"])

# Registered last: serves assets from the site root as the loader's
# local fallback, so it must not shadow any other route.
fallback_router = APIRouter(tags=["Assets"])


@router.get("/api/manifest.json", response_model=List[ManifestEntryDTO])
@router.get("/manifest.json", response_model=List[ManifestEntryDTO])
@inject
async def get_manifest(
    get_manifest_use_case: GetManifestUseCase = Depends(
        Provide["get_manifest_use_case"]
    ),
) -> List[ManifestEntryDTO]:
    """Return the delivery manifest in manifest order."""
    return await get_manifest_use_case.execute()


@router.post("/api/manifest/rebuild", response_model=List[ManifestEntryDTO])
@inject
async def rebuild_manifest(
    rebuild_manifest_use_case: RebuildManifestUseCase = Depends(
        Provide["rebuild_manifest_use_case"]
    ),
) -> List[ManifestEntryDTO]:
    """
    Re-derive every manifest entry from the stored files.

    Use after files were removed from the asset directory out of band.
    """
    try:
        return await rebuild_manifest_use_case.execute()
    except OSError as e:
        logger.error("manifest.rebuild.failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get("/api/assets", response_model=List[AssetFileDTO])
@inject
async def list_assets(
    list_assets_use_case: ListAssetsUseCase = Depends(Provide["list_assets_use_case"]),
) -> List[AssetFileDTO]:
    """List the stored asset files."""
    return await list_assets_use_case.execute()


@router.post(
    "/api/assets",
    response_model=ManifestEntryDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def upload_asset(
    file: UploadFile = File(..., description="Asset to store"),
    critical: Optional[bool] = Form(None),
    mode: Optional[DeliveryMode] = Form(None),
    priority: Optional[int] = Form(None, ge=1),
    upload_asset_use_case: UploadAssetUseCase = Depends(
        Provide["upload_asset_use_case"]
    ),
) -> ManifestEntryDTO:
    """
    Upload or replace an asset.

    The file is stored under a content-addressed name and any older
    version of the same logical asset is removed. Attributes that are not
    given are derived from the classification rules.
    """
    content = await file.read()
    overrides = AssetUploadDTO(critical=critical, mode=mode, priority=priority)
    try:
        return await upload_asset_use_case.execute(
            filename=file.filename or "", content=content, overrides=overrides
        )
    except AssetValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AssetStorageError as e:
        logger.error("assets.upload.failed", filename=file.filename, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.delete("/api/assets/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_asset(
    asset_id: str,
    delete_asset_use_case: DeleteAssetUseCase = Depends(
        Provide["delete_asset_use_case"]
    ),
) -> Response:
    """Delete a stored asset and its manifest entry."""
    try:
        await delete_asset_use_case.execute(asset_id)
    except AssetNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AssetValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _serve_asset(
    asset_id: str, get_asset_content_use_case: GetAssetContentUseCase
) -> Response:
    try:
        content, media_type = await get_asset_content_use_case.execute(asset_id)
    except (AssetNotFoundError, AssetValidationError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(content=content, media_type=media_type)


@router.get("/files/{asset_id}")
@inject
async def download_asset(
    asset_id: str,
    get_asset_content_use_case: GetAssetContentUseCase = Depends(
        Provide["get_asset_content_use_case"]
    ),
) -> Response:
    """Download a stored asset."""
    return await _serve_asset(asset_id, get_asset_content_use_case)


@fallback_router.get("/{asset_id}")
@inject
async def serve_local_fallback(
    asset_id: str,
    get_asset_content_use_case: GetAssetContentUseCase = Depends(
        Provide["get_asset_content_use_case"]
    ),
) -> Response:
    """Serve an asset from the site root for the loader's local fallback."""
    return await _serve_asset(asset_id, get_asset_content_use_case)
