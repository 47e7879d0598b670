"""Content-addressed naming of stored assets."""

import hashlib
import posixpath
import re

from cdnrelay.domain.entities.errors import AssetValidationError

HASH_LENGTH = 12

_HASHED_NAME = re.compile(
    rf"^(?P<stem>.+)-(?P<digest>[0-9a-f]{{{HASH_LENGTH}}})(?P<ext>\.[^.]+)?$"
)


def validate_asset_name(name: str) -> str:
    """Reject names that could escape the asset directory."""
    if not name or name in {".", ".."}:
        raise AssetValidationError("Asset name must not be empty")
    if "/" in name or "\\" in name or "\x00" in name:
        raise AssetValidationError(
            "Asset name must not contain path separators", {"name": name}
        )
    return name


class ContentAddressedNamer:
    """
    Derive physical asset names from the uploaded content.

    A new upload of the same logical asset always gets a new name, so
    origins and browsers may cache each physical name forever.
    """

    def name_for(self, original_name: str, content: bytes) -> str:
        validate_asset_name(original_name)
        stem, ext = posixpath.splitext(original_name)
        digest = hashlib.sha256(content).hexdigest()[:HASH_LENGTH]
        return f"{stem}-{digest}{ext}"

    def logical_name(self, asset_id: str) -> str:
        """Strip the content digest, keeping stem and extension."""
        match = _HASHED_NAME.match(asset_id)
        if match is None:
            return asset_id
        return f"{match.group('stem')}{match.group('ext') or ''}"
