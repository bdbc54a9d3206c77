"""File name to asset type classification.

Whole file names that the game treats specially are matched first, exactly
and case-sensitively; everything else falls back to a case-insensitive
extension lookup. A file literally named ``path.dat`` is therefore always a
``Path`` asset, whatever an extension rule might say about ``.dat``.
"""

from __future__ import annotations

from .types import AssetType

__all__ = ["SPECIAL_FILE_NAMES", "EXTENSION_TYPES", "classify", "is_texture"]

SPECIAL_FILE_NAMES = {
    "path.dat": AssetType.PATH,
    "sky.obj": AssetType.OBJECT,
    "heightmap.hmp": AssetType.HEIGHT_MAP,
    "animate.dat": AssetType.ANIMATION,
    "carproperty.dat": AssetType.CAR_PROPERTY,
}

EXTENSION_TYPES = {
    "box": AssetType.BOX,
    "map": AssetType.MAP,
    "png": AssetType.TEXTURE,
    "jpg": AssetType.TEXTURE,
}


def classify(file_name: str) -> AssetType:
    special = SPECIAL_FILE_NAMES.get(file_name)
    if special is not None:
        return special
    _, dot, ext = file_name.lower().rpartition(".")
    if not dot:
        return AssetType.UNKNOWN
    return EXTENSION_TYPES.get(ext, AssetType.UNKNOWN)


def is_texture(file_name: str) -> bool:
    return classify(file_name).is_texture
