from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

from .repository import AssetStore

logger = logging.getLogger(__name__)


def asset_path_from_ref(ref: str) -> str:
    """Storage path of an asset reference.

    A reference is either a relative path (``selfies/u1/a.jpg``) or a storage
    download URL whose object path sits URL-encoded after ``/o/``.
    """
    ref = (ref or "").strip()
    if "://" not in ref:
        return ref.lstrip("/")
    path = urlparse(ref).path
    if "/o/" not in path:
        raise ValueError(f"Unrecognised asset URL: {ref!r}")
    return unquote(path.split("/o/", 1)[1])


class LocalAssetStore(AssetStore):
    """Assets kept as files below a root directory."""

    def __init__(self, root: str | Path):
        self._root = Path(root).resolve()

    def delete_asset(self, ref: str) -> None:
        target = (self._root / asset_path_from_ref(ref)).resolve()
        if self._root not in target.parents:
            raise ValueError(f"Asset outside of store root: {ref!r}")
        target.unlink()
        logger.info("Deleted asset %s", target.relative_to(self._root))
