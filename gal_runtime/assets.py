"""Asset resolver: maps asset ids referenced by steps to fetchable locations.

The resolver owns no asset bytes, only the id -> relative path manifest and
the root directory the paths are relative to. Results are memoized, so the
one filesystem check per id happens on first use and every later resolve is
a dict lookup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping
from urllib.parse import quote

from .errors import AssetNotFound

logger = logging.getLogger(__name__)


class AssetResolver:
    """Resolve asset ids against a manifest.

    Args:
        root:     Directory the manifest paths are relative to.
        manifest: Asset id -> path relative to root.
        base_url: When set, locations are "{base_url}/{quoted path}" (for
                  serving over HTTP); otherwise absolute file paths.
    """

    def __init__(
        self,
        root: Path,
        manifest: Mapping[str, str],
        base_url: str | None = None,
    ) -> None:
        self._root = root.resolve()
        self._manifest = dict(manifest)
        self._base_url = base_url.rstrip("/") if base_url is not None else None
        self._cache: dict[str, str] = {}

    @property
    def root(self) -> Path:
        return self._root

    def with_base_url(self, base_url: str | None) -> AssetResolver:
        return AssetResolver(self._root, self._manifest, base_url)

    def resolve(self, asset_id: str) -> str:
        cached = self._cache.get(asset_id)
        if cached is not None:
            return cached

        rel = self._manifest.get(asset_id)
        if rel is None:
            raise AssetNotFound(f"Asset {asset_id!r} is not declared by the project")
        path = (self._root / rel).resolve()
        if not path.is_relative_to(self._root) or not path.is_file():
            raise AssetNotFound(f"Asset {asset_id!r} has no file at {rel!r}")

        if self._base_url is not None:
            rel_posix = path.relative_to(self._root).as_posix()
            location = f"{self._base_url}/{quote(rel_posix)}"
        else:
            location = str(path)
        logger.debug("resolved asset %s -> %s", asset_id, location)
        self._cache[asset_id] = location
        return location
