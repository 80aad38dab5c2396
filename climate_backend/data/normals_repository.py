"""Repository for climate normals access."""
from collections import OrderedDict
from pathlib import Path
from typing import Optional

from climate_backend.config import settings
from climate_pipelines.models.normals import ClimateNormals
from climate_pipelines.services.normals_store import NormalsStore


class NormalsRepository:
    """Repository for per-location normals, backed by the on-disk normals store.

    Loaded normals are kept in a bounded in-memory LRU cache keyed by the
    location's cache key. The cache belongs to the repository instance.
    """

    def __init__(self, normals_dir: Path = None, max_cache_size: int = None):
        self.store = NormalsStore(normals_dir or settings.normals_dir)
        self.max_cache_size = max_cache_size or settings.normals_cache_size
        self._cache: OrderedDict[str, ClimateNormals] = OrderedDict()

    def get(self, key: str) -> Optional[ClimateNormals]:
        """
        Get normals for a location. Results are cached in memory (LRU).

        Returns:
            ClimateNormals, or None if nothing is stored for the key
        """
        if key in self._cache:
            self._cache.move_to_end(key)
            return self._cache[key]

        normals = self.store.load(key)
        if normals is not None:
            self._remember(key, normals)
        return normals

    def put(self, key: str, normals: ClimateNormals) -> None:
        """Store normals on disk and in the cache."""
        self.store.save(key, normals)
        self._remember(key, normals)

    def _remember(self, key: str, normals: ClimateNormals) -> None:
        self._cache[key] = normals
        self._cache.move_to_end(key)
        if len(self._cache) > self.max_cache_size:
            self._cache.popitem(last=False)

    def clear_cache(self) -> None:
        self._cache.clear()
