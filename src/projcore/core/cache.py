"""
Injectable cache of constructed coordinate reference systems.

Building a CRS is cheap compared with loading its grids, but callers that
resolve the same definition from many threads still want it built once.
Each key maps to a Future, so concurrent callers for the same key wait on a
single computation instead of racing.
"""

import logging
import threading
from collections import OrderedDict
from concurrent.futures import Future
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from projcore.core.config import settings
from projcore.core.crs import CoordinateReferenceSystem, create_crs
from projcore.core.datum.datum import Datum
from projcore.core.logging_config import LogContext
from projcore.utils.logging import PerformanceTimer

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, ...]


class CRSCache:
    """
    Thread-safe CRS cache keyed on a normalized parameter list.

    ``"+proj=utm +zone=36"`` and ``"+zone=36  +proj=utm"`` share an entry.
    Failed computations are not cached. The oldest entries are evicted once
    ``max_entries`` is exceeded.

    Attributes:
        max_entries: Maximum number of cached systems
    """

    def __init__(self, max_entries: Optional[int] = None):
        """
        Initialize CRSCache.

        Args:
            max_entries: Capacity, defaults to ``settings.crs_cache_max_entries``

        Raises:
            ValueError: If max_entries is not positive
        """
        self.max_entries = settings.crs_cache_max_entries if max_entries is None else max_entries
        if self.max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {self.max_entries}")
        self._lock = threading.Lock()
        self._entries: "OrderedDict[CacheKey, Future[CoordinateReferenceSystem]]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def normalize_key(params: Union[str, Iterable[str]]) -> CacheKey:
        """Split on whitespace and sort, so token order and spacing do not matter."""
        if isinstance(params, str):
            tokens = params.split()
        else:
            tokens = [token for param in params for token in str(param).split()]
        return tuple(sorted(tokens))

    def get_or_create(
        self,
        params: Union[str, Iterable[str]],
        factory: Callable[[], CoordinateReferenceSystem],
    ) -> CoordinateReferenceSystem:
        """
        Return the cached CRS for ``params``, building it with ``factory`` once.

        Args:
            params: Parameter string or list identifying the system
            factory: Builds the system on a miss

        Returns:
            The cached or newly built system

        Raises:
            Exception: Whatever ``factory`` raised; the entry is not kept
        """
        key = self.normalize_key(params)
        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if future is None:
                self._misses += 1
                future = Future()
                self._entries[key] = future
                self._evict()
            else:
                self._hits += 1
                self._entries.move_to_end(key)

        if not owner:
            return future.result()

        try:
            with LogContext(crs_key=" ".join(key)), PerformanceTimer("crs_cache_miss"):
                crs = factory()
        except Exception as exc:
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            future.set_exception(exc)
            raise
        future.set_result(crs)
        return crs

    def create(
        self,
        name: str,
        projection_name: str,
        datum: Optional[Datum] = None,
        **params: Any,
    ) -> CoordinateReferenceSystem:
        """
        Cached equivalent of ``create_crs``.

        Example:
            cache = CRSCache()
            utm = cache.create("EPSG:32636", "utm", zone=36)
            assert cache.create("EPSG:32636", "utm", zone=36) is utm
        """
        tokens = [f"+proj={projection_name}", f"+title={name}"]
        tokens.extend(f"+{key}={value}" for key, value in params.items())
        if datum is not None:
            grids = ",".join(grid.name for grid in datum.grids)
            tokens.append(
                f"+datum={datum.name}|{datum.ellipsoid.a}|{datum.ellipsoid.es}"
                f"|{datum.towgs84}|{grids}"
            )
        key = [token.replace(" ", "_") for token in tokens]
        return self.get_or_create(
            key, lambda: create_crs(name, projection_name, datum, **params)
        )

    def _evict(self) -> None:
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted CRS cache entry %s", " ".join(evicted))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """Drop every cached system."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.info("CRS cache cleared")

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_entries": self.max_entries,
                "hits": self._hits,
                "misses": self._misses,
            }
