"""Backend lifecycle and geometry result caching.

BackendLifecycleService owns the single live handle to the polygon backend
and the LRU cache of boolean/offset results. It is constructed once by the
application root and passed to the engines; nothing here is module-global.

Initialization is single-flight: the first caller runs the loader and
publishes a shared Future, concurrent callers wait on that same Future. A
failed load clears the Future so a later call can retry.
"""

import hashlib
import importlib
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any

import structlog

from laseroutline.core.backend import GeometryBackend
from laseroutline.domain import PolygonSet
from laseroutline.exceptions import BackendInitError, BackendNotReadyError

logger = structlog.get_logger(__name__)

DEFAULT_CACHE_CAPACITY = 300

# Coordinates are rounded to this many decimals (1e-9 mm) when fingerprinting
FINGERPRINT_DECIMALS = 9


def fingerprint(polygons: PolygonSet) -> str:
    """Stable hash of a polygon set's coordinates."""
    digest = hashlib.sha1()
    for polygon in polygons:
        for point in polygon:
            digest.update(
                f"{round(point.x, FINGERPRINT_DECIMALS)!r},"
                f"{round(point.y, FINGERPRINT_DECIMALS)!r};".encode()
            )
        digest.update(b"|")
    return digest.hexdigest()


@dataclass(frozen=True, slots=True)
class GeometryCacheKey:
    """Cache key for one geometry operation.

    Attributes:
        operation: Operation name, including any scalar parameters
        operands: Fingerprints of the operand polygon sets, in order
        tolerance: Tolerance the operation was run with
    """

    operation: str
    operands: tuple[str, ...]
    tolerance: float = 0.0

    @classmethod
    def build(
        cls, operation: str, operands: Sequence[PolygonSet], tolerance: float = 0.0
    ) -> "GeometryCacheKey":
        """Fingerprint the operands and assemble a key."""
        return cls(
            operation=operation,
            operands=tuple(fingerprint(p) for p in operands),
            tolerance=tolerance,
        )

    @property
    def digest(self) -> str:
        """Stable SHA-1 of the key's canonical text form."""
        text = f"{self.operation}|{','.join(self.operands)}|{self.tolerance!r}"
        return hashlib.sha1(text.encode()).hexdigest()


class GeometryCache:
    """Bounded least-recently-used cache of geometry results.

    Purely an optimization: callers recompute on a miss, so results never
    depend on what happens to be cached.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        self.capacity = capacity
        self._entries: OrderedDict[str, PolygonSet] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: GeometryCacheKey) -> bool:
        return key.digest in self._entries

    def get(self, key: GeometryCacheKey) -> PolygonSet | None:
        """Look up a result and mark it most recently used."""
        digest = key.digest
        with self._lock:
            value = self._entries.get(digest)
            if value is None:
                self.misses += 1
                return None
            self._entries.move_to_end(digest)
            self.hits += 1
            return value

    def set(self, key: GeometryCacheKey, value: PolygonSet) -> None:
        """Store a result, evicting the least recently used past capacity."""
        digest = key.digest
        with self._lock:
            self._entries[digest] = value
            self._entries.move_to_end(digest)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)
                self.evictions += 1

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
            self.evictions = 0

    def stats(self) -> dict[str, Any]:
        return {
            "size": len(self._entries),
            "capacity": self.capacity,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }


def load_shapely_backend() -> GeometryBackend:
    """Import the GEOS kernel and construct the production backend.

    Raises:
        BackendInitError: If shapely (or its GEOS library) cannot be loaded
    """
    try:
        module = importlib.import_module("laseroutline.core.shapely_backend")
    except ImportError as e:
        raise BackendInitError(f"shapely is not available ({e})") from e
    return module.ShapelyBackend()


class BackendLifecycleService:
    """Memoized, single-flight access to the polygon backend plus a result cache.

    Example:
        service = BackendLifecycleService()
        backend = service.ensure_ready()
        composer = OutlineComposer(service)
    """

    def __init__(
        self,
        loader: Callable[[], GeometryBackend] = load_shapely_backend,
        cache_capacity: int = DEFAULT_CACHE_CAPACITY,
    ) -> None:
        """Initialize the service without loading anything.

        Args:
            loader: Zero-argument callable returning a ready backend
            cache_capacity: Maximum number of cached geometry results
        """
        self._loader = loader
        self._lock = threading.Lock()
        self._future: Future[GeometryBackend] | None = None
        self._backend: GeometryBackend | None = None
        self.cache = GeometryCache(cache_capacity)
        self.load_count = 0

    def is_ready(self) -> bool:
        """True once a backend has been loaded successfully."""
        return self._backend is not None

    @property
    def backend(self) -> GeometryBackend:
        """The loaded backend.

        Raises:
            BackendNotReadyError: If ensure_ready() has not completed
        """
        if self._backend is None:
            raise BackendNotReadyError()
        return self._backend

    def ensure_ready_future(self) -> "Future[GeometryBackend]":
        """Start loading if nobody has, and return the shared Future.

        The caller that creates the Future runs the loader in its own thread;
        every other caller gets the same Future back immediately.
        """
        with self._lock:
            future = self._future
            if future is not None:
                return future
            future = Future()
            self._future = future
            self.load_count += 1

        self._load(future)
        return future

    def ensure_ready(self) -> GeometryBackend:
        """Block until the backend is ready and return it.

        Raises:
            BackendInitError: If the loader failed
        """
        if self._backend is not None:
            return self._backend
        return self.ensure_ready_future().result()

    def reset(self) -> None:
        """Forget the backend, any in-flight load and all cached results."""
        with self._lock:
            self._future = None
            self._backend = None
        self.cache.clear()

    def _load(self, future: "Future[GeometryBackend]") -> None:
        start_time = time.time()
        try:
            backend = self._loader()
        except Exception as e:
            error = e if isinstance(e, BackendInitError) else BackendInitError(str(e))
            with self._lock:
                if self._future is future:
                    self._future = None
            logger.error("Polygon backend failed to load", error=str(e))
            future.set_exception(error)
            return

        with self._lock:
            if self._future is future:
                self._backend = backend
        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Polygon backend ready",
            backend=getattr(backend, "name", type(backend).__name__),
            duration_ms=round(duration_ms, 2),
        )
        future.set_result(backend)
