"""Core geometry algorithms for laseroutline.

This module contains the core algorithms for:

- Path tokenizing and flattening (SVG path data to polygon rings)
- Polygon booleans under the non-zero fill rule
- Round-join offsetting
- Outline composition (silhouette, outline, keyring, recentering)
- Polygon backend lifecycle and result caching

Geometry is synchronous and deterministic. The only shared state is the
backend handle and result cache owned by BackendLifecycleService, which the
application creates once and passes to the engines.

Key functions:
- tokenize: Split path data into PathCommands
- flatten: Convert path data into a PolygonSet
- recenter: Move geometry so its bounding box starts at a margin
- circle_polygon / rect_polygon: Primitive rings

Key classes:
- BooleanEngine: Union and difference
- OffsetEngine: Grow or shrink regions with round joins
- OutlineComposer: Runs the full build pipeline
- BackendLifecycleService: Single-flight backend loading plus LRU cache
"""

from laseroutline.core.backend import (
    GeometryBackend,
    PolygonBooleanBackend,
    PolygonOffsetBackend,
)
from laseroutline.core.boolean import BooleanEngine
from laseroutline.core.composer import OutlineComposer, fallback_result
from laseroutline.core.flattener import flatten, flatten_commands
from laseroutline.core.geometry import (
    combined_bounds,
    recenter,
    set_winding_number,
    winding_number,
)
from laseroutline.core.lifecycle import (
    BackendLifecycleService,
    GeometryCache,
    GeometryCacheKey,
    load_shapely_backend,
)
from laseroutline.core.offset import OffsetEngine, quad_segments_for
from laseroutline.core.primitives import circle_polygon, rect_polygon
from laseroutline.core.tokenizer import tokenize

__all__ = [
    # Lifecycle
    "BackendLifecycleService",
    # Engines
    "BooleanEngine",
    "GeometryBackend",
    "GeometryCache",
    "GeometryCacheKey",
    "OffsetEngine",
    "OutlineComposer",
    # Backend protocols
    "PolygonBooleanBackend",
    "PolygonOffsetBackend",
    "circle_polygon",
    "combined_bounds",
    "fallback_result",
    # Path functions
    "flatten",
    "flatten_commands",
    "load_shapely_backend",
    "quad_segments_for",
    "recenter",
    "rect_polygon",
    "set_winding_number",
    "tokenize",
    "winding_number",
]
