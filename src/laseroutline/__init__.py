"""Laseroutline - Turn vector artwork into laser-safe cut outlines.

Laseroutline flattens SVG path data (glyph outlines, icon paths, traced logos)
into polygons, unions them into a single silhouette, grows that silhouette by a
clearance offset with round joins, optionally fuses a keyring loop, and
serializes the result back to SVG path data for the cut and engrave layers.

Example:
    $ laseroutline build keychain.json -o keychain.svg

This will write keychain.svg with a CUT layer (outline + ring) and an
ENGRAVE layer (the original artwork).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
