# src/blockfield/errors.py
"""Error kinds raised by the map generator and its configuration layer."""


class MapError(Exception):
    """Base class for every map-generation error."""


class ConfigurationError(MapError, ValueError):
    """Bad map index or invalid map parameters. Raised before any state changes."""


class OutOfBoundsError(MapError, IndexError):
    """A tile lookup outside [0,width) x [0,height)."""


class EmptyMapError(MapError, LookupError):
    """A query against a generator with no map or no open tiles."""
