"""Exception types raised by the scene pipeline and its collaborators."""


class GeometryError(ValueError):
    """A single footprint record cannot be turned into a solid."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class InvalidGeometry(GeometryError):
    """Ring is degenerate, non-finite, or self-intersecting."""


class InvalidHeight(GeometryError):
    """Height is present but not a positive finite number."""


class InvalidBounds(ValueError):
    """Bounds region has min > max on an axis or non-finite values."""


class GeocodeError(ValueError):
    """An address could not be resolved to coordinates."""


class NotFound(LookupError):
    """Unsupported layer type or export format."""
