"""Exception hierarchy for the clustering library."""


class MedoidsError(Exception):
    """Base class for all library errors."""


class InvalidArgumentError(MedoidsError, ValueError):
    """Raised when an entry point receives arguments it cannot work with."""


class PointNotFoundError(MedoidsError, KeyError):
    """Raised when a dissimilarity is requested for an unknown point."""

    def __init__(self, point):
        super().__init__(point)
        self.point = point

    def __str__(self):
        return f"Point {self.point!r} is not part of the dissimilarity cache"


class AsymmetricDistanceError(InvalidArgumentError):
    """Raised when symmetry validation finds d(x, y) != d(y, x)."""

    def __init__(self, x, y, forward: float, backward: float):
        super().__init__(
            f"Distance function is not symmetric: d({x!r}, {y!r}) = {forward} "
            f"but d({y!r}, {x!r}) = {backward}"
        )
        self.x = x
        self.y = y
        self.forward = forward
        self.backward = backward
