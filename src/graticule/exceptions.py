"""Exceptions raised by the graticule package."""


class GraticuleError(Exception):
    pass


class UnsupportedUnitError(GraticuleError, ValueError):
    """Raised when an interval unit is neither degree nor arcminute."""
    pass


class UnsupportedFormatError(GraticuleError, ValueError):
    """Raised when a label precision is not degree, minute or second."""
    pass


class InvalidHostError(GraticuleError):
    """Raised when a layer is attached to no host, or used while detached."""
    pass
