"""Degree/minute/second formatting of grid line coordinates."""
import math

from .exceptions import UnsupportedFormatError

DEGREE = "degree"
MINUTE = "minute"
SECOND = "second"
PRECISIONS = (DEGREE, MINUTE, SECOND)


def hemisphere(value, is_longitude):
    """Return E/W for longitudes, N/S for latitudes and '' on the axis."""
    if value > 0:
        return "E" if is_longitude else "N"
    if value < 0:
        return "W" if is_longitude else "S"
    return ""


def split_dms(value):
    """Split an absolute coordinate into whole degrees, minutes and seconds.

    Seconds are rounded half up, so 59.5 seconds become 60.
    """
    value = abs(value)
    degrees = math.floor(value)
    minutes = math.floor((value - degrees) * 60)
    seconds = math.floor(((value - degrees) * 3600) % 60 + 0.5)
    return degrees, minutes, seconds


def format_label(value, is_longitude, precision=SECOND):
    """Format a coordinate as text with a hemisphere tag.

    Parameters
    ----------
    value : float
        Longitude or latitude in degrees.
    is_longitude : bool
        Whether ``value`` is a longitude.
    precision : str, optional
        ``"degree"``, ``"minute"`` or ``"second"``, by default ``"second"``.

    Returns
    -------
    str
        e.g. ``31°15'36"N`` for 31.26 at second precision.

    Raises
    ------
    UnsupportedFormatError
        If ``precision`` is not one of the supported levels.
    """
    if precision not in PRECISIONS:
        raise UnsupportedFormatError(f"Unsupported label format: {precision!r}")
    tag = hemisphere(value, is_longitude)
    degrees, minutes, seconds = split_dms(value)
    if precision == DEGREE:
        return f"{degrees}°{tag}"
    if precision == MINUTE:
        return f"{degrees}°{minutes}'{tag}"
    return f"{degrees}°{minutes}'{seconds}\"{tag}"
