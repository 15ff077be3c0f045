"""Process-wide identifier generator.

Ids start at 1 and increase with every call for the lifetime of the
process. The counter is never reset, so two layers never share a source,
layer or icon id.
"""
import itertools

_counter = itertools.count(1)


def unique_id():
    """Return the next unique integer id."""
    return next(_counter)


def make_icon_id():
    """Return a fresh image id for a rasterized label."""
    return f"graticule-icon-{unique_id()}"
