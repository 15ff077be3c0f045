"""Immutable graticule layer options."""
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping

from . import config
from .grid import WORLD_BOUNDS, Bounds, normalize_unit
from .labels import PRECISIONS
from .exceptions import UnsupportedFormatError
from .styles import DEFAULT_STYLES, merge_style

STYLE_FIELDS = tuple(DEFAULT_STYLES)

SETTING_FIELDS = (
    "show_label",
    "show_tick",
    "show_border",
    "show_grid",
    "tick_length",
    "interval_unit",
    "interval",
    "bounds",
    "min_zoom",
    "max_zoom",
    "label_formatter",
    "pixel_ratio",
) + STYLE_FIELDS


@dataclass(frozen=True)
class GraticuleOptions:
    """Everything a graticule layer needs to compute and style its layers.

    Styles are merged over their defaults on construction, the interval
    unit is normalized to ``"degree"`` or ``"arcminute"`` and bounds are
    converted to :class:`~graticule.grid.Bounds`.
    """

    show_label: bool = True
    show_tick: bool = True
    show_border: bool = True
    show_grid: bool = False
    tick_length: float = 5
    interval_unit: str = "degree"
    interval: float = 10
    bounds: Any = WORLD_BOUNDS
    min_zoom: float = 0
    max_zoom: float = 22
    label_formatter: str = "second"
    pixel_ratio: float = 1
    label_style: Mapping = field(default_factory=dict)
    tick_style: Mapping = field(default_factory=dict)
    grid_style: Mapping = field(default_factory=dict)
    border_style: Mapping = field(default_factory=dict)

    def __post_init__(self):
        if not self.interval or self.interval <= 0:
            raise ValueError(f"Interval must be positive, got {self.interval!r}")
        if self.label_formatter not in PRECISIONS:
            raise UnsupportedFormatError(
                f"Unsupported label format: {self.label_formatter!r}")
        object.__setattr__(self, "interval_unit", normalize_unit(self.interval_unit))
        object.__setattr__(self, "bounds", Bounds.convert(self.bounds))
        for name in STYLE_FIELDS:
            object.__setattr__(self, name, merge_style(DEFAULT_STYLES[name], getattr(self, name)))

    @classmethod
    def from_settings(cls, settings=None, **overrides):
        """Build options from Dynaconf settings, keyword arguments win.

        Parameters
        ----------
        settings : Dynaconf, optional
            Settings to read, by default :data:`graticule.config.settings`.
        **overrides
            Option values taking precedence over the settings.
        """
        settings = config.settings if settings is None else settings
        values = {}
        for name in SETTING_FIELDS:
            value = settings.get(name)
            if value is not None:
                values[name] = _plain(value)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def replace(self, **changes):
        """Return a copy with ``changes`` applied and validated."""
        return dataclasses.replace(self, **changes)

    def to_dict(self):
        values = dataclasses.asdict(self)
        values["bounds"] = [[self.bounds.west, self.bounds.south],
                            [self.bounds.east, self.bounds.north]]
        return values


def _plain(value):
    """Turn Dynaconf boxes and box lists into plain dicts and lists."""
    if isinstance(value, Mapping):
        return {str(k).lower(): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
