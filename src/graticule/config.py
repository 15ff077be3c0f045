"""Configuration management for graticule.

Settings are loaded with Dynaconf from multiple locations in order of
increasing priority:

1. Global settings (/etc/graticule/)
2. User settings (~/.config/graticule/)
3. Current directory settings (./)
4. Environment variable specified file (GRATICULE_SETTINGS_FILE_FOR_DYNACONF)

Any option can also be given as an environment variable with the
``GRATICULE_`` prefix, e.g. ``GRATICULE_INTERVAL=5``.

Keys read by :meth:`graticule.options.GraticuleOptions.from_settings`
(all optional, the layer defaults apply otherwise):

show_label, show_tick, show_border, show_grid
    Sub-layer visibility.
interval, interval_unit
    Line spacing and its unit, ``degree`` or ``arcminute``.
bounds
    ``[[west, south], [east, north]]`` in degrees.
tick_length
    Tick length in pixels.
min_zoom, max_zoom
    Zoom range of the host layers.
label_formatter
    Label precision, ``degree``, ``minute`` or ``second``.
pixel_ratio
    Device pixel ratio for label bitmaps.
label_style, tick_style, grid_style, border_style
    Tables merged over the default styles.

A ``settings.toml`` for a fine arc-minute grid could read::

    [default]
    interval = 10
    interval_unit = "arcminute"
    show_grid = true

    [default.grid_style]
    line_color = "#8899AA"

    [print]
    pixel_ratio = 2

Attributes
----------
USER_DIR : pathlib.Path
    Path to user configuration directory.
GLOB_DIR : pathlib.Path
    Path to global configuration directory.
CURR_DIR : pathlib.Path
    Path to current working directory.
settings : Dynaconf
    The Dynaconf settings object with loaded configuration.
"""
import os
import pathlib

from dynaconf import Dynaconf

USER_DIR = pathlib.Path("~/.config/graticule").expanduser()
GLOB_DIR = pathlib.Path("/etc/graticule/")
CURR_DIR = pathlib.Path("./").absolute()
settings_files = [
    GLOB_DIR / "settings.toml",
    GLOB_DIR / ".secrets.toml",
    USER_DIR / "settings.toml",
    USER_DIR / ".secrets.toml",
    CURR_DIR / "settings.toml",
    CURR_DIR / ".secrets.toml"
    ]
extra_file = os.getenv("GRATICULE_SETTINGS_FILE_FOR_DYNACONF")
if extra_file:
    settings_files.append(pathlib.Path(extra_file).absolute())

settings = Dynaconf(
    merge_enabled=True,
    envvar_prefix="GRATICULE",
    settings_files=settings_files,
    environments=True,
    load_dotenv=True,
)


def change_env(new_env):
    """Change the active Dynaconf environment.

    Parameters
    ----------
    new_env : str
        The environment name to switch to (e.g., 'development', 'production').
    """
    settings.setenv(new_env)
    settings.reload()
