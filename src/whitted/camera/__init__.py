"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin looking down -z, and the
        RenderSettings configuration

Example:
    >>> from whitted.camera import RenderSettings
    >>> settings = RenderSettings.from_degrees(60.0, shadows=False)
"""

from .pinhole import DEFAULT_FOV, RenderSettings, primary_ray

__all__ = [
    "RenderSettings",
    "DEFAULT_FOV",
    "primary_ray",
]
