"""Preview module for output processing.

Components:
    display: Tone mapping and gamma correction
    export: PNG export (Pillow) and image comparison
"""

from pathtrace.preview.display import (
    TONE_MAP_METHODS,
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    tone_map_exposure,
    tone_map_reinhard,
)
from pathtrace.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_png,
)

__all__ = [
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    "TONE_MAP_METHODS",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]
