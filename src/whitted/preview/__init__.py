"""Preview and export module for rendered canvases.

Components:
    display: Tone mapping, gamma and the Matplotlib preview window
    export: PNG (Pillow) and PPM output, reference image comparison
"""

from .display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from .export import (
    compare_to_reference,
    compute_rmse,
    image_to_uint8,
    load_png,
    save_png,
    save_ppm,
)

__all__ = [
    "ToneMapMethod",
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "show_preview",
    "image_to_uint8",
    "save_png",
    "save_ppm",
    "load_png",
    "compute_rmse",
    "compare_to_reference",
]
