"""Image export for rendered canvases.

Supported formats:
    - PNG (8-bit via Pillow), with optional tone mapping and gamma
    - PPM (plain-text P3)

Rendered canvases can be checked against a reference PNG with
``compare_to_reference``.

Example:
    >>> from whitted.preview.export import save_png, save_ppm
    >>>
    >>> canvas = camera.render(world)
    >>> save_png(canvas, "output.png")
    >>> save_ppm(canvas, "output.ppm")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from whitted.core.canvas import Canvas


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit, rounding like the PPM encoder.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value.
        exposure: Exposure for the "exposure" tone mapping.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(
        image,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )
    return np.floor(processed.astype(np.float64) * 255.0 + 0.5).astype(np.uint8)


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save a canvas as an 8-bit RGB PNG.

    Args:
        canvas: The rendered canvas.
        filepath: Output path (should end in .png).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value.
        exposure: Exposure for the "exposure" tone mapping.
    """
    image_uint8 = image_to_uint8(
        canvas.to_numpy(), tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    PILImage.fromarray(image_uint8).save(filepath)


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    """Save a canvas as a plain-text PPM file."""
    Path(filepath).write_text(canvas.to_ppm(), encoding="ascii")


def load_png(filepath: str | Path) -> npt.NDArray[np.float64]:
    """Read an 8-bit image as a float RGB array in [0, 1], shape (H, W, 3)."""
    with PILImage.open(filepath) as img:
        data = np.asarray(img.convert("RGB"), dtype=np.float64)
    return data / 255.0


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Root mean squared error between two images.

    Raises:
        ValueError: If the image shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))


def compare_to_reference(canvas: Canvas, reference: str | Path) -> float:
    """RMSE between a canvas, quantized as ``save_png`` would, and a reference PNG.

    Raises:
        ValueError: If the reference has a different size.
    """
    rendered = image_to_uint8(canvas.to_numpy()).astype(np.float64) / 255.0
    return compute_rmse(rendered, load_png(reference))
