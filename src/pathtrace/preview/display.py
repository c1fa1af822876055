"""Display processing for rendered images.

Linear radiance from the integrator is unbounded. Before it can be shown or
written to an 8-bit file it is compressed by a tone mapping operator, gamma
encoded and clamped to [0, 1]. Operators are looked up by name so the CLI and
the exporter share one list of choices.

Example:
    >>> from pathtrace.preview.display import process_image_for_display
    >>> display = process_image_for_display(image, tone_map="reinhard")
"""

import math
from collections.abc import Callable
from typing import Literal

import numpy as np
import numpy.typing as npt

ToneMapMethod = Literal["none", "reinhard", "exposure"]

FloatImage = npt.NDArray[np.floating]


def tone_map_reinhard(image: FloatImage, white: float = math.inf) -> npt.NDArray[np.float32]:
    """Reinhard operator, optionally with a white point.

    With the default infinite white point this is L / (1 + L). A finite
    white point maps radiance ``white`` to exactly 1 and burns out anything
    brighter.

    Args:
        image: Linear HDR image of shape (H, W, 3).
        white: Smallest radiance that maps to full white.

    Returns:
        Tone mapped float32 image.
    """
    radiance = np.maximum(image, 0.0)
    mapped = radiance / (1.0 + radiance)
    if math.isfinite(white):
        mapped *= 1.0 + radiance / (white * white)
    return mapped.astype(np.float32)


def tone_map_exposure(image: FloatImage, exposure: float = 1.0) -> npt.NDArray[np.float32]:
    """Exponential operator 1 - exp(-L * exposure); larger exposure is brighter."""
    return (-np.expm1(-np.maximum(image, 0.0) * exposure)).astype(np.float32)


def apply_gamma(image: FloatImage, gamma: float = 2.2) -> npt.NDArray[np.float32]:
    """Gamma encode an image, clamping to [0, 1] first unless gamma is 1."""
    if gamma == 1.0:
        return np.asarray(image, dtype=np.float32)
    return np.power(np.clip(image, 0.0, 1.0), 1.0 / gamma).astype(np.float32)


# Operators take (image, exposure); only the exposure operator uses the latter
_TONE_MAPPERS: dict[str, Callable[[FloatImage, float], npt.NDArray[np.float32]]] = {
    "none": lambda image, exposure: np.asarray(image, dtype=np.float32),
    "reinhard": lambda image, exposure: tone_map_reinhard(image),
    "exposure": tone_map_exposure,
}

TONE_MAP_METHODS: tuple[str, ...] = tuple(_TONE_MAPPERS)


def process_image_for_display(
    image: FloatImage,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Tone map, gamma encode and clamp a linear image.

    Args:
        image: Linear HDR image of shape (H, W, 3). It is not modified.
        tone_map: One of TONE_MAP_METHODS.
        gamma: Display gamma (2.2 for sRGB).
        exposure: Used by the "exposure" operator only.

    Returns:
        Float32 image in [0, 1].

    Raises:
        ValueError: If tone_map is not a known method.
    """
    try:
        operator = _TONE_MAPPERS[tone_map]
    except KeyError:
        raise ValueError(f"Unknown tone mapping method: {tone_map}") from None

    mapped = operator(np.array(image, dtype=np.float32), exposure)
    return np.clip(apply_gamma(mapped, gamma), 0.0, 1.0)
