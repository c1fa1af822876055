"""Image rendering driver built on the scene integrator.

Renders a full image by calling ``Scene.sample`` once per pixel. Each image
row gets its own ``numpy.random.Generator`` spawned from a single
``SeedSequence``, so rows are statistically independent, rows can be rendered
on any number of worker threads, and the result for a given seed does not
depend on the worker count.

Example:
    >>> from pathtrace.core.render import render_image
    >>> from pathtrace.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> image = render_image(scene, camera, 64, 64, samples=16, depth=3, seed=1)
    >>> image.shape
    (64, 64, 3)
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import numpy.typing as npt

from pathtrace.camera.pinhole import PinholeCamera
from pathtrace.core.vector import Color
from pathtrace.scene.scene import Scene

logger = logging.getLogger(__name__)

# Default rendering parameters
DEFAULT_SAMPLES = 16
DEFAULT_DEPTH = 4

# Callback receives (rows_done, total_rows)
RowCallback = Callable[[int, int], None]

SeedLike = int | np.random.SeedSequence | None


def render_pixel(
    scene: Scene,
    camera: PinholeCamera,
    pixel_i: int,
    pixel_j: int,
    width: int,
    height: int,
    samples: int,
    depth: int,
    rng: np.random.Generator,
) -> Color:
    """Render one jittered sample for a pixel.

    Args:
        scene: The compiled scene.
        camera: The camera generating the primary ray.
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Stratified bounce samples at the primary hit.
        depth: Bounce budget.
        rng: Random generator for this pixel.

    Returns:
        The estimated radiance for the pixel.
    """
    ray = camera.ray_for_pixel(pixel_i, pixel_j, width, height, rng.random(), rng.random())
    return scene.sample(ray, samples, depth, rng)


def _render_row(
    scene: Scene,
    camera: PinholeCamera,
    row: int,
    width: int,
    height: int,
    samples: int,
    depth: int,
    seed: np.random.SeedSequence,
) -> npt.NDArray[np.float64]:
    """Render one image row (row 0 is the top of the image)."""
    rng = np.random.default_rng(seed)
    pixel_j = height - 1 - row
    out = np.zeros((width, 3), dtype=np.float64)
    for pixel_i in range(width):
        out[pixel_i] = render_pixel(
            scene, camera, pixel_i, pixel_j, width, height, samples, depth, rng
        )
    logger.debug("Rendered row %d/%d", row + 1, height)
    return out


def render_image(
    scene: Scene,
    camera: PinholeCamera,
    width: int,
    height: int,
    *,
    samples: int = DEFAULT_SAMPLES,
    depth: int = DEFAULT_DEPTH,
    seed: SeedLike = None,
    workers: int = 1,
    callback: RowCallback | None = None,
) -> npt.NDArray[np.float64]:
    """Render a linear radiance image.

    Args:
        scene: The compiled scene.
        camera: The camera.
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Stratified samples per pixel (truncated to a square).
        depth: Bounce budget per path.
        seed: Seed or SeedSequence. None draws fresh OS entropy.
        workers: Number of threads rendering rows concurrently.
        callback: Optional callback invoked after each finished row with
            (rows_done, total_rows), in row order.

    Returns:
        Array of shape (height, width, 3), row 0 at the top.

    Raises:
        ValueError: If width, height or workers is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if workers <= 0:
        raise ValueError(f"workers must be positive, got {workers}")

    seed_seq = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    row_seeds = seed_seq.spawn(height)

    logger.info(
        "Rendering %dx%d, %d samples, depth %d, %d worker(s)",
        width,
        height,
        samples,
        depth,
        workers,
    )
    start = time.perf_counter()

    def task(row: int) -> npt.NDArray[np.float64]:
        return _render_row(scene, camera, row, width, height, samples, depth, row_seeds[row])

    image = np.zeros((height, width, 3), dtype=np.float64)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for row, pixels in enumerate(pool.map(task, range(height))):
            image[row] = pixels
            if callback is not None:
                callback(row + 1, height)

    logger.info("Rendered %dx%d in %.2fs", width, height, time.perf_counter() - start)
    return image
