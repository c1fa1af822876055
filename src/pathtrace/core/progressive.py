"""Progressive renderer for iterative sample accumulation.

This module provides a convenient wrapper around the render driver that supports:
- Progressive rendering that refines over time
- Batch rendering (multiple passes in one call)
- Progress callbacks for UI updates
- Easy reset and re-render functionality

Each pass renders the whole image once with its own seed spawned from the
renderer's root SeedSequence and folds it into a running average, so a
renderer created with the same seed reproduces the same sequence of images.

Example:
    >>> from pathtrace.core.progressive import ProgressiveRenderer
    >>> from pathtrace.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> renderer = ProgressiveRenderer(scene, camera, 128, 128, seed=3)
    >>> renderer.render(8)  # Eight passes
    >>> image = renderer.get_image_numpy()
"""

from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from pathtrace.camera.pinhole import PinholeCamera
from pathtrace.core.render import DEFAULT_DEPTH, render_image
from pathtrace.scene.scene import Scene

# Callback receives (current_passes, total_target_passes)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """A progressive renderer that accumulates passes over time.

    Attributes:
        scene: The compiled scene being rendered.
        camera: The camera.
        samples_per_pass: Stratified samples per pixel in each pass.
        depth: Bounce budget per path.
        workers: Threads used per pass.
    """

    def __init__(
        self,
        scene: Scene,
        camera: PinholeCamera,
        width: int,
        height: int,
        *,
        samples_per_pass: int = 1,
        depth: int = DEFAULT_DEPTH,
        seed: int | None = None,
        workers: int = 1,
    ) -> None:
        """Initialize the progressive renderer.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.scene = scene
        self.camera = camera
        self.samples_per_pass = samples_per_pass
        self.depth = depth
        self.workers = workers
        self._width = width
        self._height = height
        self._seed = seed
        self.reset()

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def sample_count(self) -> int:
        """Get the number of accumulated passes."""
        return self._passes

    def reset(self) -> None:
        """Reset the accumulator and reseed for a fresh render."""
        self._buffer = np.zeros((self._height, self._width, 3), dtype=np.float64)
        self._passes = 0
        self._seed_seq = np.random.SeedSequence(self._seed)

    def _render_pass(self) -> None:
        child = self._seed_seq.spawn(1)[0]
        image = render_image(
            self.scene,
            self.camera,
            self._width,
            self._height,
            samples=self.samples_per_pass,
            depth=self.depth,
            seed=child,
            workers=self.workers,
        )
        self._passes += 1
        # Running average: avg_n = avg_{n-1} + (x_n - avg_{n-1}) / n
        self._buffer += (image - self._buffer) / self._passes

    def render(
        self,
        num_passes: int = 1,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render passes progressively with optional progress callback.

        Args:
            num_passes: Total number of passes to add.
            batch_size: Number of passes to render before each callback.
            callback: Optional callback function called after each batch.
                Receives (current_total_passes, target_total_passes).
        """
        for _ in self.render_progressive(num_passes, batch_size):
            if callback is not None:
                callback(self._passes, self._target)

    def render_progressive(
        self,
        num_passes: int = 1,
        batch_size: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Render passes progressively, yielding progress after each batch.

        Yields:
            Tuple of (current_total_passes, target_total_passes).
        """
        if num_passes <= 0:
            return

        self._target = self._passes + num_passes
        remaining = num_passes
        while remaining > 0:
            batch = min(max(batch_size, 1), remaining)
            for _ in range(batch):
                self._render_pass()
            remaining -= batch
            yield (self._passes, self._target)

    def get_image_numpy(self, gamma: float = 1.0) -> npt.NDArray[np.float32]:
        """Get the accumulated image clamped to [0, 1].

        Args:
            gamma: Gamma correction value. Default 1.0 (linear).

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32.
        """
        image = np.clip(self._buffer, 0.0, 1.0)
        if gamma != 1.0:
            image = np.power(image, 1.0 / gamma)
        return image.astype(np.float32)

    def get_radiance(self) -> npt.NDArray[np.float64]:
        """Get a copy of the unclamped linear radiance buffer."""
        return self._buffer.copy()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
