"""Floyd-Steinberg error diffusion on an integer RGB working buffer."""

from __future__ import annotations

import numpy as np

# (dx, dy, weight numerator); weights are in sixteenths
FLOYD_STEINBERG_KERNEL: tuple[tuple[int, int, int], ...] = (
    (1, 0, 7),
    (-1, 1, 3),
    (0, 1, 5),
    (1, 1, 1),
)
KERNEL_DENOMINATOR = 16


def weighted_error(error: np.ndarray, numerator: int) -> np.ndarray:
    """Round error * numerator / 16 to the nearest integer, halves upward.

    Computed as floor((2 * e * n + 16) / 32) so it stays exact in integers,
    including for negative errors.
    """
    return (2 * error * numerator + KERNEL_DENOMINATOR) // (2 * KERNEL_DENOMINATOR)


def neighbor_accepts(dx: int, nx: int, ny: int, width: int, height: int) -> bool:
    """Whether the neighbor at (nx, ny) receives diffused error.

    The lower-left tap only lands strictly right of column 0, so the left
    edge column never receives a lower-left contribution.
    """
    if ny >= height or nx >= width:
        return False
    if dx < 0:
        return nx > 0
    return nx >= 0


def diffuse_error(
    buffer: np.ndarray, x: int, y: int, error: np.ndarray
) -> None:
    """Spread the quantization error of pixel (x, y) to unvisited neighbors.

    Args:
        buffer: (H, W, 3) signed integer working buffer, modified in place.
            Values may leave [0, 255]; clamping is the caller's job.
        x, y: position of the pixel that was just quantized.
        error: per-channel error (current value - matched color).
    """
    if not error.any():
        return
    h, w = buffer.shape[:2]
    for dx, dy, numerator in FLOYD_STEINBERG_KERNEL:
        nx, ny = x + dx, y + dy
        if neighbor_accepts(dx, nx, ny, w, h):
            buffer[ny, nx] += weighted_error(error, numerator)
