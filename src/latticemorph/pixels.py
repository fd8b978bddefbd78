from typing import Tuple

import numpy as np


def as_pixel_buffer(pixels) -> np.ndarray:
    """
    Read-only (H,W,4) uint8 view of an RGBA (or RGB) array.
    RGB input is promoted to opaque RGBA (that promotion copies).
    """
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError("pixel buffer must be (H,W,4) RGBA or (H,W,3) RGB")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError("pixel buffer must not be empty")

    arr = arr.astype(np.uint8, copy=False)
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=2)

    view = arr.view()
    view.flags.writeable = False
    return view


def sample_rgb(buffer: np.ndarray, x: float, y: float) -> Tuple[int, int, int]:
    """
    Nearest-pixel lookup with edge clamping: clamp into [0,w-1] x [0,h-1], then floor.
    """
    h, w = buffer.shape[:2]
    px = int(np.floor(min(max(float(x), 0.0), w - 1.0)))
    py = int(np.floor(min(max(float(y), 0.0), h - 1.0)))
    r, g, b = buffer[py, px, :3]
    return int(r), int(g), int(b)


def luminance(r, g, b) -> float:
    return (float(r) + float(g) + float(b)) / (3.0 * 255.0)


def luminance_map(buffer: np.ndarray) -> np.ndarray:
    """
    (H,W) float64 luminance in [0,1], alpha ignored.
    """
    return buffer[:, :, :3].astype(np.float64).sum(axis=2) / (3.0 * 255.0)


def weight_field(buffer: np.ndarray) -> np.ndarray:
    """
    Stippling weight: darker pixels weigh more (1 - luminance).
    """
    return 1.0 - luminance_map(buffer)
