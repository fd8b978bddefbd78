from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .defaults import (
    ALPHA_THRESHOLD,
    MAX_PALETTE_COLORS,
    MAX_PALETTE_SAMPLES,
    MIN_PALETTE_COLORS,
    REMAP_CHUNK,
)

log = logging.getLogger(__name__)


def _candidate_pixels(buffer: np.ndarray) -> np.ndarray:
    """
    (M,3) int64 RGB of visible pixels in row-major order, stride-sampled down to
    MAX_PALETTE_SAMPLES.
    """
    flat = buffer.reshape(-1, 4)
    rgb = flat[flat[:, 3] >= ALPHA_THRESHOLD, :3].astype(np.int64)
    if len(rgb) > MAX_PALETTE_SAMPLES:
        step = -(-len(rgb) // MAX_PALETTE_SAMPLES)
        rgb = rgb[::step]
    return rgb


def _median_cut(colors: np.ndarray, color_count: int) -> np.ndarray:
    """
    Split the box with the widest channel range at its median until there are
    color_count boxes or no box can be split. Entries are rounded box means.
    """
    boxes: List[np.ndarray] = [colors]
    while len(boxes) < color_count:
        ranges = [int(np.ptp(b, axis=0).max()) if len(b) > 1 else 0 for b in boxes]
        k = int(np.argmax(ranges))
        if ranges[k] == 0:
            break

        box = boxes[k]
        channel = int(np.argmax(np.ptp(box, axis=0)))
        box = box[np.argsort(box[:, channel], kind="stable")]
        mid = len(box) // 2
        boxes[k:k + 1] = [box[:mid], box[mid:]]

    palette = np.array([np.rint(b.mean(axis=0)) for b in boxes], dtype=np.int64)
    palette = np.clip(palette, 0, 255).astype(np.uint8)

    _, first = np.unique(palette, axis=0, return_index=True)
    return palette[np.sort(first)]


def build_palette(buffer: np.ndarray, color_count: int) -> Optional[np.ndarray]:
    """
    Median-cut palette of at most color_count colors, as (K,3) uint8.

    None means "keep the original colors": color_count outside [2,256], or no
    pixel visible enough (alpha >= 128) to vote.
    """
    if color_count < MIN_PALETTE_COLORS or color_count > MAX_PALETTE_COLORS:
        return None

    colors = _candidate_pixels(buffer)
    if len(colors) == 0:
        return None

    palette = _median_cut(colors, int(color_count))
    log.debug("palette: %d colors from %d samples", len(palette), len(colors))
    return palette


def remap(buffer: np.ndarray, palette: Optional[np.ndarray]) -> np.ndarray:
    """
    New buffer with every RGB replaced by its nearest palette entry
    (squared RGB distance, first entry wins ties). Alpha is kept;
    fully transparent pixels become (0,0,0,0). The input is never written.
    """
    if palette is None or len(palette) == 0:
        return buffer

    pal = np.asarray(palette, dtype=np.int64).reshape(-1, 3)
    flat = buffer.reshape(-1, 4)
    out = np.empty_like(flat)

    for start in range(0, len(flat), REMAP_CHUNK):
        chunk = flat[start:start + REMAP_CHUNK]
        rgb = chunk[:, :3].astype(np.int64)
        dist = ((rgb[:, None, :] - pal[None, :, :]) ** 2).sum(axis=2)
        nearest = np.argmin(dist, axis=1)
        out[start:start + len(chunk), :3] = pal[nearest]
        out[start:start + len(chunk), 3] = chunk[:, 3]

    out[out[:, 3] == 0] = 0
    return out.reshape(buffer.shape)


def quantize_buffer(buffer: np.ndarray, color_count: int) -> np.ndarray:
    return remap(buffer, build_palette(buffer, color_count))
