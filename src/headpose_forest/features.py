"""Binary patch features.

A feature is the geometry of a test, expressed relative
to the top-left corner of a sample's region. The test
response is computed by `ImageSample.eval_test`.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .core import Point, Rect


@dataclass(frozen=True)
class PatchFeature:
    """Difference of the mean values of two rectangles."""
    channel: int
    rect_a: Rect
    rect_b: Rect

    @classmethod
    def generate(cls,
                 patch_size: int,
                 rng: np.random.Generator,
                 num_channels: int,
                 max_size: int = 0) -> PatchFeature:
        assert patch_size > 0 and num_channels > 0
        if max_size <= 0:
            max_size = max(1, patch_size // 2)
        max_size = min(max_size, patch_size)

        rect_a = _random_rect(patch_size, max_size, rng)
        rect_b = _random_rect(patch_size, max_size, rng)
        channel = int(rng.integers(0, num_channels))
        return cls(channel, rect_a, rect_b)


@dataclass(frozen=True)
class PixelFeature:
    """Difference of two single channel values."""
    channel: int
    point_a: Point
    point_b: Point

    @classmethod
    def generate(cls,
                 patch_size: int,
                 rng: np.random.Generator,
                 num_channels: int) -> PixelFeature:
        assert patch_size > 0 and num_channels > 0
        xa, ya, xb, yb = rng.integers(0, patch_size, size=4)
        channel = int(rng.integers(0, num_channels))
        return cls(channel,
                   Point(int(xa), int(ya)),
                   Point(int(xb), int(yb)))


def _random_rect(patch_size: int,
                 max_size: int,
                 rng: np.random.Generator) -> Rect:
    w = int(rng.integers(1, max_size, endpoint=True))
    h = int(rng.integers(1, max_size, endpoint=True))
    x = int(rng.integers(0, patch_size - w, endpoint=True))
    y = int(rng.integers(0, patch_size - h, endpoint=True))
    return Rect(x, y, w, h)
