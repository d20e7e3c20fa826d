"""Entities.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

NUM_POSE_CLASSES = 5


class OutOfBoundsError(IndexError):
    """Raised when a test geometry does not fit inside a channel."""


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def shift(self, dx: int, dy: int) -> Point:
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    w: int
    h: int

    def __post_init__(self):
        if self.w <= 0 or self.h <= 0:
            raise ValueError(f'Rect must have a positive size, got {self}')

    @property
    def area(self) -> int:
        return self.w * self.h

    def shift(self, dx: int, dy: int) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.w, self.h)

    def as_bounding_rect(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.w, self.h


class ChannelView:
    """Bounds-checked view over a single 2D channel.

    In integral mode the wrapped array is a summed-area table
    with a leading row and column of zeros (as produced by
    `cv2.integral`), so it is one pixel larger than the image
    in both directions.
    """

    def __init__(self, data: np.ndarray, integral: bool = False):
        if data.ndim != 2:
            raise ValueError('A channel must be a 2D array, '
                             f'got shape {data.shape}')
        self._data = data
        self._integral = integral

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def integral(self) -> bool:
        return self._integral

    @property
    def shape(self) -> tuple[int, int]:
        """Shape of the underlying image (h, w)."""
        h, w = self._data.shape
        if self._integral:
            return h - 1, w - 1
        return h, w

    def at(self, point: Point):
        self._check(point.x, point.y, 1, 1, self._data.shape)
        return self._data[point.y, point.x]

    def crop(self, rect: Rect) -> np.ndarray:
        self._check(*rect.as_bounding_rect(), self._data.shape)
        view = self._data[rect.y:rect.y + rect.h,
                          rect.x:rect.x + rect.w]
        view.flags.writeable = False
        return view

    def rect_sum(self, rect: Rect) -> float:
        """Sum of the image values inside `rect`.

        Direct mode visits every pixel, integral mode reads the
        four corners. Corners are truncated to int before the
        difference is taken.
        """
        if not self._integral:
            return float(self.crop(rect).sum(dtype=np.float64))

        # Corners live one row/column past the rectangle
        h, w = self._data.shape
        self._check(rect.x, rect.y, rect.w + 1, rect.h + 1, (h, w))

        x0, y0 = rect.x, rect.y
        x1, y1 = rect.x + rect.w, rect.y + rect.h
        a = int(self._data[y0, x0])
        b = int(self._data[y0, x1])
        c = int(self._data[y1, x0])
        d = int(self._data[y1, x1])
        return float(d - b - c + a)

    def rect_mean(self, rect: Rect) -> int:
        """Mean over `rect`, truncated toward zero."""
        return int(self.rect_sum(rect) / float(rect.area))

    @staticmethod
    def _check(x: int, y: int, w: int, h: int,
               shape: tuple[int, int]):
        rows, cols = shape
        if x < 0 or y < 0 or x + w > cols or y + h > rows:
            raise OutOfBoundsError(
                f'Region (x={x}, y={y}, w={w}, h={h}) '
                f'outside channel of shape {shape}')
