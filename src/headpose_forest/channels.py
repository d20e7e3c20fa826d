"""Feature channels.

A channel factory turns a raw image into aligned 2D
feature channels. The forest core only relies on the
`ChannelFactory` contract; `GradientChannelFactory` is a
small reference implementation built on OpenCV.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import cv2
import numpy as np


class ChannelFactory(ABC):
    @abstractmethod
    def extract_channel(self,
                        feature_id: int,
                        use_integral: bool,
                        image: np.ndarray) -> np.ndarray:
        ...

    def extract_channels(self,
                         features: list[int],
                         use_integral: bool,
                         image: np.ndarray) -> list[np.ndarray]:
        return [self.extract_channel(f, use_integral, image)
                for f in features]


class GradientChannelFactory(ChannelFactory):
    INTENSITY = 0
    SOBEL_X = 1
    SOBEL_Y = 2
    MAGNITUDE = 3
    LAPLACIAN = 4

    def __init__(self, blur: int = 0) -> None:
        assert blur == 0 or blur % 2 == 1
        self._blur = blur

    @property
    def available(self) -> tuple[int, ...]:
        return (self.INTENSITY,
                self.SOBEL_X,
                self.SOBEL_Y,
                self.MAGNITUDE,
                self.LAPLACIAN)

    def extract_channel(self,
                        feature_id: int,
                        use_integral: bool,
                        image: np.ndarray) -> np.ndarray:
        if feature_id not in self.available:
            raise ValueError(f'Unknown feature channel {feature_id}')

        gray = self._gray(image)
        if feature_id == self.INTENSITY:
            channel = gray
        elif feature_id == self.SOBEL_X:
            channel = cv2.convertScaleAbs(cv2.Sobel(gray, cv2.CV_16S, 1, 0))
        elif feature_id == self.SOBEL_Y:
            channel = cv2.convertScaleAbs(cv2.Sobel(gray, cv2.CV_16S, 0, 1))
        elif feature_id == self.MAGNITUDE:
            dx = cv2.Sobel(gray, cv2.CV_32F, 1, 0)
            dy = cv2.Sobel(gray, cv2.CV_32F, 0, 1)
            mag = cv2.magnitude(dx, dy)
            channel = cv2.convertScaleAbs(mag)
        else:
            channel = cv2.convertScaleAbs(cv2.Laplacian(gray, cv2.CV_16S))

        if use_integral:
            # Summed-area table, shape (h + 1, w + 1)
            return cv2.integral(channel, sdepth=cv2.CV_64F)

        return channel

    def _gray(self, image: np.ndarray) -> np.ndarray:
        # Saturate instead of wrapping values outside [0, 255]
        if image.dtype != np.uint8:
            image = np.clip(image, 0, 255).astype(np.uint8)

        if image.ndim == 3:
            image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        if self._blur > 0:
            image = cv2.GaussianBlur(image, (self._blur, self._blur), 0)

        return image
