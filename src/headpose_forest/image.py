"""Image sample.

Holds the feature channels of one source image and
evaluates binary tests against regions of them.
"""
from __future__ import annotations

import numpy as np

from .channels import ChannelFactory, GradientChannelFactory
from .config import ForestParam
from .core import ChannelView, OutOfBoundsError, Rect
from .features import PatchFeature, PixelFeature


class ImageSample:
    def __init__(self,
                 image: np.ndarray,
                 features: list[int],
                 factory: ChannelFactory = None,
                 use_integral: bool = False) -> None:
        if factory is None:
            factory = GradientChannelFactory()

        # Channel order follows the sorted ids whatever the factory
        channels = factory.extract_channels(sorted(features),
                                            use_integral,
                                            image)
        self._init_channels(channels, use_integral)

    @classmethod
    def from_params(cls,
                    image: np.ndarray,
                    params: ForestParam,
                    factory: ChannelFactory = None) -> ImageSample:
        return cls(image,
                   list(params.features),
                   factory=factory,
                   use_integral=params.use_integral)

    @classmethod
    def from_channels(cls,
                      channels: list[np.ndarray],
                      use_integral: bool = False) -> ImageSample:
        sample = cls.__new__(cls)
        sample._init_channels(channels, use_integral)
        return sample

    def _init_channels(self,
                       channels: list[np.ndarray],
                       use_integral: bool):
        if len(channels) == 0:
            raise ValueError('An image sample needs at least one channel')

        shapes = {c.shape for c in channels}
        if len(shapes) != 1:
            raise ValueError(f'Channels differ in shape: {sorted(shapes)}')

        views = []
        for c in channels:
            # Channels are shared between samples, never written
            c = np.array(c, copy=True)
            c.flags.writeable = False
            views.append(ChannelView(c, integral=use_integral))

        self._channels = tuple(views)
        self._use_integral = use_integral

    @property
    def use_integral(self) -> bool:
        return self._use_integral

    @property
    def num_channels(self) -> int:
        return len(self._channels)

    @property
    def shape(self) -> tuple[int, int]:
        return self._channels[0].shape

    def channel(self, index: int) -> ChannelView:
        if index < 0 or index >= len(self._channels):
            raise OutOfBoundsError(f'Channel {index} not in '
                                   f'[0, {len(self._channels)})')
        return self._channels[index]

    def eval_test(self, test: PatchFeature | PixelFeature, rect: Rect) -> int:
        if isinstance(test, PatchFeature):
            return self._eval_patch(test, rect)
        return self._eval_pixel(test, rect)

    def _eval_patch(self, test: PatchFeature, rect: Rect) -> int:
        channel = self.channel(test.channel)
        p1 = channel.rect_mean(test.rect_a.shift(rect.x, rect.y))
        p2 = channel.rect_mean(test.rect_b.shift(rect.x, rect.y))
        return p1 - p2

    def _eval_pixel(self, test: PixelFeature, rect: Rect) -> int:
        # Raw lookup, meaningful on non-integral channels only
        channel = self.channel(test.channel)
        a = channel.at(test.point_a.shift(rect.x, rect.y))
        b = channel.at(test.point_b.shift(rect.x, rect.y))
        return int(a) - int(b)

    def sub_patches(self, rect: Rect) -> list[np.ndarray]:
        return [c.crop(rect) for c in self._channels]
