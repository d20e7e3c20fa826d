"""Head-pose training sample.

A training sample is a region of a shared `ImageSample`
with a label. Many samples point to the same image, which
must stay alive as long as they do.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import ForestParam
from .core import NUM_POSE_CLASSES, Rect
from .features import PatchFeature, PixelFeature
from .image import ImageSample
from .split import NUM_THRESHOLDS, Split

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class HeadPoseSample:
    image: ImageSample
    rect: Rect
    is_pos: bool
    label: int = -1
    roi: Optional[Rect] = None

    def __post_init__(self):
        if self.is_pos and not 0 <= self.label < NUM_POSE_CLASSES:
            raise ValueError(f'Pose label {self.label} not in '
                             f'[0, {NUM_POSE_CLASSES})')

    def eval_test(self, split: Split) -> int:
        return self.image.eval_test(split.feature, self.rect)

    def eval(self, split: Split) -> bool:
        return self.eval_test(split) <= split.threshold

    def sub_patches(self) -> list[np.ndarray]:
        return self.image.sub_patches(self.rect)


def generate_split(data: list[HeadPoseSample],
                   rng: np.random.Generator,
                   params: ForestParam,
                   split_mode: float = 0,
                   depth: int = 0) -> Split:
    """Draw the geometry of a new candidate test.

    Thresholds are swept by the caller; the returned split
    only fixes the feature and the number of candidates.
    """
    if len(data) == 0:
        raise ValueError('Cannot generate a split without samples')

    patch_size = params.patch_size
    num_channels = data[0].image.num_channels
    if params.feature_type == 'pixel':
        feature = PixelFeature.generate(patch_size, rng, num_channels)
    else:
        feature = PatchFeature.generate(patch_size, rng, num_channels)

    logger.debug('Depth %d: generated %s', depth, feature)
    return Split(feature=feature,
                 num_thresholds=NUM_THRESHOLDS,
                 margin=0)
