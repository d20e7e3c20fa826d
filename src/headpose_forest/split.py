"""Split descriptor.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .features import PatchFeature, PixelFeature

if TYPE_CHECKING:
    from .sample import HeadPoseSample

NUM_THRESHOLDS = 25


@dataclass(frozen=True)
class Split:
    feature: PatchFeature | PixelFeature
    threshold: float = 0
    num_thresholds: int = NUM_THRESHOLDS
    # Reserved for asymmetric splits, always 0
    margin: int = 0

    def with_threshold(self, threshold: float) -> Split:
        return replace(self, threshold=threshold)


def partition(samples: list[HeadPoseSample],
              split: Split) -> tuple[list[HeadPoseSample],
                                     list[HeadPoseSample]]:
    """Route every sample left (`eval` is true) or right."""
    left, right = [], []
    for s in samples:
        if s.eval(split):
            left.append(s)
        else:
            right.append(s)
    return left, right
