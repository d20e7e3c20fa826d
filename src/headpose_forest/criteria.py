"""Split criteria and leaf statistics.

All scores share one orientation: they are never positive
and 0 means a pure (or perfectly compact) subset, so the
trainer keeps the candidate split with the highest score.

Subsets without positive samples cannot be scored by the
variance criteria; both `gain` and `gain2` return `LOWEST`
for them, and the class priors of such a set are all zero.
"""
from __future__ import annotations

import logging
import math
import sys
from typing import TYPE_CHECKING, Iterable

from .config import ForestParam
from .core import NUM_POSE_CLASSES
from .leaf import HeadPoseLeaf

if TYPE_CHECKING:
    from .sample import HeadPoseSample

logger = logging.getLogger(__name__)

LOWEST = -sys.float_info.max

_DEFAULT_PARAMS = ForestParam()


def _positive_labels(samples: Iterable[HeadPoseSample]) -> list[int]:
    return [s.label for s in samples if s.is_pos]


def _plogp(p: float) -> float:
    return p * math.log(p) if p > 0 else 0.0


def entropy(samples: list[HeadPoseSample]) -> float:
    """Binary entropy p ln p + (1 - p) ln (1 - p) of the
    positive ratio. Empty sets have entropy 0.
    """
    n = len(samples)
    if n == 0:
        return 0.0

    p_pos = len(_positive_labels(samples)) / n
    return _plogp(p_pos) + _plogp(1.0 - p_pos)


def entropy_pose(samples: list[HeadPoseSample]) -> float:
    """Sum of p ln p over the pose classes of the positives."""
    labels = _positive_labels(samples)
    if len(labels) == 0:
        return 0.0

    total = 0.0
    for i in range(NUM_POSE_CLASSES):
        total += _plogp(labels.count(i) / len(labels))
    return total


def gain(samples: list[HeadPoseSample]) -> tuple[float, int]:
    """Negated label variance of the positives, two passes.

    Returns the score and the number of positives.
    """
    labels = _positive_labels(samples)
    n = len(labels)
    if n == 0:
        return LOWEST, 0

    mean = sum(labels) / n
    var = sum((mean - l) * (mean - l) for l in labels) / n
    return -var, n


def gain2(samples: list[HeadPoseSample]) -> tuple[float, int]:
    """Negated label variance of the positives from the
    running sum and sum of squares.
    """
    n = 0
    total = 0
    sq_total = 0
    for s in samples:
        if s.is_pos:
            n += 1
            total += s.label
            sq_total += s.label * s.label

    if n == 0:
        return LOWEST, 0

    mean = total / n
    variance = sq_total / n - mean * mean
    return -variance, n


def eval_split(set_a: list[HeadPoseSample],
               set_b: list[HeadPoseSample],
               class_priors: list[float],
               split_mode: float,
               depth: int,
               params: ForestParam = None) -> float:
    """Score of the partition (set_a, set_b).

    Entropy weighted by subset size when `split_mode` is below
    the configured threshold, otherwise the variance gain
    weighted by the number of positives on each side.
    """
    if params is None:
        params = _DEFAULT_PARAMS

    if split_mode < params.split_mode_threshold:
        size_a, size_b = len(set_a), len(set_b)
        score_a, score_b = entropy(set_a), entropy(set_b)
    else:
        variance = gain if params.variance == 'two_pass' else gain2
        score_a, size_a = variance(set_a)
        score_b, size_b = variance(set_b)

    total = size_a + size_b
    if total == 0:
        return LOWEST

    # Zero-weight sides do not contribute, sentinel included
    score = 0.0
    if size_a > 0:
        score += score_a * size_a
    if size_b > 0:
        score += score_b * size_b
    return score / total


def make_leaf(samples: list[HeadPoseSample],
              class_priors: list[float] = None,
              leaf_id: int = -1) -> HeadPoseLeaf:
    leaf = HeadPoseLeaf()
    leaf.n_samples = len(samples)
    if leaf.n_samples == 0:
        logger.warning('Leaf %d has no samples', leaf_id)
        return leaf

    labels = _positive_labels(samples)
    leaf.foreground = len(labels) / leaf.n_samples

    if len(labels) == 0:
        logger.warning('Leaf %d with only negative samples (%d)',
                       leaf_id, leaf.n_samples)
        return leaf

    for l in labels:
        leaf.hist_labels[l] += 1

    logger.debug('Leaf %d histogram %s', leaf_id, leaf.hist_labels)
    return leaf


def calc_weight_classes(samples: list[HeadPoseSample]) -> list[float]:
    """Empirical pose class frequencies among the positives."""
    counts = [0] * NUM_POSE_CLASSES
    labels = _positive_labels(samples)
    for l in labels:
        counts[l] += 1

    if len(labels) == 0:
        logger.warning('No positive samples, class priors are zero')
        return [0.0] * NUM_POSE_CLASSES

    priors = [c / len(labels) for c in counts]
    for i, (c, p) in enumerate(zip(counts, priors)):
        logger.debug('Class %d -> %d %.4f', i, c, p)
    return priors
