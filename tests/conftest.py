"""Shared fixtures for the forest tests."""

import numpy as np
import pytest

from headpose_forest import HeadPoseSample, ImageSample, Rect


def make_channel(h=24, w=32, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(h, w)).astype(np.uint8)


def integral_of(channel):
    """Summed-area table with a leading zero row and column."""
    table = np.zeros((channel.shape[0] + 1, channel.shape[1] + 1), dtype=np.float64)
    table[1:, 1:] = np.cumsum(np.cumsum(channel.astype(np.float64), axis=0), axis=1)
    return table


@pytest.fixture
def channels():
    return [make_channel(seed=1), make_channel(seed=2)]


@pytest.fixture
def raw_image(channels):
    return ImageSample.from_channels(channels, use_integral=False)


@pytest.fixture
def integral_image(channels):
    return ImageSample.from_channels([integral_of(c) for c in channels], use_integral=True)


@pytest.fixture
def make_set(raw_image):
    """Build a sample set from a list of labels, None meaning negative."""

    def _make(labels):
        samples = []
        for label in labels:
            if label is None:
                samples.append(HeadPoseSample(raw_image, Rect(0, 0, 8, 8), is_pos=False))
            else:
                samples.append(HeadPoseSample(raw_image, Rect(0, 0, 8, 8), is_pos=True, label=label))
        return samples

    return _make


@pytest.fixture
def scenario_set(make_set):
    """10 samples: 6 positives labelled {0, 0, 1, 1, 2, 2} and 4 negatives."""
    return make_set([0, 0, 1, 1, 2, 2, None, None, None, None])


@pytest.fixture
def to_integral():
    return integral_of
