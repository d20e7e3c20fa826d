"""Tests for test evaluation on image samples."""

import numpy as np
import pytest

from headpose_forest import (ChannelFactory, ForestParam, ImageSample, OutOfBoundsError,
                             PatchFeature, PixelFeature, Point, Rect)


class TestPatchTest:
    def test_mean_difference(self):
        channel = np.zeros((6, 6), dtype=np.uint8)
        channel[0:2, 0:2] = 10
        channel[2:4, 2:4] = 4
        image = ImageSample.from_channels([channel])
        test = PatchFeature(0, Rect(0, 0, 2, 2), Rect(2, 2, 2, 2))
        assert image.eval_test(test, Rect(0, 0, 6, 6)) == 6

    def test_region_offset_applies(self):
        channel = np.zeros((6, 6), dtype=np.uint8)
        channel[3, 3] = 9
        image = ImageSample.from_channels([channel])
        test = PatchFeature(0, Rect(0, 0, 1, 1), Rect(1, 1, 1, 1))
        assert image.eval_test(test, Rect(3, 3, 2, 2)) == 9
        assert image.eval_test(test, Rect(2, 2, 2, 2)) == -9

    def test_integral_equals_direct(self, raw_image, integral_image):
        rng = np.random.default_rng(3)
        region = Rect(4, 2, 16, 16)
        for _ in range(50):
            test = PatchFeature.generate(16, rng, raw_image.num_channels)
            assert integral_image.eval_test(test, region) == raw_image.eval_test(test, region)

    def test_out_of_bounds_geometry(self, raw_image, integral_image):
        test = PatchFeature(0, Rect(0, 0, 4, 4), Rect(10, 10, 4, 4))
        for image in (raw_image, integral_image):
            with pytest.raises(OutOfBoundsError):
                image.eval_test(test, Rect(20, 10, 16, 16))

    def test_unknown_channel(self, raw_image):
        test = PatchFeature(5, Rect(0, 0, 1, 1), Rect(0, 0, 1, 1))
        with pytest.raises(OutOfBoundsError):
            raw_image.eval_test(test, Rect(0, 0, 4, 4))


class TestPixelTest:
    def test_point_difference(self):
        channel = np.zeros((4, 4), dtype=np.uint8)
        channel[1, 2] = 3
        channel[3, 1] = 200
        image = ImageSample.from_channels([channel])
        test = PixelFeature(0, Point(1, 0), Point(0, 2))
        # No uint8 wrap-around
        assert image.eval_test(test, Rect(1, 1, 3, 3)) == -197

    def test_out_of_bounds(self, raw_image):
        test = PixelFeature(0, Point(0, 0), Point(40, 0))
        with pytest.raises(OutOfBoundsError):
            raw_image.eval_test(test, Rect(0, 0, 4, 4))


class TestImageSample:
    def test_channels_are_read_only_copies(self, channels):
        image = ImageSample.from_channels(channels)
        channels[0][0, 0] = 1
        assert not image.channel(0).data.flags.writeable
        assert not np.shares_memory(image.channel(0).data, channels[0])

    def test_sub_patches(self, raw_image):
        patches = raw_image.sub_patches(Rect(2, 3, 5, 4))
        assert len(patches) == raw_image.num_channels
        for view, patch in zip((raw_image.channel(0), raw_image.channel(1)), patches):
            assert patch.shape == (4, 5)
            assert np.shares_memory(patch, view.data)
            assert not patch.flags.writeable

    def test_shape(self, raw_image, integral_image):
        assert raw_image.shape == integral_image.shape == (24, 32)
        assert integral_image.use_integral and not raw_image.use_integral

    def test_mismatched_shapes(self):
        with pytest.raises(ValueError):
            ImageSample.from_channels([np.zeros((4, 4)), np.zeros((4, 5))])

    def test_no_channels(self):
        with pytest.raises(ValueError):
            ImageSample.from_channels([])

    def test_from_factory_sorts_features(self):
        rng = np.random.default_rng(0)
        gray = rng.integers(0, 256, size=(20, 20)).astype(np.uint8)
        image = ImageSample(gray, [3, 0], use_integral=False)
        assert image.num_channels == 2
        np.testing.assert_array_equal(image.channel(0).data, gray)


class RecordingFactory(ChannelFactory):
    """Keeps the ids in the order it was asked for them."""

    def __init__(self):
        self.requested = []

    def extract_channel(self, feature_id, use_integral, image):
        return np.full(image.shape[:2], feature_id, dtype=np.uint8)

    def extract_channels(self, features, use_integral, image):
        self.requested.extend(features)
        return [self.extract_channel(f, use_integral, image) for f in features]


class TestChannelOrder:
    def test_ids_sorted_before_factory(self):
        factory = RecordingFactory()
        image = ImageSample(np.zeros((6, 6), dtype=np.uint8), [4, 1, 2], factory=factory)
        assert factory.requested == [1, 2, 4]
        assert [int(image.channel(i).data[0, 0]) for i in range(3)] == [1, 2, 4]

    def test_from_params(self):
        rng = np.random.default_rng(1)
        gray = rng.integers(0, 256, size=(12, 16)).astype(np.uint8)
        params = ForestParam(features=(3, 0), use_integral=True)
        image = ImageSample.from_params(gray, params)
        assert image.use_integral
        assert image.num_channels == 2
        assert image.shape == (12, 16)
        assert image.channel(0).data.shape == (13, 17)
        assert image.channel(0).rect_sum(Rect(0, 0, 16, 12)) == gray.sum()

    def test_from_params_with_factory(self):
        factory = RecordingFactory()
        params = ForestParam(features=(2, 0))
        image = ImageSample.from_params(np.zeros((5, 5)), params, factory=factory)
        assert factory.requested == [0, 2]
        assert not image.use_integral
