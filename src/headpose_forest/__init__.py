"""Init file.
"""
from .channels import ChannelFactory, GradientChannelFactory
from .config import ForestParam
from .core import NUM_POSE_CLASSES, ChannelView, OutOfBoundsError, Point, Rect
from .criteria import (LOWEST, calc_weight_classes, entropy, entropy_pose,
                       eval_split, gain, gain2, make_leaf)
from .features import PatchFeature, PixelFeature
from .image import ImageSample
from .leaf import HeadPoseLeaf
from .sample import HeadPoseSample, generate_split
from .split import Split, partition
