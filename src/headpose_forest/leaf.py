"""Leaf summary.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .core import NUM_POSE_CLASSES


@dataclass
class HeadPoseLeaf:
    hist_labels: list[int] = field(
        default_factory=lambda: [0] * NUM_POSE_CLASSES)
    foreground: float = 0.0
    n_samples: int = 0

    @property
    def n_positives(self) -> int:
        return sum(self.hist_labels)

    def pose_distribution(self) -> list[float]:
        """Histogram normalized over positives, zeros if none."""
        n = self.n_positives
        if n == 0:
            return [0.0] * len(self.hist_labels)
        return [c / n for c in self.hist_labels]
