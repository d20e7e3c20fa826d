"""Forest parameters.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

FEATURE_TYPES = ('patch', 'pixel')
VARIANCE_STRATEGIES = ('one_pass', 'two_pass')


@dataclass(frozen=True)
class ForestParam:
    face_size: int = 100
    patch_size_ratio: float = 0.25
    features: tuple[int, ...] = (0,)
    use_integral: bool = False
    # Split modes below this value use entropy, others variance
    split_mode_threshold: float = 50.0
    feature_type: str = 'patch'
    variance: str = 'one_pass'

    def __post_init__(self):
        if self.face_size <= 0:
            raise ValueError('face_size must be positive')
        if not 0 < self.patch_size_ratio <= 1:
            raise ValueError('patch_size_ratio must be in (0, 1]')
        if self.patch_size < 1:
            raise ValueError('face_size * patch_size_ratio is below one pixel')
        if len(self.features) == 0:
            raise ValueError('At least one feature channel is required')
        if self.feature_type not in FEATURE_TYPES:
            raise ValueError(f'feature_type must be one of {FEATURE_TYPES}')
        if self.variance not in VARIANCE_STRATEGIES:
            raise ValueError(f'variance must be one of {VARIANCE_STRATEGIES}')

        # Lists coming from YAML
        object.__setattr__(self, 'features', tuple(self.features))

    @property
    def patch_size(self) -> int:
        return int(self.face_size * self.patch_size_ratio)

    def as_dict(self) -> dict:
        d = asdict(self)
        d['features'] = list(self.features)
        return d

    @classmethod
    def from_dict(cls, values: dict) -> ForestParam:
        if not isinstance(values, dict):
            raise ValueError('Forest parameters must be a mapping, '
                             f'got {type(values).__name__}')

        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f'Unknown forest parameters: {sorted(unknown)}')
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ForestParam:
        with Path(path).open() as f:
            values = yaml.safe_load(f)

        # Empty file means defaults
        if values is None:
            values = {}

        # Accept either a flat file or a `forest` section
        if isinstance(values, dict) and 'forest' in values:
            values = values['forest']
        return cls.from_dict(values)
