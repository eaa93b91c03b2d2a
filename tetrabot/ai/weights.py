"""
Weight curves for the heuristic evaluator.
Each board feature is mapped to a signed score contribution by its own curve.
"""

import copy
import json
from dataclasses import dataclass, field, fields
from typing import Dict, Sequence, Tuple, Union

import numpy as np

from ..exceptions import InvalidWeightsException


@dataclass(frozen=True)
class Curve:
    """
    Piecewise-linear function given by control points sorted on x.
    Values past the outermost points follow the slope of the nearest segment.
    """
    points: Tuple[Tuple[float, float], ...]

    def __post_init__(self):
        try:
            points = tuple((float(x), float(y)) for x, y in self.points)
        except (TypeError, ValueError) as e:
            raise InvalidWeightsException(f"Malformed curve points {self.points!r}: {e}") from e
        if not points:
            raise InvalidWeightsException("A curve needs at least one point")
        xs = [x for x, _ in points]
        if any(b <= a for a, b in zip(xs, xs[1:])):
            raise InvalidWeightsException(f"Curve x values must be strictly increasing: {xs}")
        object.__setattr__(self, 'points', points)

    @classmethod
    def linear(cls, slope: float, intercept: float = 0.0) -> 'Curve':
        return cls(((0.0, intercept), (1.0, intercept + slope)))

    def eval(self, value: float) -> float:
        points = self.points
        if len(points) == 1:
            return points[0][1]

        (x0, y0), (x1, y1) = points[0], points[1]
        if value < x0:
            return y0 + (value - x0) * (y1 - y0) / (x1 - x0)
        (x0, y0), (x1, y1) = points[-2], points[-1]
        if value > x1:
            return y1 + (value - x1) * (y1 - y0) / (x1 - x0)

        xs, ys = zip(*points)
        return float(np.interp(value, xs, ys))

    def to_config(self) -> list:
        return [list(p) for p in self.points]


CurveConfig = Union[float, int, Sequence[Sequence[float]]]


def curve_from_config(value: CurveConfig) -> Curve:
    """A bare number is a linear slope, a list is a list of [x, y] points."""
    if isinstance(value, bool):
        raise InvalidWeightsException(f"Not a curve: {value!r}")
    if isinstance(value, (int, float)):
        return Curve.linear(value)
    if isinstance(value, (list, tuple)):
        return Curve(tuple(value))
    raise InvalidWeightsException(f"Not a curve: {value!r}")


@dataclass
class Weights:
    """Curves for every feature the evaluator reads. Positive output is a penalty."""

    # Structural features
    num_hole_total_weight: Curve = field(default_factory=lambda: Curve.linear(4.0))
    num_hole_weighted_weight: Curve = field(default_factory=lambda: Curve.linear(1.0))
    cell_covered_weight: Curve = field(default_factory=lambda: Curve.linear(0.5))
    height_weight: Curve = field(default_factory=lambda: Curve(((0, 0), (8, 4), (14, 16), (20, 60))))
    adjacent_height_differences_weight: Curve = field(
        default_factory=lambda: Curve(((0, 0), (1, 0.5), (3, 3), (6, 10))))
    total_height_difference_weight: Curve = field(default_factory=lambda: Curve.linear(0.3))

    # Situational (versus) features, rewarded
    combo_weight: Curve = field(default_factory=lambda: Curve.linear(-1.0))
    b2b_weight: Curve = field(default_factory=lambda: Curve.linear(-1.5))
    damage_weight: Curve = field(default_factory=lambda: Curve.linear(-1.0))
    clear_weight: Curve = field(default_factory=lambda: Curve.linear(-0.5))

    def clone(self) -> 'Weights':
        return copy.deepcopy(self)

    @classmethod
    def curve_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, config: Dict[str, CurveConfig]) -> 'Weights':
        """Builds weights from a mapping; names not given keep their defaults."""
        unknown = set(config) - set(cls.curve_names())
        if unknown:
            raise InvalidWeightsException(f"Unknown weight names: {sorted(unknown)}")
        return cls(**{name: curve_from_config(value) for name, value in config.items()})

    def to_dict(self) -> Dict[str, list]:
        return {name: getattr(self, name).to_config() for name in self.curve_names()}


def load_weights(path: str) -> Weights:
    """Load a weight configuration from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        try:
            config = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidWeightsException(f"{path} is not valid JSON: {e}") from e
    if not isinstance(config, dict):
        raise InvalidWeightsException(f"{path} must hold a JSON object")
    return Weights.from_dict(config)
