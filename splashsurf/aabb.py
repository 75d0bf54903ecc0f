"""Axis-aligned bounding boxes in an arbitrary number of dimensions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

Vector = tuple[float, ...]


def _vec(values: Iterable[float]) -> Vector:
    return tuple(float(v) for v in values)


def _check_dim(expected: int, vector: Sequence[float]) -> None:
    if len(vector) != expected:
        raise ValueError(
            f"dimension mismatch: expected {expected} components, got {len(vector)}"
        )


@dataclass(frozen=True)
class AxisAlignedBoundingBox:
    """An axis-aligned bounding box given by its min and max corner points."""

    min: Vector
    max: Vector

    def __post_init__(self) -> None:
        lower = _vec(self.min)
        upper = _vec(self.max)
        if len(lower) != len(upper):
            raise ValueError("min and max corners must have the same dimension")
        object.__setattr__(self, "min", lower)
        object.__setattr__(self, "max", upper)

    @property
    def dim(self) -> int:
        """Number of dimensions of the box."""
        return len(self.min)

    @classmethod
    def zeros(cls, dim: int) -> "AxisAlignedBoundingBox":
        """A degenerate box with min and max at the origin."""
        return cls.from_point((0.0,) * dim)

    @classmethod
    def from_point(cls, point: Sequence[float]) -> "AxisAlignedBoundingBox":
        """A degenerate box with zero extents located at the given point."""
        return cls(point, point)

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "AxisAlignedBoundingBox":
        """The smallest box enclosing all given points."""
        iterator = iter(points)
        try:
            first = next(iterator)
        except StopIteration:
            raise ValueError("cannot build a bounding box from an empty point set") from None
        aabb = cls.from_point(first)
        for point in iterator:
            aabb = aabb.join_with_point(point)
        return aabb

    @classmethod
    def with_centroid(
        cls, centroid: Sequence[float], extent: Sequence[float]
    ) -> "AxisAlignedBoundingBox":
        """A box with the given centroid and extents."""
        _check_dim(len(centroid), extent)
        half = [e / 2.0 for e in extent]
        return cls(
            [c - h for c, h in zip(centroid, half)],
            [c + h for c, h in zip(centroid, half)],
        )

    def is_consistent(self) -> bool:
        """Whether min <= max holds in every dimension."""
        return all(lo <= hi for lo, hi in zip(self.min, self.max))

    def is_degenerate(self) -> bool:
        """Whether the min and max corners coincide."""
        return self.min == self.max

    def extents(self) -> Vector:
        """The vector from the min to the max corner."""
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    def min_extent(self) -> float:
        """The smallest extent over all dimensions."""
        return min(self.extents())

    def max_extent(self) -> float:
        """The largest extent over all dimensions."""
        return max(self.extents())

    def centroid(self) -> Vector:
        """The geometric centre of the box."""
        return tuple(lo + e / 2.0 for lo, e in zip(self.min, self.extents()))

    def contains_aabb(self, other: "AxisAlignedBoundingBox") -> bool:
        """Whether either corner of the other box lies in this (half-open) box."""
        return self.contains_point(other.min) or self.contains_point(other.max)

    def contains_point(self, point: Sequence[float]) -> bool:
        """Whether the point lies in the box, which is half-open towards max."""
        _check_dim(self.dim, point)
        return all(lo <= p for lo, p in zip(self.min, point)) and all(
            p < hi for p, hi in zip(point, self.max)
        )

    def translate(self, vector: Sequence[float]) -> "AxisAlignedBoundingBox":
        """The box moved by the given vector."""
        _check_dim(self.dim, vector)
        return AxisAlignedBoundingBox(
            [lo + v for lo, v in zip(self.min, vector)],
            [hi + v for hi, v in zip(self.max, vector)],
        )

    def center_at_origin(self) -> "AxisAlignedBoundingBox":
        """The box moved so that its centroid is at the origin."""
        return self.translate([-c for c in self.centroid()])

    def scale_uniformly(self, scaling: float) -> "AxisAlignedBoundingBox":
        """The box with its extents scaled about its own centroid."""
        center = self.centroid()
        centered = self.center_at_origin()
        scaled = AxisAlignedBoundingBox(
            [lo * scaling for lo in centered.min],
            [hi * scaling for hi in centered.max],
        )
        return scaled.translate(center)

    def join(self, other: "AxisAlignedBoundingBox") -> "AxisAlignedBoundingBox":
        """The smallest box enclosing this box and the other one."""
        _check_dim(self.dim, other.min)
        return AxisAlignedBoundingBox(
            [min(a, b) for a, b in zip(self.min, other.min)],
            [max(a, b) for a, b in zip(self.max, other.max)],
        )

    def join_with_point(self, point: Sequence[float]) -> "AxisAlignedBoundingBox":
        """The smallest box enclosing this box and the given point."""
        _check_dim(self.dim, point)
        return AxisAlignedBoundingBox(
            [min(a, p) for a, p in zip(self.min, point)],
            [max(a, p) for a, p in zip(self.max, point)],
        )

    def grow_uniformly(self, margin: float) -> "AxisAlignedBoundingBox":
        """The box enlarged by the margin on every side."""
        return AxisAlignedBoundingBox(
            [lo - margin for lo in self.min],
            [hi + margin for hi in self.max],
        )

    def enclosing_cube(self) -> "AxisAlignedBoundingBox":
        """The smallest cube with the same centroid that encloses this box."""
        return AxisAlignedBoundingBox.with_centroid(
            self.centroid(), [self.max_extent()] * self.dim
        )

    def __str__(self) -> str:
        lower = ", ".join(f"{v:.7f}" for v in self.min)
        upper = ", ".join(f"{v:.7f}" for v in self.max)
        return f"AxisAlignedBoundingBox {{ min: [{lower}], max: [{upper}] }}"