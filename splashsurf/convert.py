"""Helpers for the ``convert`` subcommand: input selection, overwrite checks, domain filtering."""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Iterable, Sequence

from splashsurf.aabb import AxisAlignedBoundingBox

logger = logging.getLogger("splashsurf.convert")


class ConvertError(Exception):
    """Raised when a conversion cannot be carried out."""


class InputKind(enum.Enum):
    """Kind of input file given to the conversion."""

    PARTICLES = "particles"
    MESH = "mesh"


def check_overwrite(output_file: str | Path, overwrite: bool) -> Path:
    """Returns the output path, raising if it exists and overwriting is not allowed."""
    path = Path(output_file)
    if not overwrite and path.exists():
        raise ConvertError(
            f'Aborting: Output file "{path}" already exists. Use overwrite flag to ignore this.'
        )
    return path


def select_input(
    input_particles: str | Path | None, input_mesh: str | Path | None
) -> tuple[InputKind, Path]:
    """Decides whether particles or a mesh are to be converted."""
    if input_particles is not None and input_mesh is not None:
        raise ConvertError(
            "Aborting: A particle and a mesh input file cannot be specified at the same time."
        )
    if input_particles is not None:
        return InputKind.PARTICLES, Path(input_particles)
    if input_mesh is not None:
        return InputKind.MESH, Path(input_mesh)
    raise ConvertError(
        "Aborting: No input file specified, either a particle or mesh input file has to be specified."
    )


def filter_particles(
    positions: Iterable[Sequence[float]],
    domain_min: Sequence[float] | None = None,
    domain_max: Sequence[float] | None = None,
) -> list[tuple[float, ...]]:
    """Keeps the particles inside the half-open domain, or all of them if no domain is given."""
    points = [tuple(float(c) for c in p) for p in positions]
    if domain_min is None and domain_max is None:
        return points
    if domain_min is None or domain_max is None:
        raise ConvertError("Both domain-min and domain-max have to be specified.")
    if len(domain_min) != 3 or len(domain_max) != 3:
        raise ConvertError("domain-min and domain-max require exactly three values each.")
    aabb = AxisAlignedBoundingBox(domain_min, domain_max)
    logger.info("Filtering out particles outside of %s", aabb)
    return [p for p in points if aabb.contains_point(p)]