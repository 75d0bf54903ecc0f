"""Parameters of the ``reconstruct`` subcommand and their conversion to reconstruction settings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from splashsurf.aabb import AxisAlignedBoundingBox


class ParameterError(ValueError):
    """Raised when command line parameters are invalid or contradict each other."""


class Switch(enum.Enum):
    """An on/off command line switch."""

    OFF = "off"
    ON = "on"

    @classmethod
    def parse(cls, value: "Switch | bool | str") -> "Switch":
        """Parses ``on``/``off`` (case-insensitive), a bool or an existing switch."""
        if isinstance(value, Switch):
            return value
        if isinstance(value, bool):
            return cls.ON if value else cls.OFF
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ParameterError(
            f"Invalid switch value {value!r}, possible values are: on, off"
        )

    def __bool__(self) -> bool:
        return self is Switch.ON


class ParticleDensityComputationStrategy(enum.Enum):
    """How particle densities are computed when the domain is decomposed."""

    GLOBAL = "global"
    SYNCHRONIZE_SUBDOMAINS = "synchronize_subdomains"
    INDEPENDENT_SUBDOMAINS = "independent_subdomains"


@dataclass(frozen=True)
class SubdivisionCriterion:
    """Maximum particle count of octree leaves; ``None`` means it is chosen automatically."""

    max_particle_count: int | None = None

    @property
    def is_auto(self) -> bool:
        """Whether the maximum particle count is chosen automatically."""
        return self.max_particle_count is None


@dataclass(frozen=True)
class SpatialDecompositionParameters:
    """Settings of the octree based spatial decomposition."""

    subdivision_criterion: SubdivisionCriterion
    ghost_particle_safety_factor: float | None
    enable_stitching: bool
    particle_density_computation: ParticleDensityComputationStrategy


@dataclass(frozen=True)
class Parameters:
    """All parameters of a surface reconstruction."""

    particle_radius: float
    rest_density: float
    compact_support_radius: float
    cube_size: float
    iso_surface_threshold: float
    domain_aabb: AxisAlignedBoundingBox | None
    enable_multi_threading: bool
    spatial_decomposition: SpatialDecompositionParameters | None


_SWITCH_FIELDS = (
    "double_precision",
    "parallelize_over_files",
    "parallelize_over_particles",
    "octree_decomposition",
    "octree_stitch_subdomains",
    "octree_global_density",
    "octree_sync_local_density",
    "normals",
    "sph_normals",
    "check_mesh",
)

_PATH_FIELDS = (
    "input_file",
    "input_sequence",
    "output_file",
    "output_dir",
    "output_dm_points",
    "output_dm_grid",
    "output_octree",
)


@dataclass(kw_only=True)
class ReconstructOptions:
    """Raw options of the ``reconstruct`` subcommand with their command line defaults."""

    input_file: Path | None = None
    input_sequence: Path | None = None
    output_file: Path | None = None
    output_dir: Path | None = None

    particle_radius: float
    rest_density: float = 1000.0
    smoothing_length: float
    cube_size: float
    surface_threshold: float = 0.6

    double_precision: Switch = Switch.OFF
    domain_min: Sequence[float] | None = None
    domain_max: Sequence[float] | None = None

    parallelize_over_files: Switch = Switch.OFF
    parallelize_over_particles: Switch = Switch.ON
    num_threads: int | None = None

    octree_decomposition: Switch = Switch.ON
    octree_stitch_subdomains: Switch = Switch.ON
    octree_max_particles: int | None = None
    octree_ghost_margin_factor: float | None = None
    octree_global_density: Switch = Switch.OFF
    octree_sync_local_density: Switch = Switch.ON

    output_dm_points: Path | None = None
    output_dm_grid: Path | None = None
    output_octree: Path | None = None

    normals: Switch = Switch.OFF
    sph_normals: Switch = Switch.ON
    interpolate_attributes: list[str] = field(default_factory=list)

    check_mesh: Switch = Switch.OFF

    def __post_init__(self) -> None:
        for name in _SWITCH_FIELDS:
            setattr(self, name, Switch.parse(getattr(self, name)))
        for name in _PATH_FIELDS:
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, Path(value))
        self.interpolate_attributes = list(self.interpolate_attributes)


def domain_from_bounds(
    domain_min: Sequence[float] | None, domain_max: Sequence[float] | None
) -> AxisAlignedBoundingBox | None:
    """Builds and validates the user specified reconstruction domain, if any."""
    if domain_min is None and domain_max is None:
        return None
    if domain_min is None or domain_max is None:
        raise ParameterError("Both domain-min and domain-max have to be specified.")
    if len(domain_min) != 3 or len(domain_max) != 3:
        raise ParameterError(
            "domain-min and domain-max require exactly three values each."
        )

    aabb = AxisAlignedBoundingBox(domain_min, domain_max)
    if not aabb.is_consistent():
        raise ParameterError(
            "The user specified domain min/max values are inconsistent! "
            f"min: {list(aabb.min)} max: {list(aabb.max)}"
        )
    if aabb.is_degenerate():
        raise ParameterError(
            "The user specified domain is degenerate! "
            f"min: {list(aabb.min)} max: {list(aabb.max)}"
        )
    return aabb


def _spatial_decomposition(
    options: ReconstructOptions,
) -> SpatialDecompositionParameters | None:
    if not options.octree_decomposition:
        return None

    criterion = SubdivisionCriterion(options.octree_max_particles)

    global_density = bool(options.octree_global_density)
    sync_density = bool(options.octree_sync_local_density)
    if global_density and sync_density:
        raise ParameterError(
            "Cannot enable both global and merged local particle density computation "
            "at the same time. Switch off at least one."
        )
    if global_density:
        strategy = ParticleDensityComputationStrategy.GLOBAL
    elif sync_density:
        strategy = ParticleDensityComputationStrategy.SYNCHRONIZE_SUBDOMAINS
    else:
        strategy = ParticleDensityComputationStrategy.INDEPENDENT_SUBDOMAINS

    return SpatialDecompositionParameters(
        subdivision_criterion=criterion,
        ghost_particle_safety_factor=options.octree_ghost_margin_factor,
        enable_stitching=bool(options.octree_stitch_subdomains),
        particle_density_computation=strategy,
    )


@dataclass(frozen=True)
class ReconstructionRunnerArgs:
    """Reconstruction settings derived from the raw command line options."""

    params: Parameters
    use_double_precision: bool
    check_mesh: bool
    num_threads: int | None = None

    @classmethod
    def from_options(cls, options: ReconstructOptions) -> "ReconstructionRunnerArgs":
        """Validates the options and converts them into reconstruction parameters."""
        domain_aabb = domain_from_bounds(options.domain_min, options.domain_max)

        compact_support_radius = (
            options.particle_radius * 2.0 * options.smoothing_length
        )
        cube_size = options.particle_radius * options.cube_size

        params = Parameters(
            particle_radius=options.particle_radius,
            rest_density=options.rest_density,
            compact_support_radius=compact_support_radius,
            cube_size=cube_size,
            iso_surface_threshold=options.surface_threshold,
            domain_aabb=domain_aabb,
            enable_multi_threading=bool(options.parallelize_over_particles),
            spatial_decomposition=_spatial_decomposition(options),
        )

        if options.num_threads is not None and options.num_threads < 0:
            raise ParameterError("The number of threads must not be negative.")

        return cls(
            params=params,
            use_double_precision=bool(options.double_precision),
            check_mesh=bool(options.check_mesh),
            num_threads=options.num_threads,
        )