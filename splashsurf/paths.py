"""Input and output paths of the ``reconstruct`` subcommand and its command line parser."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from splashsurf.parameters import ParameterError, ReconstructOptions, Switch

logger = logging.getLogger("splashsurf.paths")

_OUTPUT_SUFFIX = "surface"
_PLACEHOLDER = "{}"


@dataclass
class ReconstructionRunnerPaths:
    """All file paths relevant for a single surface reconstruction task."""

    input_file: Path
    output_file: Path
    output_density_map_points_file: Path | None = None
    output_density_map_grid_file: Path | None = None
    output_octree_file: Path | None = None
    compute_normals: bool = False
    sph_normals: bool = True
    attributes: list[str] = field(default_factory=list)


def _ensure_parent_dir(output_file: Path) -> None:
    output_dir = output_file.parent
    if output_dir.exists():
        return
    logger.info(
        'The output directory "%s" of the output file "%s" does not exist. '
        "Trying to create it now...",
        output_dir,
        output_file,
    )
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise ParameterError(
            f'Unable to create output directory "{output_dir}"'
        ) from err


@dataclass
class ReconstructionRunnerPathCollection:
    """Input file or file sequence pattern together with the output locations."""

    is_sequence: bool
    input_file: Path
    output_file: Path
    output_density_map_points_file: Path | None = None
    output_density_map_grid_file: Path | None = None
    output_octree_file: Path | None = None
    compute_normals: bool = False
    sph_normals: bool = True
    attributes: list[str] = field(default_factory=list)

    @classmethod
    def _create(
        cls,
        *,
        is_sequence: bool,
        input_file: Path,
        output_base_path: Path | None,
        output_file: Path,
        output_dm_points: Path | None,
        output_dm_grid: Path | None,
        output_octree: Path | None,
        compute_normals: bool,
        sph_normals: bool,
        attributes: Sequence[str],
    ) -> "ReconstructionRunnerPathCollection":
        def under_base(path: Path | None) -> Path | None:
            if path is None or output_base_path is None:
                return path
            return output_base_path / path

        if output_base_path is not None:
            output_file = output_base_path / output_file
            _ensure_parent_dir(output_file)

        return cls(
            is_sequence=is_sequence,
            input_file=input_file,
            output_file=output_file,
            output_density_map_points_file=under_base(output_dm_points),
            output_density_map_grid_file=under_base(output_dm_grid),
            output_octree_file=under_base(output_octree),
            compute_normals=compute_normals,
            sph_normals=sph_normals,
            attributes=list(attributes),
        )

    @classmethod
    def from_options(
        cls, options: ReconstructOptions
    ) -> "ReconstructionRunnerPathCollection":
        """Validates the input path options and derives the output paths."""
        common = dict(
            output_base_path=options.output_dir,
            output_dm_points=options.output_dm_points,
            output_dm_grid=options.output_dm_grid,
            output_octree=options.output_octree,
            compute_normals=bool(options.normals),
            sph_normals=bool(options.sph_normals),
            attributes=options.interpolate_attributes,
        )

        if options.input_file is not None:
            input_file = Path(options.input_file)
            if not input_file.is_file():
                raise ParameterError(f'Input file does not exist: "{input_file}"')
            if options.output_file is not None:
                output_file = Path(options.output_file)
            else:
                output_file = Path(f"{input_file.stem}_{_OUTPUT_SUFFIX}.vtk")
            return cls._create(
                is_sequence=False,
                input_file=input_file,
                output_file=output_file,
                **common,
            )

        if options.input_sequence is not None:
            pattern = Path(options.input_sequence)
            if pattern.name in ("", ".."):
                raise ParameterError(
                    f'The input file path "{pattern}" does not end with a filename'
                )

            input_dir = pattern.parent
            if input_dir != Path(".") and not input_dir.is_dir():
                raise ParameterError(
                    f'The parent directory "{input_dir}" of the input file path '
                    f'"{pattern}" does not exist'
                )

            if _PLACEHOLDER not in pattern.name:
                raise ParameterError(
                    f'The input sequence pattern "{pattern}" does not contain a '
                    'place holder "{}"'
                )

            output_name = (
                pattern.stem.replace(_PLACEHOLDER, f"{_OUTPUT_SUFFIX}_{_PLACEHOLDER}")
                + ".vtk"
            )
            return cls._create(
                is_sequence=True,
                input_file=pattern,
                output_file=Path(output_name),
                **common,
            )

        raise ParameterError(
            "Neither an input file path or input sequence pattern was provided"
        )

    def collect(self) -> list[ReconstructionRunnerPaths]:
        """One path set per input file; a sequence stops at the first missing index."""
        if not self.is_sequence:
            return [
                ReconstructionRunnerPaths(
                    input_file=self.input_file,
                    output_file=self.output_file,
                    output_density_map_points_file=self.output_density_map_points_file,
                    output_density_map_grid_file=self.output_density_map_grid_file,
                    output_octree_file=self.output_octree_file,
                    compute_normals=self.compute_normals,
                    sph_normals=self.sph_normals,
                    attributes=list(self.attributes),
                )
            ]

        input_dir = self.input_file.parent
        output_dir = self.output_file.parent
        input_name = self.input_file.name
        output_name = self.output_file.name

        paths = []
        index = 1
        while True:
            input_file = input_dir / input_name.replace(_PLACEHOLDER, str(index))
            if not input_file.is_file():
                break
            # Density maps and octrees are not written for file sequences
            paths.append(
                ReconstructionRunnerPaths(
                    input_file=input_file,
                    output_file=output_dir
                    / output_name.replace(_PLACEHOLDER, str(index)),
                    compute_normals=self.compute_normals,
                    sph_normals=self.sph_normals,
                    attributes=list(self.attributes),
                )
            )
            index += 1
        return paths


def _switch(value: str) -> Switch:
    try:
        return Switch.parse(value)
    except ParameterError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def _vector3(value: str) -> list[float]:
    parts = [p for p in value.split(";")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(
            f"expected three values separated by ';', got {value!r}"
        )
    try:
        return [float(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number in {value!r}") from None


def _attribute_list(value: str) -> list[str]:
    return [name for name in value.split(",") if name]


def build_parser() -> argparse.ArgumentParser:
    """Command line parser for the ``reconstruct`` subcommand."""
    parser = argparse.ArgumentParser(
        prog="splashsurf reconstruct",
        description="Reconstruct a surface from particle data",
    )

    def add_switch(*flags: str, default: Switch, help: str, dest: str | None = None):
        kwargs = dict(type=_switch, default=default, metavar="{on,off}", help=help)
        if dest is not None:
            kwargs["dest"] = dest
        parser.add_argument(*flags, **kwargs)

    files = parser.add_argument_group("input/output files")
    files.add_argument("-i", "--input-file", type=Path, help="Input particle file")
    files.add_argument(
        "-s",
        "--input-sequence",
        type=Path,
        help="Sequence of particle files, use {} in the filename as placeholder",
    )
    files.add_argument(
        "-o",
        "--output-file",
        type=Path,
        help='Output surface file (default: "{original_filename}_surface.vtk")',
    )
    files.add_argument("--output-dir", type=Path, help="Base directory for all outputs")

    parser.add_argument("--particle-radius", type=float, required=True)
    parser.add_argument("--rest-density", type=float, default=1000.0)
    parser.add_argument("--smoothing-length", type=float, required=True)
    parser.add_argument("--cube-size", type=float, required=True)
    parser.add_argument("--surface-threshold", type=float, default=0.6)

    add_switch(
        "-d",
        "--double-precision",
        default=Switch.OFF,
        help="Use double precision for all computations",
    )
    parser.add_argument(
        "--domain-min",
        type=_vector3,
        metavar="X;Y;Z",
        help="Lower corner of the reconstruction domain (requires --domain-max)",
    )
    parser.add_argument(
        "--domain-max",
        type=_vector3,
        metavar="X;Y;Z",
        help="Upper corner of the reconstruction domain (requires --domain-min)",
    )

    add_switch(
        "--mt-files",
        dest="parallelize_over_files",
        default=Switch.OFF,
        help="Process multiple input files in parallel",
    )
    add_switch(
        "--mt-particles",
        dest="parallelize_over_particles",
        default=Switch.ON,
        help="Process chunks of particles of one file in parallel",
    )
    parser.add_argument("-n", "--num-threads", type=int)

    add_switch("--octree-decomposition", default=Switch.ON, help="Use octree decomposition")
    add_switch(
        "--octree-stitch-subdomains",
        default=Switch.ON,
        help="Stitch the local meshes of the subdomains",
    )
    parser.add_argument("--octree-max-particles", type=int)
    parser.add_argument("--octree-ghost-margin-factor", type=float)
    add_switch(
        "--octree-global-density",
        default=Switch.OFF,
        help="Compute particle densities globally before decomposition",
    )
    add_switch(
        "--octree-sync-local-density",
        default=Switch.ON,
        help="Synchronize densities of ghost particles between subdomains",
    )

    parser.add_argument("--output-dm-points", type=Path)
    parser.add_argument("--output-dm-grid", type=Path)
    parser.add_argument("--output-octree", type=Path)

    add_switch("--normals", default=Switch.OFF, help="Compute surface normals")
    add_switch(
        "--sph-normals",
        default=Switch.ON,
        help="Compute normals by SPH interpolation",
    )
    parser.add_argument(
        "--interpolate-attributes",
        type=_attribute_list,
        action="append",
        default=None,
        help="Comma separated point attributes to interpolate to the surface",
    )

    add_switch(
        "--check-mesh",
        default=Switch.OFF,
        help="Check the final mesh for topological problems",
    )
    return parser


def parse_reconstruct_args(argv: Sequence[str] | None = None) -> ReconstructOptions:
    """Parses the ``reconstruct`` command line into options."""
    parser = build_parser()
    namespace = parser.parse_args(argv)

    if (namespace.domain_min is None) != (namespace.domain_max is None):
        parser.error("--domain-min and --domain-max have to be specified together")

    values = vars(namespace)
    attributes = values.pop("interpolate_attributes") or []
    values["interpolate_attributes"] = [name for group in attributes for name in group]
    return ReconstructOptions(**values)