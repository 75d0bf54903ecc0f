from pathlib import Path

import pytest

from splashsurf.parameters import ParameterError, ReconstructOptions, Switch
from splashsurf.paths import (
    ReconstructionRunnerPathCollection,
    ReconstructionRunnerPaths,
    build_parser,
    parse_reconstruct_args,
)


def _options(**kwargs):
    base = dict(particle_radius=0.025, smoothing_length=2.0, cube_size=0.5)
    base.update(kwargs)
    return ReconstructOptions(**base)


def _touch(path: Path) -> Path:
    path.write_text("")
    return path


def test_single_file_default_output_name(tmp_path):
    input_file = _touch(tmp_path / "particles.vtk")
    collection = ReconstructionRunnerPathCollection.from_options(
        _options(input_file=input_file)
    )
    assert collection.is_sequence is False
    assert collection.output_file == Path("particles_surface.vtk")


def test_single_file_user_output_name(tmp_path):
    input_file = _touch(tmp_path / "particles.vtk")
    collection = ReconstructionRunnerPathCollection.from_options(
        _options(input_file=input_file, output_file="result.obj")
    )
    assert collection.output_file == Path("result.obj")


def test_missing_input_file_raises(tmp_path):
    with pytest.raises(ParameterError, match="Input file does not exist"):
        ReconstructionRunnerPathCollection.from_options(
            _options(input_file=tmp_path / "missing.vtk")
        )


def test_no_input_raises():
    with pytest.raises(ParameterError, match="Neither an input file path"):
        ReconstructionRunnerPathCollection.from_options(_options())


def test_single_collect_keeps_auxiliary_outputs(tmp_path):
    input_file = _touch(tmp_path / "fluid.xyz")
    collection = ReconstructionRunnerPathCollection.from_options(
        _options(
            input_file=input_file,
            output_dm_points="dm_points.vtk",
            output_octree="octree.vtk",
            normals="on",
            interpolate_attributes=["velocity"],
        )
    )
    paths = collection.collect()
    assert len(paths) == 1
    task = paths[0]
    assert isinstance(task, ReconstructionRunnerPaths)
    assert task.input_file == input_file
    assert task.output_density_map_points_file == Path("dm_points.vtk")
    assert task.output_octree_file == Path("octree.vtk")
    assert task.output_density_map_grid_file is None
    assert task.compute_normals is True
    assert task.attributes == ["velocity"]


def test_output_dir_is_created_and_prefixed(tmp_path):
    input_file = _touch(tmp_path / "particles.vtk")
    out_dir = tmp_path / "out" / "nested"
    collection = ReconstructionRunnerPathCollection.from_options(
        _options(input_file=input_file, output_dir=out_dir, output_dm_grid="grid.vtk")
    )
    assert out_dir.is_dir()
    assert collection.output_file == out_dir / "particles_surface.vtk"
    assert collection.output_density_map_grid_file == out_dir / "grid.vtk"
    assert collection.output_density_map_points_file is None


def test_sequence_without_placeholder_raises(tmp_path):
    with pytest.raises(ParameterError, match="place holder"):
        ReconstructionRunnerPathCollection.from_options(
            _options(input_sequence=tmp_path / "particles.vtk")
        )


def test_sequence_with_missing_parent_raises(tmp_path):
    with pytest.raises(ParameterError, match="does not exist"):
        ReconstructionRunnerPathCollection.from_options(
            _options(input_sequence=tmp_path / "nope" / "particles_{}.vtk")
        )


def test_sequence_collect_stops_at_first_gap(tmp_path):
    for i in (1, 2, 3, 5):
        _touch(tmp_path / f"particles_{i}.vtk")
    collection = ReconstructionRunnerPathCollection.from_options(
        _options(
            input_sequence=tmp_path / "particles_{}.vtk",
            output_dm_points="dm.vtk",
        )
    )
    assert collection.is_sequence is True
    assert collection.output_file == Path("particles_surface_{}.vtk")

    paths = collection.collect()
    assert [p.input_file for p in paths] == [
        tmp_path / f"particles_{i}.vtk" for i in (1, 2, 3)
    ]
    assert [p.output_file.name for p in paths] == [
        f"particles_surface_{i}.vtk" for i in (1, 2, 3)
    ]
    assert all(p.output_density_map_points_file is None for p in paths)


def test_sequence_without_files_collects_nothing(tmp_path):
    collection = ReconstructionRunnerPathCollection.from_options(
        _options(input_sequence=tmp_path / "frame_{}.ply")
    )
    assert collection.collect() == []


def test_relative_sequence_in_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _touch(tmp_path / "frame_1.bgeo")
    collection = ReconstructionRunnerPathCollection.from_options(
        _options(input_sequence="frame_{}.bgeo")
    )
    paths = collection.collect()
    assert len(paths) == 1
    assert paths[0].input_file == Path("frame_1.bgeo")
    assert paths[0].output_file == Path("frame_surface_1.vtk")


def test_parse_defaults():
    options = parse_reconstruct_args(
        [
            "-i",
            "in.vtk",
            "--particle-radius=0.025",
            "--smoothing-length=2.0",
            "--cube-size=0.5",
        ]
    )
    assert options.input_file == Path("in.vtk")
    assert options.particle_radius == 0.025
    assert options.rest_density == 1000.0
    assert options.surface_threshold == 0.6
    assert options.double_precision is Switch.OFF
    assert options.parallelize_over_particles is Switch.ON
    assert options.octree_sync_local_density is Switch.ON
    assert options.interpolate_attributes == []
    assert options.domain_min is None


def test_parse_switches_domain_and_attributes():
    options = parse_reconstruct_args(
        [
            "-s",
            "seq_{}.vtk",
            "--particle-radius=0.1",
            "--smoothing-length=2",
            "--cube-size=0.75",
            "--mt-files=ON",
            "--double-precision=on",
            "--domain-min=0;0;0",
            "--domain-max=1;2;3",
            "--interpolate-attributes=velocity,pressure",
            "--interpolate-attributes=density",
            "-n",
            "4",
        ]
    )
    assert options.parallelize_over_files is Switch.ON
    assert options.double_precision is Switch.ON
    assert list(options.domain_min) == [0.0, 0.0, 0.0]
    assert list(options.domain_max) == [1.0, 2.0, 3.0]
    assert options.interpolate_attributes == ["velocity", "pressure", "density"]
    assert options.num_threads == 4


def test_parse_domain_min_requires_max():
    with pytest.raises(SystemExit):
        parse_reconstruct_args(
            [
                "--particle-radius=0.1",
                "--smoothing-length=2",
                "--cube-size=0.5",
                "--domain-min=0;0;0",
            ]
        )


def test_parse_invalid_switch_value():
    with pytest.raises(SystemExit):
        parse_reconstruct_args(
            [
                "--particle-radius=0.1",
                "--smoothing-length=2",
                "--cube-size=0.5",
                "--normals=maybe",
            ]
        )


def test_parse_missing_required_argument():
    with pytest.raises(SystemExit):
        parse_reconstruct_args(["--particle-radius=0.1", "--cube-size=0.5"])


def test_parser_domain_needs_three_values():
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(
            [
                "--particle-radius=0.1",
                "--smoothing-length=2",
                "--cube-size=0.5",
                "--domain-min=0;0",
            ]
        )