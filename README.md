# splashsurf

Building blocks for reconstructing surfaces from particle data of SPH
(smoothed particle hydrodynamics) simulations. The package has no
dependencies beyond the Python standard library.

## Modules

- `splashsurf.aabb`: `AxisAlignedBoundingBox`, an immutable axis-aligned
  bounding box of any dimension. It supports joins with points and boxes,
  growing, translating, centring, uniform scaling, enclosing cubes, and
  containment tests. A box is half-open: a point on its max side lies outside.
- `splashsurf.generic_tree`: traversal of any object that has a `children`
  sequence, with `TreeNode` as a ready-made node type. The module provides:
  - iterators: `dfs_iter` and `bfs_iter`;
  - sequential visitors: `visit_mut_dfs` and `visit_mut_bfs`;
  - thread-pool visitors: `par_visit_bfs`, `par_visit_mut_bfs` and
    `par_visit_mut_dfs_post`;
  - versions that re-raise the first error a visitor raises:
    `try_par_visit_bfs` and `try_par_visit_mut_dfs_post`.
- `splashsurf.parameters`: the reconstruction parameter types. These are
  `Parameters`, `SpatialDecompositionParameters`, `SubdivisionCriterion` and
  `ParticleDensityComputationStrategy`. The module also has the `Switch`
  on/off type and the raw `ReconstructOptions`, together with their defaults.
  `ReconstructionRunnerArgs.from_options` validates the options and turns them
  into parameters. Invalid input raises `ParameterError`.
- `splashsurf.paths`: `ReconstructionRunnerPathCollection` and
  `ReconstructionRunnerPaths` work out the input and output paths of a
  reconstruction job. `build_parser` and `parse_reconstruct_args` parse the
  `reconstruct` options into a `ReconstructOptions`.
- `splashsurf.convert`: helpers for file conversion:
  - `check_overwrite` raises `ConvertError` if the output exists and
    overwriting is off;
  - `select_input` chooses between a particle and a mesh input;
  - `filter_particles` keeps only the particles inside a domain.
- `splashsurf.logging_setup`: configures the `splashsurf` logger.
  - `VerbosityLevel.from_count` maps a count of `-v` flags to a verbosity
    level.
  - `resolve_log_level` and `initialize_logging` take a verbosity, a quiet
    flag and the `SPLASHSURF_LOG` environment variable. The variable accepts
    `off`, `error`, `warn`, `info`, `debug` or `trace`. Unknown values fall
    back to INFO and are reported.
  - `log_error` logs an exception and its chain of causes.
  - `format_command_line` joins the arguments of a command line.

## Bounding boxes

```python
from splashsurf.aabb import AxisAlignedBoundingBox

box = AxisAlignedBoundingBox.from_points([(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)])

box.contains_point((0.5, 0.5, 0.5))   # True
box.contains_point((1.0, 0.0, 0.0))   # False, the max side is open
box.is_consistent()                   # True

bigger = box.grow_uniformly(0.5)
cube = box.join_with_point((3.0, 0.0, 0.0)).enclosing_cube()
```

## Tree traversal

```python
from splashsurf.generic_tree import TreeNode, dfs_iter, visit_mut_bfs

root = TreeNode("root")
a = root.add_child("a")
a.add_child("a1")
root.add_child("b")

[n.data for n in dfs_iter(root)]   # ['root', 'a', 'a1', 'b']
```

`bfs_iter` enqueues each node's children in reverse order. Breadth-first
visitors run before a node's children are enqueued, so a visitor may change
them. Post-order visitors run after all of a node's children have been
visited.

## Reconstruction options and paths

```python
from splashsurf.paths import parse_reconstruct_args, ReconstructionRunnerPathCollection
from splashsurf.parameters import ReconstructionRunnerArgs

options = parse_reconstruct_args([
    "-s", "data/particles_{}.vtk",
    "--particle-radius", "0.025", "--smoothing-length", "2.0", "--cube-size", "0.5",
])
args = ReconstructionRunnerArgs.from_options(options)
jobs = ReconstructionRunnerPathCollection.from_options(options).collect()
```

In `ReconstructionRunnerArgs`, the compact support radius is
`particle_radius * 2 * smoothing_length`. The cube size is
`particle_radius * cube_size`.

For a single input file, the default output is `<stem>_surface.vtk`.

For a sequence pattern such as `data/particles_{}.vtk`:

- The files are numbered from 1, and numbering stops at the first number whose
  file is missing.
- The outputs are named `particles_surface_{}.vtk`, with the number filled in.
- No density map or octree outputs are assigned.

If `--output-dir` is given, all outputs go below it, and the directory is
created if it is missing.

## What the package does not do

The package holds only the supporting parts of a surface reconstruction
tool. It does not reconstruct surfaces itself. Nor does it:

- compute densities or run marching cubes;
- read or write particle or mesh files;
- install a command-line program.

The parsed options and paths are meant to be handed to a reconstruction
routine that you supply.

## Running the tests

Install the `test` extra; the tests then run with pytest.