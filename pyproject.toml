[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "splashsurf"
version = "0.9.0"
description = "Building blocks for surface reconstruction of SPH particle data: bounding boxes, tree traversal, reconstruction parameters, input/output paths and logging setup"
requires-python = ">=3.10"
dependencies = []
keywords = ["sph", "particle", "surface", "reconstruction", "aabb", "octree", "tree-traversal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["splashsurf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
