[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lumenscene"
version = "0.1.0"
description = "Vector and matrix math, ray-tree visualisation, a sphere primitive and a progressive radiosity solver for a small global-illumination renderer"
requires-python = ">=3.10"
dependencies = []
keywords = ["radiosity", "ray tracing", "rendering", "global illumination", "geometry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lumenscene"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
