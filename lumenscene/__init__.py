"""Vector and matrix math, ray-tree visualisation, a sphere primitive and progressive radiosity."""

__version__ = "0.1.0"

__all__ = [
    "boundingbox",
    "hit",
    "matrix",
    "radiosity",
    "raytree",
    "settings",
    "sphere",
    "utils",
    "vectors",
]