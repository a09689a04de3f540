"""Scene files, PLY meshes, world regions and simple physics for a 3D game engine."""

__version__ = "0.1.0"
__all__ = ["geometry", "filters", "mesh", "regions", "scene", "objectfile", "scenefile", "physics"]