from . import bounds, layouts, node, path, settings, sketch, spatial_index, world
from .bounds import Bounds
from .node import Node
from .path import InjectionMode, Path
from .spatial_index import SpatialIndex
from .world import World

__all__ = [
    "bounds",
    "layouts",
    "node",
    "path",
    "settings",
    "sketch",
    "spatial_index",
    "world",
    "Bounds",
    "InjectionMode",
    "Node",
    "Path",
    "SpatialIndex",
    "World",
]
