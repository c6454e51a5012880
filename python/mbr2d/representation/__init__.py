from ._interface import Mbr2dRepresentation  # noqa: F401

from .point import Point  # noqa: F401
from .spatial import BoundedObject, SpatialIndexObject  # noqa: F401
from .mbr import MBR  # noqa: F401
