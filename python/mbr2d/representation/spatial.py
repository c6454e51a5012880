"""
Interfaces through which bounding values plug into a spatial index.

An index (e.g. an R-tree) only needs to know the envelope of what it stores
and how far a query point is from that envelope. Traversal and insertion
logic belong to the index itself.
"""
import abc

from mbr2d.utils import Mbr2dObject


class BoundedObject (Mbr2dObject, metaclass=abc.ABCMeta):
    """
    Object that can report its minimum bounding rectangle.
    """

    __slots__ = ()

    @abc.abstractmethod
    def bbox(self):
        """
        :return: Bounding rectangle of this object.
        :rtype: mbr2d.representation.mbr.MBR
        """


class SpatialIndexObject (Mbr2dObject, metaclass=abc.ABCMeta):
    """
    Object storable in an envelope-based spatial index.
    """

    __slots__ = ()

    @classmethod
    @abc.abstractmethod
    def from_corners(cls, p1, p2):
        """
        Create the axis-aligned envelope spanned by two corner points, given in
        any order.

        :param mbr2d.representation.point.Point p1: First corner.
        :param mbr2d.representation.point.Point p2: Opposite corner.

        :rtype: mbr2d.representation.mbr.MBR
        """

    @abc.abstractmethod
    def envelope(self):
        """
        :return: Axis-aligned envelope of this object.
        :rtype: mbr2d.representation.mbr.MBR
        """

    @abc.abstractmethod
    def distance_2(self, point):
        """
        Squared euclidean distance from ``point`` to this object. Zero when the
        point lies within or on the boundary of the object.

        :param mbr2d.representation.point.Point point: Query location.

        :rtype: float
        """
