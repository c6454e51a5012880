import numpy

from mbr2d.representation import Mbr2dRepresentation


class Point (Mbr2dRepresentation):
    """
    Location in 2D euclidean space.

    Equality is tolerance based, using the class attributes ``EQUALITY_ATOL``
    and ``EQUALITY_RTOL`` the same way ``numpy.allclose`` does. These may be
    changed on the class level only due to the use of python slots.
    """

    __slots__ = 'x', 'y'

    EQUALITY_ATOL = 1.e-12
    EQUALITY_RTOL = 1.e-9

    def __init__(self, x, y):
        """
        :param int|float x: Horizontal coordinate.
        :param int|float y: Vertical coordinate.
        """
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def from_sequence(cls, seq):
        """
        Create a point from an ``(x, y)`` pair.

        :param collections.abc.Sequence[int|float]|numpy.ndarray seq:
            Two numeric coordinates.

        :raises ValueError: ``seq`` is not a flat pair of numbers.

        :rtype: Point
        """
        arr = numpy.asarray(seq, dtype=numpy.float64)
        if arr.shape != (2,):
            raise ValueError("Expected an (x, y) coordinate pair, got shape "
                             "{}.".format(arr.shape))
        return cls(*arr.tolist())

    def __str__(self):
        return "<{} [{}, {}]>".format(self.__class__.__name__, self.x, self.y)

    def __repr__(self):
        return "<{}.{} x={} y={}>"\
            .format(self.__class__.__module__, self.__class__.__name__,
                    self.x, self.y)

    def __hash__(self):
        # Tolerance-equal coordinates must share a hash.
        return hash(Point)

    def __eq__(self, other):
        if not isinstance(other, Point):
            return False
        return self.equals(other)

    def __ne__(self, other):
        return not (self == other)

    def __add__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __getstate__(self):
        return self.as_tuple()

    def __setstate__(self, state):
        self.x, self.y = state

    def get_config(self):
        return {
            'x': self.x,
            'y': self.y,
        }

    def equals(self, other):
        """
        :param Point other: Point to compare against.
        :return: If both coordinates match within tolerance.
        :rtype: bool
        """
        return bool(numpy.allclose(self.as_tuple(), other.as_tuple(),
                                   rtol=self.EQUALITY_RTOL,
                                   atol=self.EQUALITY_ATOL))

    def componentwise_min(self, other):
        """ Point made of the smaller coordinate on each axis. """
        return Point(min(self.x, other.x), min(self.y, other.y))

    def componentwise_max(self, other):
        """ Point made of the larger coordinate on each axis. """
        return Point(max(self.x, other.x), max(self.y, other.y))

    def as_tuple(self):
        return self.x, self.y
