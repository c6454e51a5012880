import numpy

from mbr2d.representation import Mbr2dRepresentation
from mbr2d.representation.point import Point
from mbr2d.representation.spatial import BoundedObject, SpatialIndexObject
from mbr2d.utils import merge_dict


def _as_point(p):
    """ Accept a ``Point`` or an ``(x, y)`` sequence. """
    if isinstance(p, Point):
        return p
    return Point.from_sequence(p)


def _format_coordinate(v):
    # Shortest round-trip form, integral values without a trailing ".0".
    return numpy.format_float_positional(v, trim='-')


class MBR (Mbr2dRepresentation, BoundedObject, SpatialIndexObject):
    """
    Minimum bounding rectangle: a closed, axis-aligned rectangle in 2D
    euclidean space described by its lower-left ``(minx, miny)`` and
    upper-right ``(maxx, maxy)`` corners.

    All predicates are boundary inclusive ("touching counts") unless named
    ``completely_*``. A zero-width and zero-height rectangle is a valid MBR
    representing a single location (see ``is_point``).

    The normalizing constructors guarantee ``minx <= maxx`` and
    ``miny <= maxy``. ``new_raw`` stores bounds as given; an inverted MBR is
    accepted (with a logged warning) but all derived geometry on it is
    undefined.

    Most operations return new MBR instances. The ``expand_*`` methods modify
    the instance in place and return it for chaining.

    The class attributes ``EQUALITY_ATOL`` and ``EQUALITY_RTOL`` are used as
    the tolerance attributes when comparing equality and ordering between
    MBR instances, in the same way as ``numpy.allclose``. These may be changed
    on the class level only due to the use of python slots.

    All MBRs share one hash value so that tolerance-equal rectangles collapse
    to a single set member or dictionary key. Hashed lookups are therefore
    linear in collection size, and in-place expansion of a stored MBR does
    not invalidate its hash.
    """

    __slots__ = 'minx', 'miny', 'maxx', 'maxy'

    EQUALITY_ATOL = 1.e-12
    EQUALITY_RTOL = 1.e-9

    def __init__(self, minx, miny, maxx, maxy):
        """
        Create a new MBR from two opposite corners ``(minx, miny)`` and
        ``(maxx, maxy)``.

        Corners may be given in any order: bounds are normalized per axis so
        that the lesser value becomes the minimum.

        :param int|float minx: Horizontal coordinate of one corner.
        :param int|float miny: Vertical coordinate of one corner.
        :param int|float maxx: Horizontal coordinate of the opposite corner.
        :param int|float maxy: Vertical coordinate of the opposite corner.
        """
        x1, y1, x2, y2 = float(minx), float(miny), float(maxx), float(maxy)
        self._set_bounds(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))

    @classmethod
    def new_raw(cls, minx, miny, maxx, maxy):
        """
        Create an MBR storing the given bounds exactly, with no normalization.

        The caller is responsible for ``minx <= maxx`` and ``miny <= maxy``.
        Inverted bounds are kept as given and reported as a warning.

        :rtype: MBR
        """
        inst = cls.__new__(cls)
        inst._set_bounds(minx, miny, maxx, maxy)
        if inst.minx > inst.maxx or inst.miny > inst.maxy:
            cls.get_logger().warning(
                "Constructed MBR with inverted bounds %s, derived geometry is "
                "undefined.", inst.as_tuple()
            )
        return inst

    @classmethod
    def new_default(cls):
        """
        Zero rectangle at the origin.

        Useful as a starting value for accumulation with ``expand_to_include``,
        keeping in mind the accumulated rectangle then always includes the
        origin. See ``envelope_of`` for accumulation without that effect.

        :rtype: MBR
        """
        return cls.new_raw(0., 0., 0., 0.)

    @classmethod
    def from_point(cls, p):
        """
        Degenerate MBR collapsed onto a single location.

        :param Point|collections.abc.Sequence[float] p: Location.
        :rtype: MBR
        """
        p = _as_point(p)
        return cls.new_raw(p.x, p.y, p.x, p.y)

    @classmethod
    def from_bounds(cls, ll, ur):
        """
        Create an MBR from two corner points given in any order.

        :param Point ll: One corner.
        :param Point ur: Opposite corner.
        :rtype: MBR
        """
        lo = ll.componentwise_min(ur)
        hi = ll.componentwise_max(ur)
        return cls.new_raw(lo.x, lo.y, hi.x, hi.y)

    @classmethod
    def from_corners(cls, p1, p2):
        return cls.from_bounds(_as_point(p1), _as_point(p2))

    @classmethod
    def from_array(cls, values):
        """
        Create an MBR from a flat ``(x1, y1, x2, y2)`` sequence of any integer
        or floating point type, normalizing as the constructor does.

        :param collections.abc.Sequence[int|float]|numpy.ndarray values:
            Four corner coordinates.

        :raises ValueError: Input is not a flat sequence of 4 numbers.

        :rtype: MBR
        """
        arr = numpy.asarray(values, dtype=numpy.float64)
        if arr.shape != (4,):
            raise ValueError("Expected a flat sequence of 4 bounds "
                             "(minx, miny, maxx, maxy), got shape {}."
                             .format(arr.shape))
        return cls(*arr.tolist())

    @classmethod
    def from_point_array(cls, values):
        """
        Create a degenerate MBR from an ``(x, y)`` sequence.

        :raises ValueError: Input is not a flat pair of numbers.
        :rtype: MBR
        """
        return cls.from_point(Point.from_sequence(values))

    @classmethod
    def envelope_of(cls, mbrs):
        """
        Compute the envelope of a collection of MBRs.

        Accumulation is seeded from the first element, so unlike starting from
        ``new_default`` the origin is not implicitly included.

        :param collections.abc.Iterable[MBR] mbrs: One or more MBRs.

        :raises ValueError: ``mbrs`` is empty.

        :return: New MBR enclosing all inputs.
        :rtype: MBR
        """
        it = iter(mbrs)
        try:
            env = next(it).copy()
        except StopIteration:
            raise ValueError("Cannot compute the envelope of an empty "
                             "collection of MBRs.")
        count = 1
        for m in it:
            env.expand_to_include(m)
            count += 1
        cls.get_logger().debug("Envelope of %d MBRs: %s", count, env)
        return env

    @classmethod
    def from_config(cls, config_dict, merge_default=True):
        """
        Instantiate from a configuration dictionary, either the flat form
        returned by ``get_config`` or the corner form returned by
        ``as_corner_dict``.

        Bounds are restored exactly as stored (no normalization).

        :raises ValueError: A flat configuration is missing one or more bounds.
        """
        if 'll' in config_dict or 'ur' in config_dict:
            ll = Point.from_config(config_dict['ll'])
            ur = Point.from_config(config_dict['ur'])
            return cls.new_raw(ll.x, ll.y, ur.x, ur.y)

        if merge_default:
            config_dict = merge_dict(cls.get_default_config(), config_dict)
        missing = [k for k in ('minx', 'miny', 'maxx', 'maxy')
                   if config_dict.get(k) is None]
        if missing:
            raise ValueError("MBR configuration is missing bounds: {}"
                             .format(missing))
        return cls.new_raw(**config_dict)

    def _set_bounds(self, minx, miny, maxx, maxy):
        self.minx = float(minx)
        self.miny = float(miny)
        self.maxx = float(maxx)
        self.maxy = float(maxy)

    def __str__(self):
        return self.wkt()

    def __repr__(self):
        return "<{}.{} minx={} miny={} maxx={} maxy={}>"\
            .format(self.__class__.__module__, self.__class__.__name__,
                    self.minx, self.miny, self.maxx, self.maxy)

    def __hash__(self):
        # Tolerance-equal bounds must share a hash, so no bound value is
        # hashed. Membership then falls back to ``__eq__``.
        return hash(MBR)

    def __eq__(self, other):
        """
        Two MBRs are equal if all four bounds match within tolerance.

        :param MBR other: Other MBR instance to test equality against.
        :rtype: bool
        """
        if not isinstance(other, MBR):
            return False
        return self.equals(other)

    def __ne__(self, other):
        return not (self == other)

    def _order(self, other):
        # Sweep order: minx first, then miny.
        for a, b in ((self.minx, other.minx), (self.miny, other.miny)):
            if not numpy.isclose(a, b, rtol=self.EQUALITY_RTOL,
                                 atol=self.EQUALITY_ATOL):
                return -1 if a < b else 1
        return 0

    def __lt__(self, other):
        if not isinstance(other, MBR):
            return NotImplemented
        return self._order(other) < 0

    def __le__(self, other):
        if not isinstance(other, MBR):
            return NotImplemented
        return self._order(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, MBR):
            return NotImplemented
        return self._order(other) > 0

    def __ge__(self, other):
        if not isinstance(other, MBR):
            return NotImplemented
        return self._order(other) >= 0

    def __getitem__(self, index):
        """
        Positional access to bounds: 0=minx, 1=miny, 2=maxx, 3=maxy.

        :raises IndexError: ``index`` outside of ``0..3``.
        """
        if not 0 <= index <= 3:
            raise IndexError("MBR index out of range: {}".format(index))
        return self.as_tuple()[index]

    def __getstate__(self):
        return self.as_tuple()

    def __setstate__(self, state):
        self._set_bounds(*state)

    def get_config(self):
        return {
            'minx': self.minx,
            'miny': self.miny,
            'maxx': self.maxx,
            'maxy': self.maxy,
        }

    def as_corner_dict(self):
        """
        :return: JSON-compliant corner form ``{"ll": {"x", "y"}, "ur": {...}}``
            accepted by ``from_config``.
        :rtype: dict
        """
        return {
            'll': self.ll.get_config(),
            'ur': self.ur.get_config(),
        }

    def copy(self):
        return self.new_raw(*self.as_tuple())

    #
    # Accessors
    #

    @property
    def ll(self):
        """ Lower-left corner. """
        return Point(self.minx, self.miny)

    @property
    def ur(self):
        """ Upper-right corner. """
        return Point(self.maxx, self.maxy)

    def llur(self):
        return self.ll, self.ur

    @property
    def width(self):
        return self.maxx - self.minx

    @property
    def height(self):
        return self.maxy - self.miny

    @property
    def area(self):
        return self.width * self.height

    @property
    def centre(self):
        """
        :return: Midpoint of this rectangle.
        :rtype: Point
        """
        return Point((self.minx + self.maxx) / 2.0,
                     (self.miny + self.maxy) / 2.0)

    def as_tuple(self):
        """
        :return: ``(minx, miny, maxx, maxy)``
        :rtype: (float, float, float, float)
        """
        return self.minx, self.miny, self.maxx, self.maxy

    def as_array(self):
        """
        :return: ``[minx, miny, maxx, maxy]`` as a float64 array.
        :rtype: numpy.ndarray
        """
        return numpy.array(self.as_tuple(), dtype=numpy.float64)

    def as_poly_array(self):
        """
        Boundary of this rectangle as a closed ring of 5 points, traversed
        lower-left, upper-left, upper-right, lower-right and back to
        lower-left.

        :rtype: list[Point]
        """
        return [
            Point(self.minx, self.miny),
            Point(self.minx, self.maxy),
            Point(self.maxx, self.maxy),
            Point(self.maxx, self.miny),
            Point(self.minx, self.miny),
        ]

    def wkt(self):
        """
        Well-known text polygon of this rectangle, e.g.
        ``POLYGON ((0 0,0 2,2 2,2 0,0 0))``.

        :rtype: str
        """
        return "POLYGON (({lx} {ly},{lx} {uy},{ux} {uy},{ux} {ly},{lx} {ly}))"\
            .format(lx=_format_coordinate(self.minx),
                    ly=_format_coordinate(self.miny),
                    ux=_format_coordinate(self.maxx),
                    uy=_format_coordinate(self.maxy))

    #
    # Spatial index integration
    #

    def bbox(self):
        return self

    def envelope(self):
        return self.from_corners(self.ll, self.ur)

    def distance_2(self, point):
        return self.distance_square(self.from_point(point))

    #
    # Mutation
    #

    def expand_to_include(self, other):
        """
        Grow this rectangle in place to also cover ``other``.

        :param MBR other: Rectangle to include.
        :return: This instance.
        :rtype: MBR
        """
        if other.minx < self.minx:
            self.minx = other.minx
        if other.maxx > self.maxx:
            self.maxx = other.maxx
        if other.miny < self.miny:
            self.miny = other.miny
        if other.maxy > self.maxy:
            self.maxy = other.maxy
        return self

    def expand_to_include_xy(self, x, y):
        """
        Grow this rectangle in place to also cover location ``(x, y)``. At
        most one bound per axis changes.

        :return: This instance.
        :rtype: MBR
        """
        x, y = float(x), float(y)
        if x < self.minx:
            self.minx = x
        elif x > self.maxx:
            self.maxx = x

        if y < self.miny:
            self.miny = y
        elif y > self.maxy:
            self.maxy = y
        return self

    def expand_to_include_point(self, p):
        p = _as_point(p)
        return self.expand_to_include_xy(p.x, p.y)

    def expand_by_delta(self, dx, dy):
        """
        Grow (or shrink, with negative deltas) every side in place by ``dx``
        horizontally and ``dy`` vertically.

        Bounds are re-normalized afterwards, so a shrink larger than the
        rectangle flips it rather than producing inverted bounds.

        :return: This instance.
        :rtype: MBR
        """
        minx, miny = self.minx - dx, self.miny - dy
        maxx, maxy = self.maxx + dx, self.maxy + dy
        self._set_bounds(min(minx, maxx), min(miny, maxy),
                         max(minx, maxx), max(miny, maxy))
        return self

    def translate(self, dx, dy):
        """
        :return: New MBR shifted by ``(dx, dy)``.
        :rtype: MBR
        """
        delta = Point(dx, dy)
        return self.from_bounds(self.ll + delta, self.ur + delta)

    #
    # Predicates
    #

    def equals(self, other):
        """
        :param MBR other: Other MBR.
        :return: If all four bounds match within tolerance.
        :rtype: bool
        """
        return bool(numpy.allclose(self.as_tuple(), other.as_tuple(),
                                   rtol=self.EQUALITY_RTOL,
                                   atol=self.EQUALITY_ATOL))

    def is_point(self):
        """
        :return: If this rectangle has zero width and height, i.e. its centre
            coincides with its lower-left corner. Only the absolute tolerance
            ``EQUALITY_ATOL`` applies, so the result does not depend on how
            far the rectangle is from the origin.
        :rtype: bool
        """
        return bool(numpy.allclose((self.width, self.height), 0.,
                                   rtol=0., atol=self.EQUALITY_ATOL))

    def contains_xy(self, x, y):
        return (self.minx <= x <= self.maxx) and (self.miny <= y <= self.maxy)

    def completely_contains_xy(self, x, y):
        """ Boundary-exclusive ``contains_xy``. """
        return (self.minx < x < self.maxx) and (self.miny < y < self.maxy)

    def contains(self, other):
        """
        :param MBR other: Other MBR.
        :return: If ``other`` lies within this rectangle, boundaries may touch.
        :rtype: bool
        """
        return (other.minx >= self.minx and
                other.miny >= self.miny and
                other.maxx <= self.maxx and
                other.maxy <= self.maxy)

    def completely_contains(self, other):
        """
        :param MBR other: Other MBR.
        :return: If ``other`` lies within this rectangle without touching its
            boundary.
        :rtype: bool
        """
        return (other.minx > self.minx and
                other.miny > self.miny and
                other.maxx < self.maxx and
                other.maxy < self.maxy)

    def intersects(self, other):
        """
        :param MBR other: Other MBR.
        :return: If the rectangles share at least one location. Touching edges
            or corners count as intersecting.
        :rtype: bool
        """
        return not (other.minx > self.maxx or
                    other.maxx < self.minx or
                    other.miny > self.maxy or
                    other.maxy < self.miny)

    def intersects_xy(self, x, y):
        return self.contains_xy(x, y)

    def intersects_point(self, p):
        p = _as_point(p)
        return self.contains_xy(p.x, p.y)

    def intersects_bounds(self, p1, p2):
        """
        Test intersection against the rectangle spanned by two corner points
        given in any order, without constructing it.

        :param Point p1: One corner.
        :param Point p2: Opposite corner.
        :rtype: bool
        """
        p1, p2 = _as_point(p1), _as_point(p2)
        minx, maxx = min(p1.x, p2.x), max(p1.x, p2.x)
        miny, maxy = min(p1.y, p2.y), max(p1.y, p2.y)
        return not (minx > self.maxx or
                    maxx < self.minx or
                    miny > self.maxy or
                    maxy < self.miny)

    def disjoint(self, other):
        return not self.intersects(other)

    #
    # Intersection, union and distance
    #

    def intersection(self, other):
        """
        Get the MBR that represents the overlap between this rectangle and
        ``other``.

        Rectangles that only touch produce a degenerate (zero width and/or
        height) intersection.

        :param MBR other: Other MBR.

        :return: An MBR instance if the rectangles intersect, or None if they
            are disjoint.
        :rtype: MBR | None
        """
        if not self.intersects(other):
            return None
        return self.__class__(max(self.minx, other.minx),
                              max(self.miny, other.miny),
                              min(self.maxx, other.maxx),
                              min(self.maxy, other.maxy))

    def union(self, other):
        """
        Smallest MBR containing both this rectangle and ``other``. Defined for
        disjoint rectangles as well.

        :param MBR other: Other MBR.
        :rtype: MBR
        """
        return self.new_raw(min(self.minx, other.minx),
                            min(self.miny, other.miny),
                            max(self.maxx, other.maxx),
                            max(self.maxy, other.maxy))

    def merge(self, other):
        """ Same as ``union``. """
        return self.union(other)

    def _distance_dxdy(self, other):
        dx = dy = 0.0

        # closest edges along x
        if self.maxx < other.minx:
            dx = other.minx - self.maxx
        elif self.minx > other.maxx:
            dx = self.minx - other.maxx

        # closest edges along y
        if self.maxy < other.miny:
            dy = other.miny - self.maxy
        elif self.miny > other.maxy:
            dy = self.miny - other.maxy

        return dx, dy

    def distance(self, other):
        """
        Euclidean distance between the nearest edges of this rectangle and
        ``other``. Intersecting rectangles are at distance 0. Rectangles that
        overlap along one axis only are at the perpendicular distance along
        the other.

        :param MBR other: Other MBR.
        :rtype: float
        """
        if self.intersects(other):
            return 0.0
        dx, dy = self._distance_dxdy(other)
        return float(numpy.hypot(dx, dy))

    def distance_square(self, other):
        """
        Squared ``distance``, for callers only needing relative ordering.

        :param MBR other: Other MBR.
        :rtype: float
        """
        if self.intersects(other):
            return 0.0
        dx, dy = self._distance_dxdy(other)
        return (dx * dx) + (dy * dy)
