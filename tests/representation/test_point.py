import pickle

import numpy
import pytest

from mbr2d.representation.point import Point
from mbr2d.utils.configuration import configuration_test_helper


def test_configuration():
    """ test standard instance configuration """
    inst = Point(0.5, -2)
    for i in configuration_test_helper(inst):  # type: Point
        assert i.x == 0.5
        assert i.y == -2.0


def test_point_coordinates_are_float():
    p = Point(numpy.int16(3), 4)
    assert isinstance(p.x, float)
    assert isinstance(p.y, float)
    assert p.as_tuple() == (3.0, 4.0)


@pytest.mark.parametrize('seq', [(1, 2), [1.0, 2.0], numpy.array([1, 2])],
                         ids=['tuple', 'list', 'numpy.array'])
def test_from_sequence(seq):
    assert Point.from_sequence(seq).as_tuple() == (1.0, 2.0)


def test_from_sequence_bad_shape():
    with pytest.raises(ValueError, match=r"Expected an \(x, y\) coordinate "
                                         r"pair, got shape \(3,\)\."):
        Point.from_sequence([1, 2, 3])


def test_point_str_repr():
    assert str(Point(0, 1.5)) == "<Point [0.0, 1.5]>"
    assert repr(Point(0, 1.5)) == \
        "<mbr2d.representation.point.Point x=0.0 y=1.5>"


def test_point_equality_tolerance():
    e = 1e-13
    assert Point(1, 2) == Point(1 + e, 2 - e)
    assert Point(1, 2) != Point(1 + 1e-6, 2)
    assert not (Point(1, 2) == (1, 2))


def test_point_hash():
    assert hash(Point(1, 2)) == hash(Point(1 + 1e-13, 2))
    assert len({Point(0.1 + 0.2, 1), Point(0.3, 1)}) == 1
    assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


def test_point_add():
    assert Point(1, 2) + Point(0.5, -3) == Point(1.5, -1)


def test_point_add_non_point():
    with pytest.raises(TypeError):
        # noinspection PyStatementEffect
        Point(1, 2) + (1, 1)


def test_componentwise_min_max():
    a = Point(0, 5)
    b = Point(3, -1)
    assert a.componentwise_min(b) == Point(0, -1)
    assert a.componentwise_max(b) == Point(3, 5)


def test_serialize_deserialize_pickle():
    p = Point(4.2, 8.9)
    p2 = pickle.loads(pickle.dumps(p))
    assert p2.as_tuple() == (4.2, 8.9)
