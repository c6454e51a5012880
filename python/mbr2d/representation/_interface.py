from mbr2d.utils import Configurable, Mbr2dObject


#  noinspection PyAbstractClass
class Mbr2dRepresentation (Mbr2dObject, Configurable):
    """
    Interface for geometric value representations.

    Values should be serializable: implementations describe themselves as
    JSON-compliant configuration dictionaries via ``get_config`` and are
    rebuilt via ``from_config``, and support the pickle interface through
    ``__getstate__`` and ``__setstate__``.

    """

    __slots__ = ()
