"""
JSON-compliant configuration of mbr2d values.

A ``Configurable`` value describes itself with ``get_config`` and is rebuilt
with ``from_config``. Where a configuration slot may hold one of several
types, the value is wrapped in a typed block naming the chosen type:

.. code-block:: json

    {
        "type": "MBR",
        "MBR": {
            "minx": 0.0,
            "miny": 0.0,
            "maxx": 2.0,
            "maxy": 2.0
        }
    }

"""
import abc
import inspect
import json

from mbr2d.utils.dict import merge_dict


def _init_params(cls):
    """ Constructor parameter names of ``cls``, excluding ``self``. """
    return inspect.getfullargspec(cls.__init__).args[1:]


class Configurable (object, metaclass=abc.ABCMeta):
    """
    Interface for values convertible to and from configuration dictionaries
    of JSON types.
    """

    __slots__ = ()

    @classmethod
    def get_default_config(cls):
        """
        Default configuration for this class, keyed by constructor parameter
        name. Parameters without a default value map to None, so the result is
        a template and not necessarily a valid configuration.

        Star-arguments are ignored.

        >>> # noinspection PyAbstractClass
        >>> class Grid (Configurable):
        ...     def __init__(self, cell_size, origin=(0, 0)):
        ...         pass
        >>> Grid.get_default_config() == {'cell_size': None, 'origin': (0, 0)}
        True

        :rtype: dict
        """
        if cls.__init__ is object.__init__:
            return {}
        params = _init_params(cls)
        defaults = tuple(inspect.getfullargspec(cls.__init__).defaults or ())
        padding = (None,) * (len(params) - len(defaults))
        return dict(zip(params, padding + defaults))

    @classmethod
    def from_config(cls, config_dict, merge_default=True):
        """
        Instantiate from a configuration dictionary by passing its entries as
        constructor keyword arguments. Override when construction must differ.

        :param dict config_dict: JSON compliant configuration.
        :param bool merge_default: Merge ``config_dict`` on top of
            ``get_default_config`` first.

        :rtype: Configurable
        """
        if merge_default:
            config_dict = merge_dict(cls.get_default_config(), config_dict)
        # noinspection PyArgumentList
        return cls(**config_dict)

    @abc.abstractmethod
    def get_config(self):
        """
        :return: JSON type compliant configuration that ``from_config``
            rebuilds an equivalent instance from.
        :rtype: dict
        """


def make_default_config(configurable_iter, default=None):
    """
    Typed configuration template for the given ``Configurable`` types.

    When a ``default`` instance is given, its type is selected and its
    configuration fills that type's block, so the template is usable as is.
    Otherwise the only type is selected when just one is given, and ``type``
    is left None when there are several to choose from.

    >>> from mbr2d.representation import MBR
    >>> make_default_config([MBR], MBR.new_default()) == {
    ...     'type': 'MBR',
    ...     'MBR': {'minx': 0., 'miny': 0., 'maxx': 0., 'maxy': 0.},
    ... }
    True

    :param collections.abc.Iterable[type] configurable_iter: Types that
        subclass ``Configurable``.
    :param Configurable|None default: Instance of one of those types.

    :raises ValueError: A given type is not ``Configurable``, or ``default``
        is not an instance of one of the given types.

    :rtype: dict
    """
    types = list(configurable_iter)
    for t in types:
        if not (isinstance(t, type) and issubclass(t, Configurable)):
            raise ValueError("Not a Configurable type: {!r}".format(t))
    config = {'type': types[0].__name__ if len(types) == 1 else None}
    for t in types:
        config[t.__name__] = t.get_default_config()

    if default is not None:
        if type(default) not in types:
            raise ValueError("Default {!r} is not an instance of the given "
                             "types.".format(default))
        config['type'] = type(default).__name__
        config[config['type']] = default.get_config()
    return config


def to_config_dict(c_inst):
    """
    Wrap the configuration of ``c_inst`` in a typed block.

    >>> from mbr2d.representation import MBR
    >>> to_config_dict(MBR(2, 2, 0, 0)) == {
    ...     "type": "MBR",
    ...     "MBR": {"minx": 0.0, "miny": 0.0, "maxx": 2.0, "maxy": 2.0},
    ... }
    True

    :param Configurable c_inst: Value to describe.

    :raises ValueError: ``c_inst`` is a type or not a ``Configurable``.

    :rtype: dict
    """
    if isinstance(c_inst, type) or not isinstance(c_inst, Configurable):
        raise ValueError("Expected a Configurable instance, got {!r}."
                         .format(c_inst))
    name = type(c_inst).__name__
    return {'type': name, name: c_inst.get_config()}


def from_config_dict(config, type_iter):
    """
    Build the value described by the typed block ``config``.

    :param dict config: Typed configuration block.
    :param collections.abc.Iterable[type] type_iter: Accepted types.

    :raises ValueError: No type is selected, the selected type has no
        configuration block, or it is not one of the accepted types.

    :rtype: Configurable
    """
    type_map = {t.__name__: t for t in type_iter}
    name = config.get('type')
    if name is None:
        raise ValueError("No type selected. Options: {}"
                         .format(sorted(set(config) - {'type'})))
    if name not in config:
        raise ValueError("Selected type '{}' has no configuration block."
                         .format(name))
    if name not in type_map:
        raise ValueError("Selected type '{}' is not one of the accepted "
                         "types: {}".format(name, sorted(type_map)))
    return type_map[name].from_config(config[name])


def configuration_test_helper(inst):
    """
    Assert that ``inst`` round-trips through its configuration.

    The default configuration must be keyed by the constructor's parameter
    names, the default and instance configurations must survive JSON
    serialization, and instances rebuilt from configuration must report the
    same configuration again.

    :param Configurable inst: Instance to check.

    :return: An instance rebuilt from ``inst``'s configuration and one rebuilt
        from that instance's configuration.
    :rtype: (Configurable, Configurable)
    """
    assert not isinstance(inst, type), "Passed a type, expected instance."
    inst_t = type(inst)

    dflt_cfg = inst_t.get_default_config()
    assert set(dflt_cfg) == set(_init_params(inst_t)), \
        "Default configuration keys do not match the constructor parameters."

    config = inst.get_config()
    assert set(config) == set(dflt_cfg)
    for c in (dflt_cfg, config):
        assert json.loads(json.dumps(c)) == c, \
            "Configuration is not JSON compliant: {}".format(c)

    inst2 = inst_t.from_config(config)
    inst3 = inst_t.from_config(inst2.get_config())
    assert inst2.get_config() == config
    assert inst3.get_config() == config
    return inst2, inst3
