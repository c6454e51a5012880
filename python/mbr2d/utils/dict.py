"""
Utility functions pertaining to python dictionaries.
"""

import copy


def merge_dict(a, b, deep_copy=False):
    """
    Merge dictionary b into dictionary a.

    This is different than normal dictionary update in that we don't bash
    nested dictionaries, instead recursively updating them. Configuration
    files loaded by the command line tools are merged onto their default
    configuration this way.

    For congruent keys, values are are overwritten, while new keys in ``b`` are
    simply added to ``a``.

    :param dict a: The "base" dictionary that is updated in place.
    :param dict b: The dictionary to merge into ``a`` recursively.
    :param bool deep_copy: Optionally deep-copy values from ``b`` when
        assigning into ``a``.

    :return: ``a`` dictionary after merger (not a copy).
    :rtype: dict

    """
    for k in b:
        if k in a and isinstance(a[k], dict) and isinstance(b[k], dict):
            merge_dict(a[k], b[k], deep_copy)
        elif deep_copy:
            a[k] = copy.deepcopy(b[k])
        else:
            a[k] = b[k]
    return a
