"""
Compare two configured minimum bounding rectangles.

Rectangles "a" and "b" are read from the JSON configuration given with
-c/--config (generate a template with -g/--generate-config). A JSON report is
printed with their spatial relationship: intersection, union, areas and
distance. The intersection is then expanded by the configured "expand_delta"
and each of the configured query "points" is tested against it.
"""
import json
import logging
import sys

from mbr2d.representation import MBR
from mbr2d.utils.cli import (
    basic_cli_parser,
    utility_main_helper,
)
from mbr2d.utils.configuration import (
    from_config_dict,
    make_default_config,
)


def get_cli_parser():
    parser = basic_cli_parser(__doc__)
    parser.add_argument('-o', '--output',
                        default=None, metavar='PATH',
                        help='Write the JSON report to this file instead of '
                             'standard output.')
    return parser


def get_default_config():
    return {
        'a': make_default_config([MBR], MBR.new_default()),
        'b': make_default_config([MBR], MBR.new_default()),
        'expand_delta': [0.0, 0.0],
        'points': [],
    }


def compare(a, b, expand_delta=(0.0, 0.0), points=()):
    """
    Build the comparison report of two rectangles.

    :param MBR a: First rectangle.
    :param MBR b: Second rectangle.
    :param (float, float) expand_delta: Horizontal and vertical growth applied
        to the intersection of ``a`` and ``b`` before probing points.
    :param collections.abc.Iterable[(float, float)] points: Query locations.

    :return: JSON-compliant report dictionary.
    :rtype: dict
    """
    log = logging.getLogger(__name__)
    inter = a.intersection(b)
    union = a.union(b)
    report = {
        'a': a.wkt(),
        'b': b.wkt(),
        'intersects': a.intersects(b),
        'disjoint': a.disjoint(b),
        'equals': a.equals(b),
        'area_a': a.area,
        'area_b': b.area,
        'intersection': None,
        'intersection_area': None,
        'intersection_is_point': None,
        'union': union.wkt(),
        'union_area': union.area,
        'distance': a.distance(b),
        'distance_square': a.distance_square(b),
        'expanded_intersection': None,
        'points': [],
    }
    if inter is None:
        log.info("Rectangles are disjoint, skipping point queries.")
        return report

    report['intersection'] = inter.wkt()
    report['intersection_area'] = inter.area
    report['intersection_is_point'] = inter.is_point()

    dx, dy = expand_delta
    expanded = inter.copy().expand_by_delta(dx, dy)
    log.debug("Intersection %s expanded by (%s, %s): %s",
              inter.wkt(), dx, dy, expanded.wkt())
    report['expanded_intersection'] = expanded.wkt()
    for x, y in points:
        report['points'].append({
            'point': [x, y],
            'contains': expanded.contains_xy(x, y),
            'completely_contains': expanded.completely_contains_xy(x, y),
            'distance_to_a': a.distance(MBR.from_point((x, y))),
        })
    return report


def main(args=None):
    parser = get_cli_parser()
    args = parser.parse_args(args)
    config = utility_main_helper(get_default_config, args)

    log = logging.getLogger(__name__)
    log.debug('Showing debug messages.')

    a = from_config_dict(config['a'], [MBR])
    b = from_config_dict(config['b'], [MBR])
    log.info("Comparing A=%s and B=%s", a, b)

    report = compare(a, b, config['expand_delta'], config['points'])

    if args.output:
        log.info("Writing report to: %s", args.output)
        with open(args.output, 'w') as f:
            json.dump(report, f, indent=4, sort_keys=True)
    else:
        json.dump(report, sys.stdout, indent=4, sort_keys=True)
        sys.stdout.write('\n')


if __name__ == '__main__':
    main()
