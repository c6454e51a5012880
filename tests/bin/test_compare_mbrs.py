import json
from unittest import mock

import pytest

from mbr2d.bin.compare_mbrs import compare, get_default_config, main
from mbr2d.representation import MBR
from mbr2d.utils.configuration import to_config_dict


PT = [367.74747560229144, 363.2231833134207]


@pytest.fixture
def config_path(tmp_path):
    config = {
        'a': to_config_dict(MBR(350., 400., 200., 250.)),
        'b': to_config_dict(MBR(300., 200., 400., 350.)),
        'expand_delta': [30.0, 25.0],
        'points': [PT],
    }
    p = tmp_path / 'config.json'
    p.write_text(json.dumps(config))
    return str(p)


def test_default_config():
    config = get_default_config()
    assert config['a'] == {
        'type': 'MBR',
        'MBR': {'minx': 0.0, 'miny': 0.0, 'maxx': 0.0, 'maxy': 0.0},
    }
    assert config['b'] == config['a']
    assert config['expand_delta'] == [0.0, 0.0]
    assert config['points'] == []
    # JSON compliant
    assert json.loads(json.dumps(config)) == config


def test_compare_intersecting():
    a = MBR(350., 400., 200., 250.)
    b = MBR.from_array([300., 200., 400., 350.])
    report = compare(a, b, (30.0, 25.0), [PT])

    assert report['intersects'] is True
    assert report['disjoint'] is False
    assert report['equals'] is False
    assert (report['area_a'], report['area_b']) == (22500., 15000.)
    assert report['intersection'] == \
        "POLYGON ((300 250,300 350,350 350,350 250,300 250))"
    assert report['intersection_area'] == 5000.
    assert report['intersection_is_point'] is False
    assert report['union_area'] == 40000.
    assert report['distance'] == 0.0
    assert report['expanded_intersection'] == \
        "POLYGON ((270 225,270 375,380 375,380 225,270 225))"
    assert len(report['points']) == 1
    assert report['points'][0]['contains'] is True
    assert report['points'][0]['completely_contains'] is True
    assert report['points'][0]['distance_to_a'] == \
        pytest.approx(PT[0] - 350.)

    # Operands are not modified by the report.
    assert a.as_tuple() == (200., 250., 350., 400.)


def test_compare_disjoint():
    a = MBR(0, 0, 2, 0)
    b = MBR(4, 0, 7, 0)
    report = compare(a, b, (1.0, 1.0), [[5, 0]])
    assert report['disjoint'] is True
    assert report['intersection'] is None
    assert report['expanded_intersection'] is None
    assert report['points'] == []
    assert report['distance'] == 2.0
    assert report['distance_square'] == 4.0
    assert report['union'] == "POLYGON ((0 0,0 0,7 0,7 0,0 0))"


@mock.patch('mbr2d.utils.cli.initialize_logging')
def test_main_output_file(_m_init_logging, config_path, tmp_path):
    out = tmp_path / 'report.json'
    main(['-c', config_path, '-o', str(out)])
    report = json.loads(out.read_text())
    assert report['intersection_area'] == 5000.
    assert report['points'][0]['contains'] is True


@mock.patch('mbr2d.utils.cli.initialize_logging')
def test_main_stdout(_m_init_logging, config_path, capsys):
    main(['-c', config_path])
    report = json.loads(capsys.readouterr().out)
    assert report['union'] == \
        "POLYGON ((200 200,200 400,400 400,400 200,200 200))"


@mock.patch('mbr2d.utils.cli.initialize_logging')
def test_main_generate_config(_m_init_logging, tmp_path):
    out = tmp_path / 'generated.json'
    with pytest.raises(SystemExit) as exc_info:
        main(['-g', str(out)])
    assert exc_info.value.code == 0
    assert json.loads(out.read_text()) == get_default_config()


@mock.patch('mbr2d.utils.cli.initialize_logging')
def test_main_no_config(_m_init_logging):
    with pytest.raises(RuntimeError):
        main([])


@mock.patch('mbr2d.utils.cli.initialize_logging')
def test_main_runs_generated_config(_m_init_logging, tmp_path):
    config_path = tmp_path / 'generated.json'
    with pytest.raises(SystemExit):
        main(['-g', str(config_path)])

    out = tmp_path / 'report.json'
    main(['-c', str(config_path), '-o', str(out)])
    report = json.loads(out.read_text())
    assert report['a'] == "POLYGON ((0 0,0 0,0 0,0 0,0 0))"
    assert report['equals'] is True
    assert report['intersection_is_point'] is True
    assert report['distance'] == 0.0
    assert report['points'] == []
