import argparse
import json
import logging
import logging.handlers
from unittest import mock

import pytest

from mbr2d.utils.cli import (
    basic_cli_parser,
    initialize_logging,
    load_config,
    output_config,
    utility_main_helper,
)


@pytest.fixture
def fresh_logger(request):
    """
    Logger unique to the requesting test, with its handlers removed afterwards.
    """
    logger = logging.getLogger('mbr2d.tests.' + request.node.name)
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


def test_initialize_logging_stream(fresh_logger):
    initialize_logging(fresh_logger, logging.DEBUG)
    assert len(fresh_logger.handlers) == 1
    assert isinstance(fresh_logger.handlers[0], logging.StreamHandler)
    assert fresh_logger.handlers[0].level == logging.DEBUG
    assert fresh_logger.level == logging.DEBUG


def test_initialize_logging_file(fresh_logger, tmp_path):
    log_path = tmp_path / 'out.log'
    initialize_logging(fresh_logger, logging.WARNING,
                       output_filepath=str(log_path), file_level=logging.INFO)
    file_handlers = [
        h for h in fresh_logger.handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].level == logging.INFO
    # Logger level is the lesser of the two handler levels.
    assert fresh_logger.level == logging.INFO

    fresh_logger.info("written to file only")
    file_handlers[0].flush()
    assert "written to file only" in log_path.read_text()


def test_load_config(tmp_path):
    config_path = tmp_path / 'config.json'
    config_path.write_text(json.dumps({'a': {'type': 'MBR'}, 'new': 1}))
    defaults = {'a': {'type': None, 'MBR': {}}, 'points': []}

    config, loaded = load_config(str(config_path), defaults)
    assert loaded
    assert config is defaults
    assert config == {'a': {'type': 'MBR', 'MBR': {}}, 'points': [],
                      'new': 1}


def test_load_config_missing_file(tmp_path):
    config, loaded = load_config(str(tmp_path / 'nope.json'), {'x': 1})
    assert not loaded
    assert config == {'x': 1}

    config, loaded = load_config(None)
    assert not loaded
    assert config == {}


def test_output_config_writes_and_exits(tmp_path):
    out = tmp_path / 'generated.json'
    with pytest.raises(SystemExit) as exc_info:
        output_config(str(out), {'b': 2, 'a': 1})
    assert exc_info.value.code == 0
    assert json.loads(out.read_text()) == {'a': 1, 'b': 2}


def test_output_config_existing_no_overwrite(tmp_path):
    out = tmp_path / 'generated.json'
    out.write_text('{}')
    with pytest.raises(SystemExit) as exc_info:
        output_config(str(out), {'a': 1}, error_rc=3)
    assert exc_info.value.code == 3
    assert out.read_text() == '{}'


def test_output_config_no_path():
    # No path given: nothing written, no exit.
    output_config(None, {'a': 1})


def test_output_config_zero_error_rc():
    with pytest.raises(ValueError, match="Error return code cannot be 0."):
        output_config(None, {}, error_rc=0)


def test_basic_cli_parser():
    parser = basic_cli_parser('description')
    args = parser.parse_args(['-v', '-c', 'in.json', '-g', 'out.json'])
    assert args.verbose
    assert args.config == 'in.json'
    assert args.generate_config == 'out.json'

    args = parser.parse_args([])
    assert not args.verbose
    assert args.config is None


def test_basic_cli_parser_no_config_group():
    parser = basic_cli_parser(configuration_group=False)
    with pytest.raises(SystemExit):
        parser.parse_args(['-c', 'in.json'])


@mock.patch('mbr2d.utils.cli.initialize_logging')
def test_utility_main_helper(m_init_logging, tmp_path):
    config_path = tmp_path / 'config.json'
    config_path.write_text(json.dumps({'expand_delta': [1, 2]}))
    args = argparse.Namespace(config=str(config_path), generate_config=None,
                              verbose=True)

    config = utility_main_helper(
        lambda: {'expand_delta': [0, 0], 'points': []}, args,
        additional_logging_domains=['extra'],
    )
    assert config == {'expand_delta': [1, 2], 'points': []}
    # mbr2d, __main__ and the additional domain.
    assert m_init_logging.call_count == 3
    for call in m_init_logging.call_args_list:
        assert call[0][1] == logging.DEBUG


@mock.patch('mbr2d.utils.cli.initialize_logging')
def test_utility_main_helper_no_config(m_init_logging):
    args = argparse.Namespace(config=None, generate_config=None,
                              verbose=False)
    with pytest.raises(RuntimeError, match=r"No configuration loaded"):
        utility_main_helper(dict, args)

    # Trusting the default configuration.
    assert utility_main_helper(lambda: {'a': 1}, args,
                               default_config_valid=True) == {'a': 1}
    assert m_init_logging.call_args[0][1] == logging.INFO


def test_utility_main_helper_skip_logging(tmp_path):
    args = argparse.Namespace(config=None, generate_config=None,
                              verbose=False)
    with mock.patch('mbr2d.utils.cli.initialize_logging') as m_init_logging:
        utility_main_helper(dict, args, skip_logging_init=True,
                            default_config_valid=True)
    m_init_logging.assert_not_called()
