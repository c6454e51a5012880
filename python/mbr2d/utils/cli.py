"""
Command line plumbing shared by mbr2d tools: logging setup, the common
argument parser and JSON configuration loading/generation.
"""
import argparse
import json
import logging
import logging.handlers
import os
import sys

from mbr2d.utils.dict import merge_dict


LOG_FORMAT = \
    "%(levelname)7s - %(asctime)s - %(name)s.%(funcName)s - %(message)s"

# Logging namespaces every tool initializes.
LOGGING_DOMAINS = ('mbr2d', '__main__')


def initialize_logging(logger, stream_level=logging.WARNING,
                       output_filepath=None, file_level=None):
    """
    Attach a stderr stream handler, and optionally a file handler, to
    ``logger``.

    :param logging.Logger logger: Logger to initialize.
    :param int stream_level: Level of the stderr handler.
    :param str output_filepath: Optional log file path. The file is truncated
        when first written to.
    :param int file_level: Level of the file handler. Same as
        ``stream_level`` by default.
    """
    if file_level is None:
        file_level = stream_level
    handlers = [(logging.StreamHandler(), stream_level)]
    if output_filepath:
        handlers.append((
            logging.handlers.RotatingFileHandler(output_filepath, mode='w',
                                                 delay=True),
            file_level,
        ))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler, level in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)
    # The logger level filters before any handler sees a record.
    logger.setLevel(min(level for _, level in handlers))


def load_config(config_path, defaults=None):
    """
    Merge the JSON configuration file at ``config_path`` onto ``defaults``.

    :param str|None config_path: JSON configuration file path.
    :param dict|None defaults: Configuration updated in place with the file
        contents.

    :return: The configuration and whether a file was loaded. An unset or
        missing path leaves ``defaults`` as given.
    :rtype: (dict, bool)
    """
    config = {} if defaults is None else defaults
    if not (config_path and os.path.isfile(config_path)):
        return config, False
    with open(config_path) as f:
        merge_dict(config, json.load(f))
    logging.getLogger(__name__).debug("Loaded configuration file: %s",
                                      config_path)
    return config, True


def output_config(output_path, config_dict, log=None, overwrite=False,
                  error_rc=1):
    """
    Write ``config_dict`` as JSON to ``output_path`` and exit.

    Exits with 0 after writing, or with ``error_rc`` when the file exists and
    ``overwrite`` is off. Does nothing when no path is given.

    :param str|None output_path: Destination file path.
    :param dict config_dict: JSON compliant configuration.
    :param logging.Logger log: Logger to report through. A module logger by
        default.
    :param bool overwrite: Replace an existing file.
    :param int error_rc: Non-zero exit code when refusing to overwrite.

    :raises ValueError: ``error_rc`` is 0.
    """
    error_rc = int(error_rc)
    if error_rc == 0:
        raise ValueError("Error return code cannot be 0.")
    if not output_path:
        return
    if log is None:
        log = logging.getLogger(__name__)

    if os.path.exists(output_path) and not overwrite:
        log.error("Configuration file already exists, not overwriting: %s",
                  output_path)
        sys.exit(error_rc)
    log.info("Writing configuration to: %s", output_path)
    with open(output_path, 'w') as f:
        json.dump(config_dict, f, indent=4, sort_keys=True)
    sys.exit(0)


def basic_cli_parser(description=None, configuration_group=True):
    """
    Argument parser with the options every tool shares: ``-v`` for debug
    logging and, unless disabled, ``-c``/``-g`` to load or generate the JSON
    configuration.

    :param str description: Parser description.
    :param bool configuration_group: Include the configuration options.

    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-v', '--verbose',
                        default=False, action='store_true',
                        help='Output additional debug logging.')

    if configuration_group:
        g_config = parser.add_argument_group('Configuration')
        g_config.add_argument('-c', '--config',
                              metavar="PATH",
                              help='Path to the JSON configuration file.')
        g_config.add_argument('-g', '--generate-config',
                              metavar="PATH",
                              help='Write the default configuration, updated '
                                   'with any configuration given by -c, to '
                                   'this path and exit.')
    return parser


def utility_main_helper(default_config, args, additional_logging_domains=(),
                        skip_logging_init=False, default_config_valid=False):
    """
    Common tool start-up: initialize logging, load the configuration and
    handle ``-g`` configuration generation.

    :param () -> dict default_config: Returns the tool's default
        configuration.
    :param argparse.Namespace args: Parsed ``basic_cli_parser`` arguments.
    :param collections.abc.Iterable[str] additional_logging_domains: Logging
        namespaces to initialize besides ``LOGGING_DOMAINS``.
    :param bool skip_logging_init: Logging is initialized elsewhere.
    :param bool default_config_valid: Run with the default configuration
        when no configuration file is loaded.

    :raises RuntimeError: No configuration file was loaded and the default
        configuration is not trusted.

    :return: Loaded configuration.
    :rtype: dict
    """
    if not skip_logging_init:
        level = logging.DEBUG if args.verbose else logging.INFO
        for domain in LOGGING_DOMAINS + tuple(additional_logging_domains):
            initialize_logging(logging.getLogger(domain), level)

    config, loaded = load_config(args.config, default_config())
    output_config(args.generate_config, config, overwrite=True)

    if not (loaded or default_config_valid):
        raise RuntimeError("No configuration loaded (not trusting default).")
    return config
