"""Command line interface of svgterminal"""

import argparse
import asyncio
import logging
import os
import sys
import tempfile

import svgterminal.config
import svgterminal.render
import svgterminal.themes
from svgterminal.blocks import default_registry
from svgterminal.errors import BlockError, ConfigError

logger = logging.getLogger('svgterminal')

DEFAULT_CONFIG_PATH = 'terminal.yml'
DEFAULT_OUTPUT_PATH = 'terminal.svg'

USAGE = """svgterminal [generate] [-c CONFIG] [-o OUTPUT] [-s] [-v] [-h]

Render a YAML configuration as an animated SVG terminal
"""
EPILOG = ("See also 'svgterminal init --help', 'svgterminal themes' and "
          "'svgterminal blocks'")
GENERATE_USAGE = "svgterminal generate [-c CONFIG] [-o OUTPUT] [-s] [-v] [-h]"
INIT_USAGE = "svgterminal init [output_path] [-v] [-h]"


def parse(args):
    """Parse command line arguments

    :param args: Arguments to parse
    :return: Tuple made of the subcommand called ('generate', 'init',
    'themes' or 'blocks') and all parsed arguments
    """
    verbose_parser = argparse.ArgumentParser(add_help=False)
    verbose_parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='log debug messages to a temporary file'
    )

    generate_parser = argparse.ArgumentParser(add_help=False)
    generate_parser.add_argument(
        '-c', '--config',
        help='path of the YAML configuration (default: {})'
             .format(DEFAULT_CONFIG_PATH),
        default=DEFAULT_CONFIG_PATH,
        metavar='CONFIG'
    )
    generate_parser.add_argument(
        '-o', '--output',
        help='path of the SVG file to write (default: {})'
             .format(DEFAULT_OUTPUT_PATH),
        default=DEFAULT_OUTPUT_PATH,
        metavar='OUTPUT'
    )
    generate_parser.add_argument(
        '-s', '--static',
        help='render a still snapshot instead of an animation',
        action='store_true'
    )

    if args:
        if args[0] == 'generate':
            parser = argparse.ArgumentParser(
                description='render a YAML configuration as an SVG terminal',
                parents=[generate_parser, verbose_parser],
                usage=GENERATE_USAGE
            )
            return args[0], parser.parse_args(args[1:])

        if args[0] == 'init':
            parser = argparse.ArgumentParser(
                description='write a starter configuration file',
                parents=[verbose_parser],
                usage=INIT_USAGE
            )
            parser.add_argument(
                'output_path',
                nargs='?',
                default=DEFAULT_CONFIG_PATH,
                help='path of the configuration file to create (default: {})'
                     .format(DEFAULT_CONFIG_PATH),
                metavar='output_path'
            )
            return args[0], parser.parse_args(args[1:])

        if args[0] in ('themes', 'blocks'):
            parser = argparse.ArgumentParser(
                description='list the available {}'.format(args[0]),
                parents=[verbose_parser],
                usage='svgterminal {} [-v] [-h]'.format(args[0])
            )
            return args[0], parser.parse_args(args[1:])

    parser = argparse.ArgumentParser(
        prog='svgterminal',
        parents=[generate_parser, verbose_parser],
        usage=USAGE,
        epilog=EPILOG
    )
    return 'generate', parser.parse_args(args)


def generate_subcommand(config_path, output_path, static):
    """Render the configuration at config_path to output_path"""
    logger.info('Generating {} from {}'.format(output_path, config_path))
    user_config = svgterminal.config.load_config(config_path)
    if static:
        coroutine = svgterminal.render.generate_static(user_config)
    else:
        coroutine = svgterminal.render.generate(user_config)
    svg = asyncio.run(coroutine)

    with open(output_path, 'w', encoding='utf-8') as svg_file:
        svg_file.write(svg)
    size = os.path.getsize(output_path)
    logger.info('Generated {} ({:.1f} KB)'.format(output_path, size / 1024))


def init_subcommand(output_path):
    """Write the starter configuration to output_path"""
    if os.path.exists(output_path):
        raise ConfigError('{} already exists, not overwriting it'
                          .format(output_path))
    with open(output_path, 'wb') as config_file:
        config_file.write(svgterminal.config.starter_config())
    logger.info('Created {}'.format(output_path))


def themes_subcommand():
    for name in sorted(svgterminal.themes.THEMES):
        print(name)


def blocks_subcommand():
    registry = default_registry()
    for block in sorted(registry, key=lambda b: b.name):
        print('{:<14} {}'.format(block.name, block.description))


def main(args=None):
    if args is None:
        args = sys.argv

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter('%(message)s')
    console_handler.setFormatter(console_formatter)
    logger.handlers = [console_handler]
    logger.setLevel(logging.INFO)

    command, args = parse(args[1:])

    if args.verbose:
        _, log_filename = tempfile.mkstemp(prefix='svgterminal_', suffix='.log')
        file_handler = logging.FileHandler(filename=log_filename, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(file_formatter)
        logger.handlers.append(file_handler)
        logger.setLevel(logging.DEBUG)
        logger.info('Logging to {}'.format(log_filename))

    exit_code = 0
    try:
        if command == 'init':
            init_subcommand(args.output_path)
        elif command == 'themes':
            themes_subcommand()
        elif command == 'blocks':
            blocks_subcommand()
        else:
            generate_subcommand(args.config, args.output, args.static)
    except (ConfigError, BlockError) as exc:
        logger.error('Error: {}'.format(exc))
        exit_code = 1
    finally:
        for handler in logger.handlers:
            handler.close()

    if exit_code:
        sys.exit(exit_code)
