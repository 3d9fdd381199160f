"""
# Vendorise: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import os
import sys
from typing import Optional

from vendorise._version import __version__
from vendorise.constants import (
    COMMAND_LINE_ERROR_EXIT_CODE,
    DESKTOP_SHELL_ENVIRONMENT_VARIABLE,
    GENERIC_ERROR_EXIT_CODE,
)
from vendorise.core import is_desktop_shell_build, rewrite_html

DESCRIPTION = '''
    Rewrite CDN references in an HTML entry document to locally bundled assets.
'''
INPUT_FILE_NAME_HELP = '''
    name of HTML file to be rewritten
'''
OUTPUT_FILE_NAME_HELP = '''
    name of HTML file to write the result to
'''
DESKTOP_SHELL_MODE_HELP = f'''
    rewrite for a desktop-shell build
    (default: only if `{DESKTOP_SHELL_ENVIRONMENT_VARIABLE}` is set in the environment)
'''
WEB_MODE_HELP = '''
    leave the document untouched, as for a web build
'''
RULES_FILE_NAME_HELP = '''
    name of a file of extra rewrite rules, applied after the standard rules
'''
VERBOSE_MODE_HELP = '''
    run in verbose mode (prints every rewrite applied)
'''


def parse_command_line_arguments(arguments: Optional[list[str]] = None) -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(description=DESCRIPTION)
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    mode_group = argument_parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        '-d', '--desktop-shell',
        dest='desktop_shell_enabled',
        action='store_true',
        default=None,
        help=DESKTOP_SHELL_MODE_HELP,
    )
    mode_group.add_argument(
        '-w', '--web',
        dest='desktop_shell_enabled',
        action='store_false',
        default=None,
        help=WEB_MODE_HELP,
    )
    argument_parser.add_argument(
        '-r', '--rules',
        dest='rules_file_name',
        default=None,
        help=RULES_FILE_NAME_HELP,
        metavar='rules.txt',
    )
    argument_parser.add_argument(
        '-x', '--verbose',
        dest='verbose_mode_enabled',
        action='store_true',
        help=VERBOSE_MODE_HELP,
    )
    argument_parser.add_argument(
        'input_file_name',
        help=INPUT_FILE_NAME_HELP,
        metavar='input.html',
    )
    argument_parser.add_argument(
        'output_file_name',
        help=OUTPUT_FILE_NAME_HELP,
        metavar='output.html',
    )

    return argument_parser.parse_args(arguments)


def resolve_desktop_shell_enabled(desktop_shell_argument: Optional[bool]) -> bool:
    if desktop_shell_argument is None:
        return is_desktop_shell_build(os.environ)

    return desktop_shell_argument


def read_command_line_file(file_name: str, argument_description: str) -> str:
    try:
        with open(file_name, 'r', encoding='utf-8', newline='') as file:
            return file.read()
    except FileNotFoundError:
        print(f'error: argument `{argument_description}`: file `{file_name}` not found', file=sys.stderr)
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)


def generate_html_file(input_file_name: str, output_file_name: str, desktop_shell_enabled: bool,
                       rules_file_name: Optional[str], verbose_mode_enabled: bool):
    html = read_command_line_file(input_file_name, input_file_name)

    if rules_file_name is not None:
        extra_rules = read_command_line_file(rules_file_name, f'--rules {rules_file_name}')
    else:
        extra_rules = None

    html = rewrite_html(html, desktop_shell_enabled, verbose_mode_enabled,
                        extra_rules=extra_rules, extra_rules_file_name=rules_file_name)

    try:
        with open(output_file_name, 'w', encoding='utf-8', newline='') as output_file:
            output_file.write(html)
        print(f'success: wrote to `{output_file_name}`')
    except IOError:
        print(f'error: cannot write to `{output_file_name}`', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)


def main(arguments: Optional[list[str]] = None):
    parsed_arguments = parse_command_line_arguments(arguments)
    desktop_shell_enabled = resolve_desktop_shell_enabled(parsed_arguments.desktop_shell_enabled)

    generate_html_file(
        parsed_arguments.input_file_name,
        parsed_arguments.output_file_name,
        desktop_shell_enabled,
        parsed_arguments.rules_file_name,
        parsed_arguments.verbose_mode_enabled,
    )


if __name__ == '__main__':
    main()
