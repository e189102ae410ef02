#!/usr/bin/env python3
"""
CLI for the treelang interpreter.

Usage:
    python -m treelang run FILE [--ast] [--format text|json|yaml] [--quiet]
    python -m treelang check FILE
    python -m treelang ast FILE [--tree]

Global options (before the subcommand):
    --config PATH   YAML config file (see treelang.config)
    -v, --verbose   More logging (-v for INFO, -vv for DEBUG)

Examples:
    # Run a program, echoing prints and then the final variables
    python -m treelang run examples/countdown.tl

    # Run a JSON AST produced by another parser, final state as JSON
    python -m treelang run program.json --ast --format json

    # Syntax check only
    python -m treelang check examples/countdown.tl
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

logger = logging.getLogger("treelang.cli")


def format_state(state: Dict, output_format: str) -> str:
    """Render final bindings in the requested output format."""
    from .runtime import format_value, to_plain

    if output_format == "json":
        return json.dumps({name: to_plain(v) for name, v in state.items()}, indent=2)
    if output_format == "yaml":
        return yaml.safe_dump({name: to_plain(v) for name, v in state.items()},
                              default_flow_style=False, sort_keys=False).rstrip()
    return "\n".join(f"{name} = {format_value(v)}" for name, v in state.items())


def _read_source(path_str: str) -> Optional[str]:
    source_path = Path(path_str)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return None
    return source_path.read_text(encoding='utf-8')


def _load_program(args, source: str):
    from .parser import parse_program
    from .serialization import program_from_json

    if getattr(args, 'ast', False):
        return program_from_json(source)
    return parse_program(source, filename=args.file)


def cmd_check(args, config) -> int:
    """Check a source file for lexer and parser errors."""
    from .errors import TreelangError

    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        program = _load_program(args, source)
    except TreelangError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"OK: {Path(args.file).name} - {len(program)} statement(s), no errors")
    return 0


def cmd_ast(args, config) -> int:
    """Print the AST of a source file."""
    from .ast import print_ast
    from .errors import TreelangError
    from .serialization import program_to_json

    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        program = _load_program(args, source)
    except TreelangError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.tree:
        print_ast(program)
    else:
        print(program_to_json(program))
    return 0


def cmd_run(args, config) -> int:
    """Run a program and show its output and final state."""
    from .errors import TreelangError
    from .runtime import Interpreter, format_value

    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        program = _load_program(args, source)
    except (TreelangError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    echo = None
    if config.echo_prints:
        echo = lambda value: print(format_value(value))

    result = Interpreter(output=echo).execute(program)

    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        if not args.quiet and result.state:
            print("State at failure:", file=sys.stderr)
            print(format_state(result.state, args.format or config.output_format), file=sys.stderr)
        return 1

    if not args.quiet and result.state:
        print(format_state(result.state, args.format or config.output_format))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m treelang',
        description='treelang tree-walking interpreter',
    )
    parser.add_argument('--config', metavar='PATH', help='YAML config file')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase logging (repeatable)')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # run command
    run_parser = subparsers.add_parser('run', help='Run a program')
    run_parser.add_argument('file', help='Source file (or JSON AST with --ast)')
    run_parser.add_argument('--ast', action='store_true',
                            help='Input is a JSON AST instead of source text')
    run_parser.add_argument('--format', choices=['text', 'json', 'yaml'],
                            help='Format of the final state (default from config)')
    run_parser.add_argument('-q', '--quiet', action='store_true',
                            help='Do not show the final state')

    # check command
    check_parser = subparsers.add_parser('check', help='Check a file for syntax errors')
    check_parser.add_argument('file', help='Source file')

    # ast command
    ast_parser = subparsers.add_parser('ast', help='Print the AST of a file as JSON')
    ast_parser.add_argument('file', help='Source file')
    ast_parser.add_argument('--tree', action='store_true',
                            help='Print an indented tree instead of JSON')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    from .config import ConfigError, load_config
    from .log import setup_logging

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config) if args.config else None)
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    level = config.log_level
    if args.verbose == 1:
        level = "INFO"
    elif args.verbose >= 2:
        level = "DEBUG"
    setup_logging(level)
    logger.debug("action=%s file=%s", args.action, args.file)

    if args.action == 'run':
        return cmd_run(args, config)
    elif args.action == 'check':
        return cmd_check(args, config)
    elif args.action == 'ast':
        return cmd_ast(args, config)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
