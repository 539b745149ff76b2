#!/usr/bin/env python3
"""
CLI for the exprlang expression language.

Usage:
    python -m exprlang [OPTIONS] eval EXPR...
    python -m exprlang [OPTIONS] tokens EXPR...
    python -m exprlang [OPTIONS] ast EXPR...
    python -m exprlang builtins
    python -m exprlang [OPTIONS] [repl]

Examples:
    # Evaluate once and print the result
    python -m exprlang eval "2 ^ 10 / 4"

    # Show how an expression is tokenized and parsed
    python -m exprlang tokens "xs[0].name"
    python -m exprlang ast "1 + 2 * 3"

    # Interactive session with settings from a YAML file
    python -m exprlang --config exprlang.yaml repl
"""

import argparse
import json
import logging
import sys

from .config import ConfigError, ReplConfig, load_config
from .errors import ExprError, ProgramExit

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _source(args) -> str:
    return " ".join(args.expression)


def _report(error: ExprError, source: str, config: ReplConfig,
            as_json: bool = False) -> int:
    if as_json:
        print(json.dumps(error.diagnostic.to_json()), file=sys.stderr)
        return 1
    error.with_source(source)
    print(f"Error: {error.diagnostic.format(show_source=config.show_source)}",
          file=sys.stderr)
    return 1


def cmd_eval(args, config: ReplConfig) -> int:
    """Evaluate one expression in a fresh program and print its value."""
    from .runtime import Program, evaluate

    source = _source(args)
    try:
        value = evaluate(source, Program.init())
    except ProgramExit:
        return 0
    except ExprError as e:
        return _report(e, source, config, args.json)

    if value is not None:
        print(value)
    return 0


def cmd_tokens(args, config: ReplConfig) -> int:
    """Print one token per line with its position."""
    from .lexer import tokenize

    source = _source(args)
    try:
        tokens = tokenize(source)
    except ExprError as e:
        return _report(e, source, config, args.json)

    for token in tokens:
        print(f"{token.position}\t{token.value}")
    return 0


def cmd_ast(args, config: ReplConfig) -> int:
    """Print the parsed tree of an expression."""
    from .ast import dump_ast
    from .lexer import tokenize
    from .parser import parse

    source = _source(args)
    try:
        tree = parse(tokenize(source))
    except ExprError as e:
        return _report(e, source, config, args.json)

    print(dump_ast(tree))
    return 0


def cmd_builtins(args, config: ReplConfig) -> int:
    """List the built-in functions bound in every program."""
    from .runtime import BUILTINS

    print(f"Builtins ({len(BUILTINS)}):")
    for builtin in BUILTINS:
        print(f"  {builtin.name:<6} {builtin.doc}")
    return 0


def cmd_repl(args, config: ReplConfig) -> int:
    """Run the interactive loop on stdin/stdout."""
    from .repl import Repl

    Repl(config=config).loop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='exprlang',
        description='Evaluate expressions of the exprlang language',
    )
    parser.add_argument('--config', metavar='FILE',
                        help='YAML file with REPL settings')
    parser.add_argument('--log-level', choices=LOG_LEVELS, type=str.upper,
                        help='Logging level (default: WARNING)')
    parser.add_argument('--prompt', metavar='TEXT', help='REPL prompt')
    parser.add_argument('--no-position', action='store_true',
                        help='Do not show error positions in the REPL')
    parser.add_argument('--json', action='store_true',
                        help='Report eval, tokens and ast errors as JSON')

    subparsers = parser.add_subparsers(dest='action')

    # eval command
    eval_parser = subparsers.add_parser('eval', help='Evaluate an expression')
    eval_parser.add_argument('expression', nargs='+', help='Expression source')

    # tokens command
    tokens_parser = subparsers.add_parser('tokens', help='Show the tokens of an expression')
    tokens_parser.add_argument('expression', nargs='+', help='Expression source')

    # ast command
    ast_parser = subparsers.add_parser('ast', help='Show the parsed tree of an expression')
    ast_parser.add_argument('expression', nargs='+', help='Expression source')

    # builtins command
    subparsers.add_parser('builtins', help='List the built-in functions')

    # repl command
    subparsers.add_parser('repl', help='Start an interactive session (default)')

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else ReplConfig()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    config = config.merged(
        prompt=args.prompt,
        log_level=args.log_level,
        show_position=False if args.no_position else None,
    )

    level = getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        print(f"Error: unknown log level: {config.log_level}", file=sys.stderr)
        return 1
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.action == 'eval':
        return cmd_eval(args, config)
    elif args.action == 'tokens':
        return cmd_tokens(args, config)
    elif args.action == 'ast':
        return cmd_ast(args, config)
    elif args.action == 'builtins':
        return cmd_builtins(args, config)
    elif args.action in (None, 'repl'):
        return cmd_repl(args, config)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
