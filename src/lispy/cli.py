"""lispy command-line entry point.

Usage:
    lispy tokenize <file>    Display the token stream, indented by paren depth
    lispy parse <file>       Parse the file and display the expressions
    lispy help               Show this message

Options:
    -v, --verbose            Log debug information to stderr
    --version                Show the version and exit
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from lispy.lexer.lexer import Lexer, LexError
from lispy.lexer.tokens import TokenType
from lispy.parser.parser import Parser, ParseError
from lispy.settings import DEFAULT_SETTINGS, Settings

logger = logging.getLogger(__name__)

_VERBOSE_FLAGS = ("-v", "--verbose")


def main(argv: list[str] | None = None, settings: Settings = DEFAULT_SETTINGS) -> int:
    args = argv if argv is not None else sys.argv[1:]

    verbose = any(arg in _VERBOSE_FLAGS for arg in args)
    args = [arg for arg in args if arg not in _VERBOSE_FLAGS]
    _configure_logging(settings, verbose)

    if len(args) < 1:
        print(__doc__.strip())
        return 1

    command = args[0]

    if command in ("help", "--help", "-h"):
        print(__doc__.strip())
        return 0

    if command == "--version":
        from lispy import __version__
        print(f"lispy {__version__}")
        return 0

    handler = _COMMANDS.get(command)
    if handler is None:
        print(f"Error: unknown command '{command}'")
        print(__doc__.strip())
        return 1

    if len(args) < 2:
        print(f"Error: command '{command}' requires a file argument")
        return 1

    filepath = Path(args[1])
    if not filepath.is_file():
        print(f"Error: file not found: {filepath}")
        return 1

    try:
        source = filepath.read_text(encoding=settings.encoding)
    except UnicodeDecodeError as e:
        print(f"Error: cannot decode {filepath} as {settings.encoding}: {e}")
        return 1
    logger.debug(f"Read {len(source)} characters from {filepath}")
    return handler(source, str(filepath), settings)


def _cmd_tokenize(source: str, filename: str, settings: Settings) -> int:
    """Display the token stream, one token per line."""
    try:
        tokens = Lexer(source, filename).tokenize()
    except LexError as e:
        print(f"Error: {e}")
        return 1

    depth = 0
    for tok in tokens:
        # a ) is printed at the depth of its matching (
        if tok.type == TokenType.CLOSE_PAREN:
            depth = max(depth - 1, 0)
        print(f"{settings.indent * depth}{tok}")
        if tok.type == TokenType.OPEN_PAREN:
            depth += 1
    return 0


def _cmd_parse(source: str, filename: str, settings: Settings) -> int:
    """Display each top-level expression as soon as it is parsed."""
    try:
        tokens = Lexer(source, filename).tokenize()
        for expr in Parser(tokens, filename).expressions():
            print(expr)
    except (LexError, ParseError) as e:
        print(f"Error: {e}")
        return 1
    return 0


_COMMANDS = {
    "tokenize": _cmd_tokenize,
    "parse": _cmd_parse,
}


def _configure_logging(settings: Settings, verbose: bool) -> None:
    level = settings.verbose_log_level if verbose else settings.log_level
    logging.basicConfig(level=level, format=settings.log_format)
    logging.getLogger("lispy").setLevel(level)


if __name__ == "__main__":
    sys.exit(main())
