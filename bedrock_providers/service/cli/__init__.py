"""``bedrock-chat`` command line interface (package entrypoint).

This package wires argument parsing to action handlers in ``cli_actions``; it
performs no provider logic directly.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from ...base.logging import configure_logger
from .cli_actions import handle_providers, handle_stream, handle_title
from .cli_parser import build_parser

_COMMANDS = {"stream", "title", "providers"}


def main(
    argv: Optional[list[str]] = None,
    *,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """CLI entrypoint; returns the process exit code.

    ``stream`` is the default subcommand, so ``bedrock-chat "hello"`` streams
    a reply.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    argv_list = list(sys.argv[1:] if argv is None else argv)
    if argv_list and argv_list[0] not in _COMMANDS and argv_list[0] not in {"-h", "--help"}:
        argv_list = ["stream"] + argv_list
    args = build_parser().parse_args(argv_list)

    if getattr(args, "log_level", None) or getattr(args, "log_file", None):
        configure_logger(level=args.log_level, file_path=args.log_file)

    if args.cmd == "title":
        return handle_title(args, out, err)
    if args.cmd == "providers":
        return handle_providers(args, out, err)
    if args.cmd == "stream":
        return handle_stream(args, out, err)
    build_parser().print_help(err)
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
