"""CLI parser construction for ``bedrock-chat``.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def _logging_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    common.add_argument("--log-file", default=None, help="Also write JSON logs to this file")
    return common


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    No I/O or network calls occur here.
    """
    common = _logging_options()
    p = argparse.ArgumentParser(
        prog="bedrock-chat", description="Stream chat completions from AWS Bedrock"
    )
    sub = p.add_subparsers(dest="cmd")

    p_stream = sub.add_parser("stream", parents=[common], help="Stream a reply to a prompt (default)")
    p_stream.add_argument("prompt")
    p_stream.add_argument("--provider", default=None)
    p_stream.add_argument("--model", default=None)
    p_stream.add_argument("--system", default=None, help="Optional system prompt")
    p_stream.add_argument("--max-tokens", type=int, default=None)
    p_stream.add_argument("--temperature", type=float, default=None)

    p_title = sub.add_parser("title", parents=[common], help="Generate a conversation title")
    p_title.add_argument("prompt")
    p_title.add_argument("--provider", default=None)

    sub.add_parser("providers", parents=[common], help="List available providers")
    return p


__all__ = ["build_parser"]
