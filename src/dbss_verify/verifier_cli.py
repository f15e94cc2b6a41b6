from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO

from pydantic import ValidationError

from .codecs import CODECS, get_codec
from .dispatch import Verdict, verify
from .errors import InputReadError
from .settings import describe_error, get_settings

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 1
EXIT_MALFORMED = 2
EXIT_INPUT = 3

USAGE_TEXT = (
    "usage:\t {prog} verify [--format {{{formats}}}] [--legacy-exit-codes]\n\n"
    "Read parameters (message, signature, and gpk) from stdin, "
    "in the {default} format unless --format is given."
)


class _UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise _UsageError(message)


def usage(prog: str) -> str:
    return USAGE_TEXT.format(
        prog=prog, formats=",".join(sorted(CODECS)), default=get_settings().dbss_wire_format
    )


def read_input(stream: BinaryIO) -> bytes:
    try:
        return stream.read()
    except OSError as e:
        raise InputReadError(f"failed to read from stdin: {e}") from e


def cmd_verify(ns: argparse.Namespace) -> int:
    legacy = ns.legacy_exit_codes or get_settings().dbss_legacy_exit_codes
    try:
        data = read_input(sys.stdin.buffer)
    except InputReadError as e:
        print(str(e), file=sys.stderr)
        return EXIT_REJECTED if legacy else EXIT_INPUT

    outcome = verify(data, codec=get_codec(ns.format))
    if outcome.verdict is Verdict.VERIFIED:
        print("OK")
        return EXIT_OK
    if outcome.verdict is Verdict.REJECTED:
        print("NG")
        return EXIT_REJECTED
    print(f"malformed request: {outcome.reason}", file=sys.stderr)
    return EXIT_REJECTED if legacy else EXIT_MALFORMED


def build_parser(prog: str = "dbss-verify") -> argparse.ArgumentParser:
    p = _Parser(prog=prog, description="Distributed BBS group signature verifier", add_help=False)
    sub = p.add_subparsers(dest="cmd", required=True)

    verify_p = sub.add_parser("verify", add_help=False, help="Verify a request read from stdin")
    verify_p.add_argument(
        "--format",
        choices=sorted(CODECS),
        default=get_settings().dbss_wire_format,
        help="Wire format of the request (default: %(default)s)",
    )
    verify_p.add_argument(
        "--legacy-exit-codes",
        action="store_true",
        help="Exit 1 for malformed input as well as rejected signatures",
    )
    verify_p.set_defaults(func=cmd_verify)
    return p


def main(argv: list[str] | None = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"invalid configuration: {describe_error(e)}", file=sys.stderr)
        return EXIT_USAGE
    logging.basicConfig(
        level=settings.dbss_log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    parser = build_parser()
    try:
        ns = parser.parse_args(argv)
    except _UsageError:
        print(usage(parser.prog))
        return EXIT_USAGE
    return ns.func(ns)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
