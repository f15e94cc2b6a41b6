"""Generate a signed sample request for the verifier.

Sets up a fresh group (default: 3 managers), issues one member credential,
signs ``--signed`` and writes a request carrying ``--message`` to stdout in
the chosen wire format. Passing a different ``--message`` yields a request
that verifies as NG.

Run:
    python scripts/make_sample_request.py --format envelope > request.bin
    dbss-verify verify < request.bin
"""
from __future__ import annotations

import argparse
import sys

from dbss_verify.codecs import CODECS, get_codec
from dbss_verify.request import VerificationRequest
from dbss_verify.scheme import issue_member_key, setup_group, sign


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    p.add_argument("--format", choices=sorted(CODECS), default="envelope")
    p.add_argument("--signed", default="hoge", help="Message that gets signed")
    p.add_argument("--message", default=None, help="Message placed in the request (default: --signed)")
    p.add_argument("--managers", type=int, default=3)
    ns = p.parse_args(argv)

    gpk, shares = setup_group(ns.managers)
    member = issue_member_key(shares)
    signature = sign(ns.signed.encode("utf-8"), member, gpk)

    codec = get_codec(ns.format)
    message = ns.signed if ns.message is None else ns.message
    request = VerificationRequest(
        message=message.encode("utf-8"),
        signature=codec.dump_signature(signature),
        gpk=codec.dump_gpk(gpk),
    )
    sys.stdout.buffer.write(codec.encode(request))
    sys.stdout.buffer.flush()
    print(f"wrote {ns.format} request ({ns.managers} managers)", file=sys.stderr)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
