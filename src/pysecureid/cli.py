"""Command line tool for key provisioning and token debugging.

Reads the key ring from ``SECUREID_*`` environment variables (see
:meth:`pysecureid.KeyRingConfig.from_env`).

Examples::

    python -m pysecureid genkey
    python -m pysecureid issue --model Product --id 42 --int-id --scope receipt --ttl 3600
    python -m pysecureid resolve <token> --model Product --scope receipt
    python -m pysecureid inspect-ring --json
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime, timedelta

from pysecureid._constants import KEY_PREFIX_BASE64, KEY_SIZE
from pysecureid.config import KeyRingConfig
from pysecureid.exceptions import SecureIdError
from pysecureid.generator import TokenGenerator
from pysecureid.keyring import KeyRing
from pysecureid.resolver import TokenResolver


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pysecureid",
        description="Issue, resolve and inspect secure external id tokens.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("genkey", help="Print a new random key for the key ring")

    issue = sub.add_parser("issue", help="Issue a token with the primary key")
    issue.add_argument("--model", required=True, help="Record type tag")
    issue.add_argument("--id", required=True, dest="record_id", help="Record identifier")
    issue.add_argument("--int-id", action="store_true", help="Treat --id as an integer")
    issue.add_argument("--scope", required=True, help="Token scope")
    issue.add_argument("--ttl", type=int, help="Expire after this many seconds")

    res = sub.add_parser("resolve", help="Resolve a token to its identifier")
    res.add_argument("token")
    res.add_argument("--model", required=True, help="Expected record type tag")
    res.add_argument("--scope", required=True, help="Expected scope")

    ring = sub.add_parser("inspect-ring", help="Show key versions (never key bytes)")
    ring.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    return parser


def main(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if args.command == "genkey":
        print(KEY_PREFIX_BASE64 + base64.b64encode(os.urandom(KEY_SIZE)).decode("ascii"))
        return 0

    try:
        keyring = KeyRing.from_config(KeyRingConfig.from_env(environ))
    except SecureIdError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "issue":
        record_id: int | str = args.record_id
        if args.int_id:
            try:
                record_id = int(args.record_id)
            except ValueError:
                print(f"error: --id {args.record_id!r} is not an integer", file=sys.stderr)
                return 2
        expires_at = None
        if args.ttl is not None:
            expires_at = datetime.now(UTC) + timedelta(seconds=args.ttl)
        try:
            print(TokenGenerator(keyring).generate(args.model, record_id, args.scope, expires_at))
        except SecureIdError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        return 0

    if args.command == "resolve":
        result = TokenResolver(keyring).resolve(args.token, args.model, args.scope)
        if result is None:
            print("not found", file=sys.stderr)
            return 1
        print(result)
        return 0

    info = {
        "primary_version": keyring.primary_version,
        "versions": list(keyring.versions),
        "primary_present": keyring.key_for_version(keyring.primary_version) is not None,
    }
    if args.json_mode:
        print(json.dumps(info, indent=2))
    else:
        print(f"primary: {info['primary_version']}" + ("" if info["primary_present"] else " (MISSING)"))
        print(f"versions: {', '.join(info['versions']) or '<none>'}")
    return 0
