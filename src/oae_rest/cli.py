"""
oae-rest CLI entrypoint.

This CLI is intended for poking at a tenant from a shell while debugging: it builds a
`RestContext` from settings (overridable with flags) and prints the parsed response.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from oae_rest.api import user, version
from oae_rest.config.settings import get_settings
from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError
from oae_rest.core.http import perform_rest_request
from oae_rest.core.logging import configure_logging


def _parse_param_pairs(pairs: list[str]) -> dict[str, Any]:
    """Parse `KEY=VALUE` CLI arguments; repeated keys become lists."""
    out: dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid --param '{pair}', expected KEY=VALUE")
        key, value = pair.split("=", 1)
        key = key.strip()
        if key in out:
            existing = out[key]
            out[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            out[key] = value
    return out


def _build_context(args: argparse.Namespace) -> RestContext:
    return RestContext.from_settings(
        get_settings(),
        host=args.host,
        username=args.username,
        user_password=args.password,
        host_header=args.host_header,
        strict_ssl=False if args.insecure else None,
    )


def _print_body(body: Any) -> None:
    if isinstance(body, (dict, list)):
        print(json.dumps(body, ensure_ascii=False, indent=2))
    else:
        print(body)


def _cmd_request(args: argparse.Namespace) -> Any:
    ctx = _build_context(args)
    path = args.path if args.path.startswith("/") else f"/{args.path}"
    return perform_rest_request(ctx, path, args.method, _parse_param_pairs(args.param))


def _cmd_me(args: argparse.Namespace) -> Any:
    return user.get_me(_build_context(args))


def _cmd_version(args: argparse.Namespace) -> Any:
    return version.get_version(_build_context(args))


def _add_connection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", type=str, default=None, help="Base URL (default: rest.host setting)")
    parser.add_argument("--username", type=str, default=None)
    parser.add_argument("--password", type=str, default=None)
    parser.add_argument("--host-header", dest="host_header", type=str, default=None,
                        help="Tenant host name to send in the Host header")
    parser.add_argument("--insecure", action="store_true", help="Skip TLS certificate verification")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the oae-rest CLI."""
    parser = argparse.ArgumentParser(prog="oae-rest")
    parser.add_argument("--log-level", dest="log_level", type=str, default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    req = sub.add_parser("request", help="Send an arbitrary request and print the response body.")
    req.add_argument("method", type=str.upper, choices=["GET", "POST", "PUT", "DELETE"])
    req.add_argument("path", type=str, help="Endpoint path, e.g. /api/me")
    req.add_argument("-p", "--param", action="append", default=[], help="Repeatable KEY=VALUE parameter")
    _add_connection_args(req)
    req.set_defaults(func=_cmd_request)

    me = sub.add_parser("me", help="Show the `me` feed for the configured user.")
    _add_connection_args(me)
    me.set_defaults(func=_cmd_me)

    ver = sub.add_parser("version", help="Show the server version.")
    _add_connection_args(ver)
    ver.set_defaults(func=_cmd_version)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m oae_rest.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    try:
        body = func(args)
    except RestError as err:
        print(f"{err.code}: {err.msg}", file=sys.stderr)
        return 1
    _print_body(body)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
