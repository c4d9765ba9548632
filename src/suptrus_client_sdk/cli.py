from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Callable

from .broker import LocalKeyBroker, LoginOptions
from .config import load_config
from .diagnostics import collect_diagnostics, report_to_text
from .exceptions import SupTrusError
from .models import ProductSearchQuery, ProductStatus
from .session import Session, describe_state


def _print(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _prompt_approval(options: LoginOptions) -> bool:
    answer = input(f"Authenticate with {options.identity_provider}? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _session(args: argparse.Namespace) -> Session:
    config = load_config(args.env_file)
    approve: Callable[[LoginOptions], bool] | None = None
    if getattr(args, "interactive", False):
        approve = _prompt_approval
    return Session(config, broker=LocalKeyBroker(config, approve=approve))


def _authenticated(args: argparse.Namespace) -> Session:
    session = _session(args)
    session.initialize()
    return session


def cmd_login(args: argparse.Namespace) -> None:
    session = _session(args)
    ok = session.login()
    _print({"authenticated": ok, **describe_state(session.state)})
    if not ok:
        raise SystemExit(1)


def cmd_logout(args: argparse.Namespace) -> None:
    session = _authenticated(args)
    session.logout()
    _print(describe_state(session.state))


def cmd_whoami(args: argparse.Namespace) -> None:
    session = _authenticated(args)
    _print(describe_state(session.state))


def cmd_status(args: argparse.Namespace) -> None:
    client = _authenticated(args).status_client()
    _print(client.get_canister_status().model_dump(mode="json"))


def cmd_analytics(args: argparse.Namespace) -> None:
    client = _authenticated(args).status_client()
    _print(client.get_analytics().model_dump(mode="json"))


def cmd_product(args: argparse.Namespace) -> None:
    client = _authenticated(args).products_client()
    _print(client.get_product(args.product_id).model_dump(mode="json"))


def cmd_search(args: argparse.Namespace) -> None:
    client = _authenticated(args).products_client()
    query = ProductSearchQuery(
        name=args.name,
        category=args.category,
        manufacturer=args.manufacturer,
        status=ProductStatus(args.status) if args.status else None,
        limit=args.limit,
    )
    _print([product.model_dump(mode="json") for product in client.search_products(query)])


def cmd_events(args: argparse.Namespace) -> None:
    client = _authenticated(args).events_client()
    _print([event.model_dump(mode="json") for event in client.get_supply_chain_events(args.product_id)])


def cmd_partners(args: argparse.Namespace) -> None:
    client = _authenticated(args).partners_client()
    _print([partner.model_dump(mode="json") for partner in client.get_partners()])


def cmd_diagnose(args: argparse.Namespace) -> None:
    report = collect_diagnostics(_session(args))
    if args.text:
        print(report_to_text(report))
    else:
        _print(report)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="suptrus", description="SupTrus supply-chain canister CLI")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--interactive", action="store_true", help="ask before minting a credential")
    login_parser.set_defaults(func=cmd_login)

    subparsers.add_parser("logout").set_defaults(func=cmd_logout)
    subparsers.add_parser("whoami").set_defaults(func=cmd_whoami)
    subparsers.add_parser("status").set_defaults(func=cmd_status)
    subparsers.add_parser("analytics").set_defaults(func=cmd_analytics)
    subparsers.add_parser("partners").set_defaults(func=cmd_partners)

    product_parser = subparsers.add_parser("product")
    product_parser.add_argument("product_id")
    product_parser.set_defaults(func=cmd_product)

    events_parser = subparsers.add_parser("events")
    events_parser.add_argument("product_id")
    events_parser.set_defaults(func=cmd_events)

    search_parser = subparsers.add_parser("search")
    search_parser.add_argument("--name")
    search_parser.add_argument("--category")
    search_parser.add_argument("--manufacturer")
    search_parser.add_argument("--status", choices=[status.value for status in ProductStatus])
    search_parser.add_argument("--limit", type=int)
    search_parser.set_defaults(func=cmd_search)

    diagnose_parser = subparsers.add_parser("diagnose")
    diagnose_parser.add_argument("--text", action="store_true")
    diagnose_parser.set_defaults(func=cmd_diagnose)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except SupTrusError as exc:
        _print({"error": exc.code, "message": exc.message, "method": exc.method})
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
