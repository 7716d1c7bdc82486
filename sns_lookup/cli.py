"""Command line interface: ``sns-lookup resolve bonfida``."""

import argparse
import logging
import sys
from typing import List, Sequence

import pandas as pd
from solders.pubkey import Pubkey

from .config import ConfigurationError, load_config
from .errors import ErrorType, SNSError
from .proxy import ProxyClient
from .records import Record
from .resolver_logic import ResolutionStatus, SnsResolver
from .utils import detect_input_type, explorer_address_url, format_address, format_domain, is_pubkey

logger = logging.getLogger(__name__)

DOMAIN_LINK = "https://sns.id/domain/{}"


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid."""


def print_table(rows: List[dict]) -> None:
    if not rows:
        print("No results")
        return
    print(pd.DataFrame(rows).fillna("").to_string(index=False))


def _pubkey_arg(value: str) -> Pubkey:
    if not is_pubkey(value):
        raise CLIError(f"Not a valid public key: {value}")
    return Pubkey.from_string(value)


def cmd_resolve(resolver: SnsResolver, args) -> int:
    rows = []
    for domain in args.domain:
        res = resolver.resolve(domain) if args.destination else resolver.resolve_owner(domain)
        if res.status == ResolutionStatus.RESOLVED:
            rows.append({"Domain": format_domain(domain), "Owner": str(res.value), "Explorer": explorer_address_url(res.value)})
        elif res.status == ResolutionStatus.NOT_FOUND:
            rows.append({"Domain": format_domain(domain), "Owner": "Domain not found"})
        else:
            rows.append({"Domain": format_domain(domain), "Owner": f"Error: {res.message}"})
    print_table(rows)
    return 0


def cmd_lookup(resolver: SnsResolver, args) -> int:
    rows = []
    for domain in args.domain:
        key, registry = resolver.lookup(domain)
        if registry is None:
            rows.append({"Domain": format_domain(domain), "Domain key": str(key)})
            continue
        rows.append({
            "Domain": format_domain(domain),
            "Domain key": str(key),
            "Parent": str(registry.parent_name),
            "Owner": str(registry.owner),
            "Data": registry.data.rstrip(b"\x00").decode("utf-8", errors="replace"),
        })
    print_table(rows)
    return 0


def cmd_reverse_lookup(resolver: SnsResolver, args) -> int:
    key = _pubkey_arg(args.key)
    res = resolver.reverse_lookup(key)
    if not res.ok:
        print("Domain not found - Are you sure it exists?")
        return 1
    print_table([{"Public key": args.key, "Reverse": format_domain(res.value)}])
    return 0


def _owner_arg(resolver: SnsResolver, value: str) -> Pubkey:
    """Wallet key as given, or the owner of a domain name."""
    kind = detect_input_type(value)
    if kind is None:
        raise CLIError("Owner is empty")
    if kind == "pubkey":
        return Pubkey.from_string(value.strip())
    res = resolver.resolve_owner(value)
    if not res.ok:
        raise CLIError(f"Cannot find the owner of {format_domain(value.strip())}")
    return res.value


def cmd_domains(resolver: SnsResolver, args) -> int:
    rows = []
    for owner in args.owners:
        owner_key = _owner_arg(resolver, owner)
        for name in resolver.get_domain_names(owner_key):
            rows.append({
                "Domain": format_domain(name),
                "Owner": format_address(str(owner_key)),
                "Link": DOMAIN_LINK.format(name),
            })
    print_table(rows)
    return 0


def cmd_record_get(resolver: SnsResolver, args) -> int:
    record = Record.from_str(args.record)
    if args.v2:
        res = resolver.get_record_v2(args.domain, record)
    else:
        res = resolver.get_record(args.domain, record)
    if res.status == ResolutionStatus.NOT_FOUND:
        print(res.message)
        return 1
    if res.status == ResolutionStatus.ERROR:
        print(f"Error: {res.message}")
        return 1
    print_table([{
        "Domain": format_domain(args.domain),
        "Record": record.value,
        "Content": res.value,
        "Stale": "yes" if res.error == ErrorType.StaleRecord else "no",
    }])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sns-lookup", description="Solana Name Service lookups")
    parser.add_argument("--url", "-u", help="Optional custom RPC URL")
    parser.add_argument("--proxy", action="store_true", help="Fall back to the SDK proxy for unknown domains, records v2 and owners")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("resolve", help="Resolve the owner of the specified domain names")
    p.add_argument("domain", nargs="+", help="Domains with or without .sol suffix")
    p.add_argument("--destination", action="store_true", help="Follow verified SOL records instead of the raw owner")
    p.set_defaults(func=cmd_resolve)

    p = sub.add_parser("lookup", help="Fetch the name registry data for the specified domain names")
    p.add_argument("domain", nargs="+")
    p.set_defaults(func=cmd_lookup)

    p = sub.add_parser("reverse-lookup", help="Perform a reverse lookup")
    p.add_argument("key", help="The public key (base58 encoded) to lookup")
    p.set_defaults(func=cmd_reverse_lookup)

    p = sub.add_parser("domains", help="Fetch all the domain names owned by the specified wallets")
    p.add_argument("owners", nargs="+", help="Wallet keys, or domains whose owner to use")
    p.set_defaults(func=cmd_domains)

    record = sub.add_parser("record", help="Read domain records")
    record_sub = record.add_subparsers(dest="record_command", required=True)
    p = record_sub.add_parser("get", help="Gets a record content")
    p.add_argument("--domain", required=True)
    p.add_argument("--record", required=True)
    p.add_argument("--v2", action="store_true", help="Read the records v2 account")
    p.set_defaults(func=cmd_record_get)
    return parser


def main(argv: Sequence[str] = None, resolver: SnsResolver = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if resolver is None:
            config = load_config(rpc_url=args.url)
            proxy = ProxyClient(config.proxy_url, config.http_timeout) if args.proxy else None
            resolver = SnsResolver(config=config, proxy=proxy)
        return args.func(resolver, args)
    except (CLIError, ConfigurationError, SNSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
