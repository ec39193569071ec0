"""
tangocard-account - look up or create a RaaS account from the shell.

Examples:
    tangocard-account show bonusly test
    tangocard-account find-or-create bonusly test dev@bonus.ly --log-level DEBUG

Credentials come from RAAS_PLATFORM_NAME / RAAS_PLATFORM_KEY (see config.py).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .account import Account
from .client_base import APIClientError
from .exceptions import RaasConfigError, RaasError
from .raas import RaasClient


def setup_logging(log_level: str) -> logging.Logger:
    logger = logging.getLogger("tangocard")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.setLevel(logger.level)
    logger.addHandler(ch)

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tangocard-account",
        description="Look up or create a Tango Card RaaS account.",
    )
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ERROR")

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Show an existing account")
    show.add_argument("customer")
    show.add_argument("identifier")

    for name, help_text in (
        ("create", "Create a new account"),
        ("find-or-create", "Show the account, creating it if missing"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("customer")
        p.add_argument("identifier")
        p.add_argument("email")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.log_level)

    try:
        with RaasClient() as client:
            if args.command == "show":
                account = Account.find(args.customer, args.identifier, client=client)
            elif args.command == "create":
                account = Account.create(args.customer, args.identifier, args.email, client=client)
            else:
                account = Account.find_or_create(args.customer, args.identifier, args.email, client=client)
    except RaasConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 2
    except RaasError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except APIClientError as e:
        logger.error(f"Transport error: {e}")
        return 1

    print(json.dumps(account.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
