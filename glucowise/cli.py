# -*- coding: utf-8 -*-
"""
Command line entry point.

Usage:
    glucowise serve [--host 127.0.0.1] [--port 8000]
    glucowise users
    glucowise seed-demo <email>
    glucowise hba1c <email> <days>
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import settings


def _user_or_none(email: str):
    from .app_db import init_app_db
    from .auth.storage import get_user_by_email

    init_app_db(settings.app_db_path)
    user = get_user_by_email(email)
    if not user:
        print(f"Error: no user registered with {email}")
    return user


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("glucowise.api:app", host=args.host, port=args.port, reload=args.reload, log_level=settings.log_level.lower())
    return 0


def cmd_users(args: argparse.Namespace) -> int:  # noqa: ARG001
    from .app_db import init_app_db
    from .auth.storage import list_users

    init_app_db(settings.app_db_path)
    users = list_users()
    if not users:
        print("No users registered.")
        return 0
    for user in users:
        print(f"{user['id']}  {user['email']:<32}  {user['name']}  (since {user['created_at']})")
    return 0


def cmd_seed_demo(args: argparse.Namespace) -> int:
    from .tracking.store import registry, seed_demo_data

    user = _user_or_none(args.email)
    if not user:
        return 1
    with registry.editing(user["id"]) as store:
        seed_demo_data(store)
    print(f"Loaded demo meals, readings and activity for {user['email']}")
    return 0


def cmd_hba1c(args: argparse.Namespace) -> int:
    from .insights.calculator import estimate_hba1c
    from .insights.models import EstimateStatus
    from .tracking.store import registry

    user = _user_or_none(args.email)
    if not user:
        return 1
    estimate = estimate_hba1c(registry.get(user["id"]), args.days)
    if estimate.status != EstimateStatus.ok:
        print(estimate.message)
        return 1
    print(f"Average glucose over {estimate.days} days: {estimate.average_glucose:.0f} mg/dL")
    print(f"Estimated HbA1c: {estimate.hba1c_pct:.1f}%")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="GlucoWise backend tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("users", help="List registered users")

    seed_parser = subparsers.add_parser("seed-demo", help="Load sample data for a user")
    seed_parser.add_argument("email", help="Registered user email")

    hba1c_parser = subparsers.add_parser("hba1c", help="Estimate HbA1c for a user")
    hba1c_parser.add_argument("email", help="Registered user email")
    hba1c_parser.add_argument("days", help="Number of days to average")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "serve": cmd_serve,
        "users": cmd_users,
        "seed-demo": cmd_seed_demo,
        "hba1c": cmd_hba1c,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
