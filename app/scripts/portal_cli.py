"""
Command-line session against the school backend.

Tokens are kept in the token store file (TOKEN_STORE_PATH) between runs.
Usage:
    python -m app.scripts.portal_cli login EMAIL PASSWORD
    python -m app.scripts.portal_cli whoami
    python -m app.scripts.portal_cli dashboard [--school SCHOOL_ID]
    python -m app.scripts.portal_cli logout
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from app.auth.schemas import LoginRequest
from app.auth.services import login_user, logout, resolve_current_user
from app.auth.token_store import TokenStore
from app.core.config import settings
from app.core.exceptions import ServiceError
from app.core.logging_config import configure_logging
from app.core.school_api import SchoolApiClient
from app.portal.controller import SchoolPortal


def _client(store: TokenStore) -> SchoolApiClient:
    return SchoolApiClient(token_provider=store.access_token)


async def cmd_login(store: TokenStore, email: str, password: str) -> None:
    async with _client(store) as api:
        result = await login_user(api, LoginRequest(email=email, password=password), store=store)
    print(f"Logged in as {result.role}. Dashboard: {result.redirect_to}")


async def cmd_whoami(store: TokenStore) -> None:
    async with _client(store) as api:
        user = await resolve_current_user(api)
    print(f"Role: {user.role}")
    print(f"School: {user.school_id or '-'}")


async def cmd_dashboard(store: TokenStore, school_id: Optional[str]) -> None:
    async with _client(store) as api:
        portal = await SchoolPortal.for_session(api, school_id)
        if not await portal.load():
            raise ServiceError("Failed to load school data")
    data = portal.state.dashboard
    school = data.school
    print(f"{school.name if school else portal.state.school_id} ({'edit' if portal.state.can_edit else 'read-only'})")
    print(
        f"Classes: {data.stats.total_classes}  Sections: {data.stats.total_sections}  Tutors: {data.stats.total_tutors}"
    )
    for grade in data.grades:
        print(f"  {grade.name}")
        for section in grade.sections:
            tutor = section.class_tutor.name if section.class_tutor else "-"
            subjects = ", ".join(section.subject_names()) or "-"
            print(f"    {section.name} (class tutor: {tutor}): {subjects}")
    for assignment in data.assignments:
        keys = ", ".join(f"{k}: {'/'.join(v)}" for k, v in assignment.assignments.items() if v)
        print(f"  {assignment.tutor_name or assignment.tutor_id}: {keys or '-'}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="portal_cli", description="School admin portal session")
    parser.add_argument("--token-file", default=settings.token_store_path)
    sub = parser.add_subparsers(dest="command", required=True)
    login_parser = sub.add_parser("login")
    login_parser.add_argument("email")
    login_parser.add_argument("password")
    sub.add_parser("logout")
    sub.add_parser("whoami")
    dashboard_parser = sub.add_parser("dashboard")
    dashboard_parser.add_argument("--school", dest="school_id", default=None)
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    store = TokenStore(args.token_file)
    try:
        if args.command == "login":
            asyncio.run(cmd_login(store, args.email, args.password))
        elif args.command == "logout":
            logout(store)
            print("Logged out.")
        elif args.command == "whoami":
            asyncio.run(cmd_whoami(store))
        else:
            asyncio.run(cmd_dashboard(store, args.school_id))
    except ServiceError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
