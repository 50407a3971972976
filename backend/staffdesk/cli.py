from __future__ import annotations

import argparse
import getpass
import sys

from staffdesk.client import ClientSession, StaffDeskClient, TokenStore, generate_employee_id
from staffdesk.core.config import settings
from staffdesk.core.errors import StaffDeskError


def session_from_args(args: argparse.Namespace) -> ClientSession:
    return ClientSession(TokenStore(args.session or settings.session_path))


def client_from_args(args: argparse.Namespace) -> StaffDeskClient:
    return StaffDeskClient.connect(args.api_url or settings.api_url, session_from_args(args))


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run("staffdesk.main:app", host=args.host, port=args.port, reload=args.reload)


def cmd_init_db(args: argparse.Namespace) -> None:
    from staffdesk.seed.seed_data import seed
    from staffdesk.storage.factory import open_storage, prepare_storage

    prepare_storage()
    with open_storage() as storage:
        seeded = seed(storage)
        name = storage.name
    state = "seeded" if seeded else "already initialized"
    print(f"{name} store {state}")


def cmd_login(args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Password: ")
    client = client_from_args(args)
    try:
        user = client.login(args.username, password)
    finally:
        client.close()
    print(f"Logged in as {user['username']}")


def cmd_logout(args: argparse.Namespace) -> None:
    session = session_from_args(args)
    session.logout()
    print("Logged out")


def cmd_whoami(args: argparse.Namespace) -> None:
    session = session_from_args(args)
    if not session.is_logged_in():
        print("Not logged in")
        return
    print(f"{session.username} (id {session.user_id})")


def cmd_list_employees(args: argparse.Namespace) -> None:
    client = client_from_args(args)
    try:
        employees = client.list_employees()
    finally:
        client.close()
    for e in employees:
        position = e.get("position_name") or "-"
        print(f"{e['id']} {e['employee_id']} {e['last_name']} {e['first_name']} position: {position}")


def cmd_list_positions(args: argparse.Namespace) -> None:
    client = client_from_args(args)
    try:
        positions = client.list_positions()
    finally:
        client.close()
    for p in positions:
        print(f"{p['id']} {p['name']}")


def cmd_add_position(args: argparse.Namespace) -> None:
    client = client_from_args(args)
    try:
        position = client.create_position(args.name)
    finally:
        client.close()
    print(f"Added position {position['id']} ({position['name']})")


def cmd_new_id(args: argparse.Namespace) -> None:
    print(generate_employee_id(args.first_name, args.last_name, args.middle_name))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="StaffDesk employee management")
    parser.add_argument("--api-url", help="API base URL (default from STAFFDESK_API_URL)")
    parser.add_argument("--session", help="Session file path (default from STAFFDESK_SESSION_PATH)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    init_db = sub.add_parser("init-db", help="Create tables and seed defaults")
    init_db.set_defaults(func=cmd_init_db)

    login = sub.add_parser("login", help="Sign in and store the session token")
    login.add_argument("username")
    login.add_argument("--password", help="Prompted for when omitted")
    login.set_defaults(func=cmd_login)

    logout = sub.add_parser("logout", help="Forget the stored session")
    logout.set_defaults(func=cmd_logout)

    whoami = sub.add_parser("whoami", help="Show the signed-in user")
    whoami.set_defaults(func=cmd_whoami)

    employees = sub.add_parser("list-employees", help="List employees")
    employees.set_defaults(func=cmd_list_employees)

    positions = sub.add_parser("list-positions", help="List positions")
    positions.set_defaults(func=cmd_list_positions)

    add_position = sub.add_parser("add-position", help="Create a position")
    add_position.add_argument("name")
    add_position.set_defaults(func=cmd_add_position)

    new_id = sub.add_parser("new-id", help="Generate an employee id")
    new_id.add_argument("first_name")
    new_id.add_argument("last_name")
    new_id.add_argument("--middle-name")
    new_id.set_defaults(func=cmd_new_id)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except StaffDeskError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
