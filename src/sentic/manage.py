#!/usr/bin/env python3
"""
Entrypoint script for development and management tasks.

    sentic-manage seed-admin [--username admin] [--password admin123]
    sentic-manage runserver [--host 0.0.0.0] [--port 5000]
"""
import argparse
import asyncio
import sys

from dotenv import load_dotenv

from sentic.common.config.settings import get_settings
from sentic.common.logging.logger import configure_logging, log_error, log_info
from sentic.infrastructure.database.mongodb.connection import MongoDBConnection
from sentic.infrastructure.database.mongodb.repositories.admin_repository import AdminRepository
from sentic.infrastructure.setup.initial_setup import ensure_admin

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


async def seed_admin(username: str, password: str) -> int:
    settings = get_settings()
    mongo = MongoDBConnection(settings)
    await mongo.connect()
    try:
        admin_id = await ensure_admin(AdminRepository(mongo.get_db()), username, password)
    finally:
        await mongo.disconnect()

    if admin_id:
        print("Admin created successfully")
        print(f"Username: {username}")
    else:
        print("Admin already exists")
    return 0


def runserver(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("sentic.main:create_app", factory=True, host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sentic-manage", description="SENTIC management tasks")
    commands = parser.add_subparsers(dest="command", required=True)

    seed = commands.add_parser("seed-admin", help="Create the admin account if it does not exist")
    seed.add_argument("--username", default=None)
    seed.add_argument("--password", default=None)

    serve = commands.add_parser("runserver", help="Run the API with uvicorn")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=None)
    return parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)
    log_info("Manage script started.", extra={"command": args.command})

    try:
        if args.command == "seed-admin":
            username = args.username or settings.ADMIN_USERNAME or DEFAULT_ADMIN_USERNAME
            password = args.password or settings.ADMIN_PASSWORD or DEFAULT_ADMIN_PASSWORD
            return asyncio.run(seed_admin(username, password))
        return runserver(args.host, args.port or settings.PORT)
    except Exception as e:
        log_error("Management command failed", extra={"command": args.command, "error": str(e)}, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
