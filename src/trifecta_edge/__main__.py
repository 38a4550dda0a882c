# ABOUTME: CLI entry point for the trifecta edge dispatcher.
# ABOUTME: Provides subcommands: serve, init-db, schema, stats.

import argparse
import asyncio
import logging
import sys

import structlog

from trifecta_edge.config import get_settings


def configure_logging() -> None:
    """Configure structlog for console or JSON output."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )
    else:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.processors.add_log_level,
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the edge dispatcher under uvicorn."""
    import uvicorn

    settings = get_settings()
    log = structlog.get_logger()

    host = args.host or settings.host
    port = args.port or settings.port
    log.info("cmd_serve_start", host=host, port=port, origin=settings.assets_origin_url)

    uvicorn.run(
        "trifecta_edge.web.app:app",
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_init_db(_args: argparse.Namespace) -> int:
    """Create the subscribers and analytics tables."""
    from trifecta_edge.db.session import close_db, init_db

    log = structlog.get_logger()

    async def _run() -> None:
        try:
            await init_db()
        finally:
            await close_db()

    try:
        asyncio.run(_run())
    except Exception:
        log.exception("cmd_init_db_failed")
        return 1

    log.info("cmd_init_db_complete")
    return 0


def cmd_schema(_args: argparse.Namespace) -> int:
    """Print the PostgreSQL DDL for the store tables."""
    from sqlalchemy.dialects import postgresql
    from sqlalchemy.schema import CreateIndex, CreateTable

    from trifecta_edge.db.models import Base

    dialect = postgresql.dialect()
    for table in Base.metadata.sorted_tables:
        print(f"{str(CreateTable(table).compile(dialect=dialect)).strip()};\n")
        for index in sorted(table.indexes, key=lambda i: i.name or ""):
            print(f"{str(CreateIndex(index).compile(dialect=dialect)).strip()};\n")

    print("To apply with migrations instead: alembic upgrade head")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Show subscriber and subscribe-event counts."""
    from trifecta_edge.db.repository import AnalyticsRepository, SubscriberRepository
    from trifecta_edge.db.session import close_db, get_session
    from trifecta_edge.services.subscription_service import SUBSCRIBE_EVENT

    log = structlog.get_logger()

    async def _counts() -> tuple[int, int]:
        try:
            async with get_session() as session:
                subscribers = await SubscriberRepository(session).count_by_site(args.site)
                events = await AnalyticsRepository(session).count_events(
                    SUBSCRIBE_EVENT, site=args.site
                )
            return subscribers, events
        finally:
            await close_db()

    try:
        subscribers, events = asyncio.run(_counts())
    except Exception:
        log.exception("cmd_stats_failed")
        return 1

    scope = args.site or "all sites"
    print(f"\n=== Subscribers ({scope}) ===")
    print(f"Subscribers: {subscribers}")
    print(f"Subscribe events: {events}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="trifecta_edge",
        description="Edge dispatcher for newsletter signups and affiliate-tagged pages",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the edge dispatcher",
    )
    serve_parser.add_argument(
        "--host",
        type=str,
        help="Bind address. Defaults to HOST setting.",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Bind port. Defaults to PORT setting.",
    )

    # init-db command
    subparsers.add_parser(
        "init-db",
        help="Create database tables",
    )

    # schema command
    subparsers.add_parser(
        "schema",
        help="Print table DDL",
    )

    # stats command
    stats_parser = subparsers.add_parser(
        "stats",
        help="Show subscriber counts",
    )
    stats_parser.add_argument(
        "--site",
        type=str,
        help="Restrict counts to one site",
    )

    return parser


def main() -> int:
    """Main entry point."""
    configure_logging()

    parser = create_parser()
    args = parser.parse_args()

    commands = {
        "serve": cmd_serve,
        "init-db": cmd_init_db,
        "schema": cmd_schema,
        "stats": cmd_stats,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
