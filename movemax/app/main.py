"""MoveMax - command-line entry point for the operations store."""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
import os
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from movemax.app.state import Store
from movemax.shared.core.configuration import get_config
from movemax.shared.core.event_bus import EventBus
from movemax.shared.domain.reporting import dashboard_metrics

load_dotenv()

logger = logging.getLogger(__name__)
console = Console()

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(logs_dir: Optional[Path] = None) -> Path:
    """Rotating file log at LOG_LEVEL (default DEBUG); console gets WARNING+."""
    logs_dir = logs_dir or Path(os.getenv("MOVEMAX_LOG_DIR", "data/logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / "movemax.log"
    file_log_level = LOG_LEVELS.get(os.getenv("LOG_LEVEL", "DEBUG").upper(), logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={log_file_path}, console=WARNING+")
    return log_file_path


# --- Commands ---


def cmd_status(store: Store, args: argparse.Namespace) -> int:
    table = Table(title="Projects")
    table.add_column("ID", style="bold")
    table.add_column("Customer")
    table.add_column("Date")
    table.add_column("Status")
    table.add_column("Value", justify="right")
    table.add_column("Crew", justify="right")
    for project in store.domain.projects:
        table.add_row(
            project.id,
            project.customer_name,
            project.date,
            project.status.value,
            f"${project.value:,.2f}",
            str(len(project.assigned_crew_ids)),
        )
    console.print(table)
    console.print(
        f"{len(store.domain.staff)} staff, {len(store.domain.logs)} log entries, "
        f"storage keys: {', '.join(store.storage.keys()) or 'none'}"
    )
    return 0


def cmd_reset(store: Store, args: argparse.Namespace) -> int:
    store.domain.reset_store()
    console.print("[green]Store reset to seed data.[/green]")
    return 0


def cmd_login_as(store: Store, args: argparse.Namespace) -> int:
    match = asyncio.run(store.app.sign_in(args.user_id))
    if match is None:
        console.print(f"[red]Unknown user id '{args.user_id}'[/red]")
        return 1

    user = store.auth.current_user
    console.print(f"Signed in as [bold]{user.name}[/bold] ({user.role.value}), landing on {match.path}")
    table = Table(title="Navigation")
    table.add_column("Item")
    table.add_column("Path")
    for item in store.app.visible_nav_items:
        table.add_row(item.label, item.path)
    console.print(table)
    return 0


def cmd_report(store: Store, args: argparse.Namespace) -> int:
    metrics = dashboard_metrics(store.domain.projects, date.today())
    console.print(f"Reclaimed space: [bold]{metrics.total_sq_ft:,.0f}[/bold] sq ft "
                  f"(est. ${metrics.estimated_savings:,} savings)")
    console.print(f"Recycled: [bold]{metrics.total_recycled:,.0f}[/bold] {store.domain.settings.weight_unit}")
    console.print(f"Active projects: [bold]{metrics.active_projects}[/bold]")
    console.print(f"Pipeline value: [bold]${metrics.total_revenue:,.2f}[/bold]")

    table = Table(title="Monthly activity")
    table.add_column("Month")
    table.add_column("Moves", justify="right")
    table.add_column("Revenue", justify="right")
    for bucket in metrics.chart:
        table.add_row(bucket.name, str(bucket.moves), f"${bucket.revenue:,.2f}")
    console.print(table)
    return 0


COMMANDS = {
    "status": cmd_status,
    "reset": cmd_reset,
    "login-as": cmd_login_as,
    "report": cmd_report,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="movemax", description="MoveMax operations store")
    parser.add_argument("--db", help="DuckDB file backing local storage (overrides MOVEMAX_DB_PATH)")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="List projects and storage keys")
    sub.add_parser("reset", help="Restore seed data and clear persisted keys")
    login = sub.add_parser("login-as", help="Sign in as a staff member and show their navigation")
    login.add_argument("user_id")
    sub.add_parser("report", help="Dashboard metrics")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    config = get_config()
    if args.db:
        config.storage.db_path = args.db

    store = Store.initialize(EventBus(), config)
    try:
        return COMMANDS[args.command](store, args)
    finally:
        store.storage.close()
        Store.reset()


if __name__ == "__main__":
    raise SystemExit(main())
