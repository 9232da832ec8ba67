"""CLI entrypoint for inboxtally."""

import logging
import os
import sys

import click
from dotenv import load_dotenv
from googleapiclient.errors import HttpError
from rich.logging import RichHandler

from inboxtally.analytics import build_label_tree
from inboxtally.auth import build_service, get_access_token
from inboxtally.config import ScanSettings
from inboxtally.engine import UnreadCountEngine
from inboxtally.fetcher import fetch_label_names
from inboxtally.ui.cli import (
    confirm_action,
    console,
    print_error,
    print_header,
    print_info,
    print_label_tree,
    print_snapshot,
    print_success,
    print_warning,
)

# Load environment variables
load_dotenv()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _scan_settings(days, max_messages, batch_size, batch_delay_ms) -> ScanSettings:
    settings = ScanSettings.from_env()
    if days is not None:
        settings.lookback_days = days
    if max_messages is not None:
        settings.max_messages = max_messages
    if batch_size is not None:
        settings.batch_size = batch_size
    if batch_delay_ms is not None:
        settings.batch_delay_ms = batch_delay_ms
    return settings


def scan_options(func):
    """Shared options controlling the scan window and pacing."""
    func = click.option("--batch-delay-ms", type=int, help="Pause between metadata batches")(func)
    func = click.option("--batch-size", type=int, help="Concurrent metadata requests per batch")(func)
    func = click.option("--max-messages", type=int, help="Maximum unread messages to scan")(func)
    func = click.option("--days", type=int, help="Lookback window in days")(func)
    return func


def _run_scan(settings: ScanSettings) -> UnreadCountEngine | None:
    print_info(
        f"Scanning up to {settings.max_messages} unread messages "
        f"from the last {settings.lookback_days} days..."
    )
    with console.status("Scanning..."):
        engine = UnreadCountEngine(settings=settings)

    snapshot = engine.snapshot()
    if snapshot.error:
        print_error(f"Scan failed: {snapshot.error}")
        print_info("Run 'inboxtally auth' to sign in to Gmail.")
        engine.close()
        return None
    return engine


def _label_names() -> dict[str, str]:
    token = get_access_token()
    if not token:
        return {}
    try:
        return fetch_label_names(build_service(token))
    except HttpError as e:
        print_warning(f"Failed to fetch label names: {e}")
        return {}


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """inboxtally - unread thread counts per Gmail label."""
    _setup_logging(verbose)


@cli.command()
@scan_options
@click.option("--names/--no-names", default=True, help="Resolve label names")
def counts(days, max_messages, batch_size, batch_delay_ms, names: bool):
    """Scan unread mail and show counts per label."""
    print_header("Unread Counts")

    engine = _run_scan(_scan_settings(days, max_messages, batch_size, batch_delay_ms))
    if engine is None:
        return

    with engine:
        print_snapshot(engine.snapshot(), label_names=_label_names() if names else None)


@cli.command()
@scan_options
@click.option("--top-n", default=12, help="Number of top-level folders to show")
def folders(days, max_messages, batch_size, batch_delay_ms, top_n: int):
    """Show label folders that hold unread threads."""
    print_header("Folders with Unread")

    engine = _run_scan(_scan_settings(days, max_messages, batch_size, batch_delay_ms))
    if engine is None:
        return

    with engine:
        snapshot = engine.snapshot()
        tree = build_label_tree(_label_names(), snapshot.user_label_counts, top_n=top_n)
        print_label_tree(tree)


@cli.command()
def ui():
    """Launch the Streamlit dashboard."""
    import subprocess

    app_path = os.path.join(os.path.dirname(__file__), "app.py")
    subprocess.run([sys.executable, "-m", "streamlit", "run", app_path])


@cli.command()
def auth():
    """Authenticate with Gmail (or re-authenticate)."""
    print_header("Gmail Authentication")

    from inboxtally.auth import authenticate, delete_credentials, load_credentials

    existing = load_credentials()
    if existing and existing.valid:
        if confirm_action("Already authenticated. Re-authenticate?"):
            delete_credentials()
        else:
            print_info("Keeping existing authentication")
            return

    print_info("Opening browser for Google authentication...")

    try:
        creds = authenticate()
        service = build_service(creds.token)
        profile = service.users().getProfile(userId="me").execute()
        print_success(f"Authenticated as {profile.get('emailAddress')}")
    except FileNotFoundError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f"Authentication failed: {e}")


if __name__ == "__main__":
    cli()
