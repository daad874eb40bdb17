"""Shared helpers for TradeJournal commands."""

from datetime import date
from typing import NoReturn, Optional

from rich.console import Console
from rich.panel import Panel

from tradejournal.formatting import THEMES
from tradejournal.gateway import GatewayError, JournalGateway, NotAuthenticatedError

console = Console(theme=THEMES["system"])


def fail(message: str, title: str = "Error") -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def _get_config() -> Optional[dict]:
    """Lazily load configuration."""
    from tradejournal.config import load_config

    return load_config()


def get_gateway(config: Optional[dict] = None) -> JournalGateway:
    """Build the configured gateway.

    The local backend works without a config file. The hosted backend
    needs Supabase credentials and a saved session, and checks that the
    user is on the access list.

    Raises:
        ConfigError: If the config file exists but cannot be parsed.
        GatewayError: If the backend is misconfigured or access is denied.
    """
    from tradejournal import config as cfg

    if config is None:
        config = _get_config()

    kind = cfg.backend_kind(config)

    if kind == "local":
        from tradejournal.gateway import LocalGateway

        return LocalGateway(cfg.local_db_path(config), user_id=cfg.local_user_id(config))

    if kind == "supabase":
        from tradejournal.gateway.hosted import SupabaseGateway

        url, key = cfg.supabase_credentials(config)
        session = cfg.load_session() or {}
        if not session.get("access_token"):
            raise NotAuthenticatedError("Not logged in")

        gateway = SupabaseGateway(
            url,
            key,
            access_token=session.get("access_token"),
            refresh_token=session.get("refresh_token"),
        )
        gateway.check_access()
        return gateway

    raise GatewayError(f"Unknown backend '{kind}'. Use 'local' or 'supabase'.")


def open_gateway() -> JournalGateway:
    """Build the gateway, exiting with an error panel on failure."""
    from tradejournal.config import ConfigError

    try:
        return get_gateway()
    except ConfigError as e:
        fail(
            f"[red]{e}[/red]\n\n"
            "Fix the file or delete it to start over with a new template.",
            title="Configuration Error",
        )
    except NotAuthenticatedError:
        fail(
            "[red]You are not logged in.[/red]\n\n"
            "Run [cyan]tradejournal login[/cyan] to sign in.",
            title="Login Required",
        )
    except GatewayError as e:
        fail(f"[red]Could not open the journal:[/red]\n\n{e}")


def parse_day(value: Optional[str]) -> date:
    """Parse a YYYY-MM-DD argument, defaulting to today."""
    if not value or value == "today":
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        fail(f"[red]Invalid date format: {value}. Use YYYY-MM-DD[/red]")
