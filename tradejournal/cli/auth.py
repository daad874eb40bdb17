"""Authentication commands for TradeJournal CLI.

Handles login/logout/registration against the hosted Supabase backend.
The local backend needs no authentication.
"""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.common import console, fail


def _get_config():
    """Lazily load configuration, exiting if the file is unreadable."""
    from tradejournal.config import ConfigError, load_config

    try:
        return load_config()
    except ConfigError as e:
        fail(
            f"[red]{e}[/red]\n\n"
            "Fix the file or delete it to start over with a new template.",
            title="Configuration Error",
        )


def _hosted_gateway(config: dict):
    """Build an unauthenticated Supabase gateway from config."""
    from tradejournal.config import supabase_credentials
    from tradejournal.gateway import GatewayError
    from tradejournal.gateway.hosted import SupabaseGateway

    url, key = supabase_credentials(config)
    if not url or not key:
        fail(
            "[red]Supabase is not configured.[/red]\n\n"
            "Set [cyan]supabase.url[/cyan] and [cyan]supabase.key[/cyan] in config.toml\n"
            "or the SUPABASE_URL and SUPABASE_KEY environment variables.",
            title="Configuration Error",
        )
    try:
        return SupabaseGateway(url, key)
    except GatewayError as e:
        fail(f"[red]Could not connect to Supabase:[/red]\n\n{e}")


def _ensure_config() -> dict:
    """Load config, creating a template on first run."""
    from tradejournal.config import create_template_config, get_config_path

    config = _get_config()
    if config is None and not get_config_path().exists():
        config_path = create_template_config()
        console.print(Panel(
            f"[yellow]Configuration file created at:[/yellow]\n"
            f"[cyan]{config_path}[/cyan]\n\n"
            f"The local journal is ready to use. To sync with Supabase,\n"
            f"set [cyan]backend.kind = \"supabase\"[/cyan] and your project credentials,\n"
            f"then run [green]tradejournal login[/green] again.",
            title="[bold]Configuration Created[/bold]",
            border_style="yellow",
        ))
        config = _get_config() or {}
    return config


@click.command()
@click.option("--email", default=None, help="Account email.")
@click.option("--password", default=None, help="Account password (prompted if omitted).")
def login(email: Optional[str], password: Optional[str]) -> None:
    """Sign in to the hosted journal.

    Stores the session so later commands run as the signed-in user.
    Only users on the access list may use the journal.

    \b
    Examples:
      tradejournal login
      tradejournal login --email me@example.com
    """
    from tradejournal.config import backend_kind, clear_session, save_session
    from tradejournal.gateway import AccessDeniedError, GatewayError

    config = _ensure_config()

    if backend_kind(config) == "local":
        console.print(Panel(
            "[green]✓[/green] Local journal active\n\n"
            "[dim]Entries are stored on this machine; no login is needed.[/dim]",
            title="[bold green]Login Successful[/bold green]",
            border_style="green",
        ))
        return

    gateway = _hosted_gateway(config)

    if not email:
        email = click.prompt("Email")
    if not password:
        password = click.prompt("Password", hide_input=True)

    console.print("[dim]Signing in...[/dim]")

    try:
        session = gateway.sign_in(email, password)
        gateway.check_access()
    except AccessDeniedError:
        clear_session()
        fail(
            "[red]✗[/red] Your account does not have access to this journal.\n\n"
            "[dim]Ask the administrator to activate your email.[/dim]",
            title="Access Denied",
        )
    except GatewayError as e:
        fail(f"[red]✗[/red] Authentication failed\n\n[dim]{e}[/dim]", title="Login Failed")

    save_session(session)
    console.print(Panel(
        f"[green]✓[/green] Signed in as [cyan]{session.get('email') or email}[/cyan]\n\n"
        "[dim]Welcome back! Session stored.[/dim]",
        title="[bold green]Login Successful[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option("--first-name", prompt=True, help="First name.")
@click.option("--last-name", prompt=True, help="Last name.")
@click.option("--email", prompt=True, help="Account email.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (at least 6 characters).",
)
def register(first_name: str, last_name: str, email: str, password: str) -> None:
    """Create an account on the hosted journal.

    \b
    Examples:
      tradejournal register
    """
    from tradejournal.config import backend_kind, save_session
    from tradejournal.gateway import GatewayError

    if len(password) < 6:
        fail("[red]Password must be at least 6 characters.[/red]", title="Registration Failed")

    config = _ensure_config()
    if backend_kind(config) == "local":
        console.print("[yellow]The local journal does not use accounts.[/yellow]")
        return

    gateway = _hosted_gateway(config)

    try:
        session = gateway.sign_up(email, password, first_name.strip(), last_name.strip())
    except GatewayError as e:
        fail(f"[red]✗[/red] {e}", title="Registration Failed")

    if session.get("access_token"):
        save_session(session)

    console.print(Panel(
        f"[green]✓[/green] Welcome {first_name}! Your account has been created.\n\n"
        "[dim]If email confirmation is enabled, confirm your address before logging in.[/dim]",
        title="[bold green]Account Created[/bold green]",
        border_style="green",
    ))


@click.command()
def logout() -> None:
    """Sign out and clear the stored session."""
    from tradejournal.config import backend_kind, clear_session, load_session, supabase_credentials

    config = _get_config()

    if config is None or backend_kind(config) == "local":
        console.print("[yellow]Local journal active. Nothing to logout from.[/yellow]")
        return

    session = load_session() or {}
    url, key = supabase_credentials(config)

    if session.get("access_token") and url and key:
        from tradejournal.gateway import GatewayError
        from tradejournal.gateway.hosted import SupabaseGateway

        try:
            SupabaseGateway(
                url,
                key,
                access_token=session.get("access_token"),
                refresh_token=session.get("refresh_token"),
            ).sign_out()
        except GatewayError as e:
            console.print(f"[yellow]⚠ Could not invalidate remote session: {e}[/yellow]")

    clear_session()
    console.print(Panel(
        "[green]✓[/green] Session cleared\n\n"
        "[dim]Run [cyan]tradejournal login[/cyan] to sign in again.[/dim]",
        title="[bold green]Logout Successful[/bold green]",
        border_style="green",
    ))
