"""
adapters.cli.main - CLI adapter for the Medicinal Diet Assistant.

Mirrors src/adapters/rest/ but for terminal use. Uses the same
ServiceFactory, AuthenticationService and RecommendationService as the
REST API so all behaviour (auth, validation, persistence) is identical.

Commands
--------
  register   Create a new account
  login      Sign in and save credentials locally (~/.medicinal-diet/session.json)
  logout     Clear stored credentials
  whoami     Show the currently logged-in user
  recommend  Answer a short health questionnaire and get a medicinal diet
  init-db    Create the database tables

Usage
-----
  python run_cli.py login
  python run_cli.py recommend
"""

from __future__ import annotations

import asyncio
import json
import sys
import time
from pathlib import Path
from typing import Optional

# ── Ensure src/ is on the path ──
_SRC = Path(__file__).resolve().parent.parent.parent
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from adapters.cli.session import Session, clear_session, load_session, save_session
from application.context import RequestContext
from application.dto import LoginRequest, RegisterRequest, RecommendationResult
from domain.entities import HealthProfile
from domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DomainError,
    DuplicateLoginError,
    IncompleteRecipeError,
)
from factory import ServiceFactory
from infrastructure.config import Settings
from infrastructure.persistence.migrations import run_migrations

__version__ = "0.1.0"

console = Console()
app = typer.Typer(
    help="Medicinal Diet Assistant CLI",
    add_completion=False,
    no_args_is_help=True,
)

_LEVEL_CODES = {"low": -1, "normal": 0, "high": 1}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _require_session() -> Session:
    """Return the stored session or exit with a user-friendly error."""
    session = load_session()
    if session is None:
        console.print(
            "[bold red]Not logged in.[/bold red] "
            "Run [bold]login[/bold] (or [bold]register[/bold]) first."
        )
        raise typer.Exit(code=1)
    return session


async def _make_factory(*, full_init: bool) -> ServiceFactory:
    """Create a ServiceFactory at the required initialisation level.

    full_init=False  runs DB migrations only. Sufficient for auth commands
                       that never talk to the LLM.
    full_init=True   also validates the LLM settings and builds the client.
    """
    config = Settings.from_env()
    factory = ServiceFactory(config)
    if full_init:
        await factory.initialize()
    else:
        await run_migrations(factory.connection)
    return factory


def tags_to_json(text: str) -> str:
    """'insomnia, fatigue' → '["insomnia", "fatigue"]' (empty text → "")."""
    tags = [t.strip() for t in text.replace("、", ",").split(",") if t.strip()]
    return json.dumps(tags, ensure_ascii=False) if tags else ""


def parse_level(text: str) -> Optional[int]:
    """Map low/normal/high to -1/0/1; anything else (including empty) → None."""
    return _LEVEL_CODES.get(text.strip().lower())


def render_recipe(result: RecommendationResult) -> Panel:
    generated = result.generated
    lines = [f"[bold]{generated.name}[/bold]", "", "[bold]Ingredients:[/bold]"]
    lines += [f"  - {item}" for item in generated.ingredients]
    lines += ["", "[bold]Steps:[/bold]"]
    lines += [f"  {i}. {step}" for i, step in enumerate(generated.steps, start=1)]
    lines += ["", f"[bold]Why it suits you:[/bold] {generated.reason}"]
    if generated.taboo:
        lines.append(f"[bold red]Taboo:[/bold red] {generated.taboo}")
    if generated.suitable_time:
        lines.append(f"[bold]Best eaten:[/bold] {generated.suitable_time}")
    if generated.tags:
        lines.append(f"[dim]{' · '.join(generated.tags)}[/dim]")
    return Panel(
        "\n".join(lines),
        title=f"Recommended medicinal diet (#{result.recipe.id})",
        border_style="green",
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"medicinal-diet v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands: Auth
# ---------------------------------------------------------------------------

@app.command()
def register() -> None:
    """Create a new account."""
    console.print(Panel("[bold]Create Account[/bold]", border_style="blue"))

    nickname = Prompt.ask("[bold]Nickname[/bold]  (min 3 chars)")
    password = Prompt.ask("[bold]Password[/bold]  (min 6 chars)", password=True)

    async def _run() -> None:
        factory  = await _make_factory(full_init=False)
        auth_svc = factory.create_authentication_service()
        try:
            token = await auth_svc.register(RegisterRequest(
                nickname=nickname, password=password,
            ))
        except DuplicateLoginError:
            console.print(
                f"[bold red]Nickname '{nickname}' is already taken.[/bold red]"
            )
            raise typer.Exit(code=1)

        save_session(Session(
            user_id=token.user_id,
            access_token=token.access_token,
            nickname=nickname,
        ))
        console.print(Panel(
            f"[bold green]Account created and logged in![/bold green]\n"
            f"Welcome, [bold]{nickname}[/bold] (user_id={token.user_id}).\n"
            "Run [bold]recommend[/bold] to get started.",
            border_style="green",
        ))

    asyncio.run(_run())


@app.command()
def login() -> None:
    """Sign in to your account."""
    nickname = Prompt.ask("[bold]Nickname[/bold]")
    password = Prompt.ask("[bold]Password[/bold]", password=True)

    async def _run() -> None:
        factory  = await _make_factory(full_init=False)
        auth_svc = factory.create_authentication_service()
        try:
            token = await auth_svc.login(LoginRequest(
                nickname=nickname, password=password,
            ))
        except AuthenticationError:
            console.print(
                "[bold red]Login failed.[/bold red] "
                "Check your nickname and password."
            )
            raise typer.Exit(code=1)

        save_session(Session(
            user_id=token.user_id,
            access_token=token.access_token,
            nickname=nickname,
        ))
        console.print(Panel(
            f"[bold green]Logged in![/bold green] "
            f"Welcome back, [bold]{nickname}[/bold].",
            border_style="green",
        ))

    asyncio.run(_run())


@app.command()
def logout() -> None:
    """Sign out and clear stored credentials."""
    session = load_session()
    if session is None:
        console.print("[dim]Not currently logged in.[/dim]")
        return
    label = session.nickname or f"user #{session.user_id}"
    if Confirm.ask(f"Sign out [bold]{label}[/bold]?"):
        clear_session()
        console.print("[green]Logged out.[/green]")


@app.command()
def whoami() -> None:
    """Show the currently logged-in user."""
    session = load_session()
    if session is None:
        console.print("[dim]Not logged in.[/dim]")
        return
    console.print(
        f"Logged in as [bold]{session.nickname or '?'}[/bold] "
        f"(user_id={session.user_id})"
    )


# ---------------------------------------------------------------------------
# Commands: Recommendation (requires login + LLM settings)
# ---------------------------------------------------------------------------

@app.command()
def recommend() -> None:
    """Answer a few health questions and get one medicinal diet recipe."""
    session = _require_session()

    console.print(Panel(
        "[bold]Medicinal Diet Assistant[/bold]\n"
        "Answer the questions below and a suitable medicinal diet will be recommended.",
        border_style="cyan",
    ))
    symptoms  = Prompt.ask("[bold]1. Main symptoms[/bold] (comma-separated, e.g. insomnia, fatigue)")
    gender    = Prompt.ask("[bold]2. Gender[/bold]", choices=["male", "female"])
    age_str   = Prompt.ask("[bold]3. Age[/bold] (optional, press Enter to skip)", default="")
    pressure  = Prompt.ask("[bold]4. Blood pressure[/bold] (low/normal/high, optional)", default="")
    sugar     = Prompt.ask("[bold]5. Blood sugar[/bold] (low/normal/high, optional)", default="")
    diseases  = Prompt.ask("[bold]6. Disease history[/bold] (comma-separated, optional)", default="")

    profile = HealthProfile(
        user_id=session.user_id,
        age=int(age_str) if age_str.strip().isdigit() else 0,
        gender=1 if gender == "male" else 0,
        blood_pressure=parse_level(pressure),
        blood_sugar=parse_level(sugar),
        symptoms=tags_to_json(symptoms),
        diseases=tags_to_json(diseases),
    )

    async def _run() -> None:
        try:
            factory = await _make_factory(full_init=True)
        except ConfigurationError as exc:
            console.print(f"[bold red]Configuration error:[/bold red] {exc}")
            raise typer.Exit(code=1)

        service = factory.create_recommendation_service()
        ctx = RequestContext(user_id=session.user_id)

        started = time.monotonic()
        try:
            with console.status("[bold cyan]Finding a suitable medicinal diet…", spinner="dots"):
                result = await service.recommend_and_save(ctx, profile)
        except IncompleteRecipeError as exc:
            console.print(
                f"[bold red]The AI reply was incomplete[/bold red] (field: {exc.field})."
            )
            raise typer.Exit(code=1)
        except DomainError as exc:
            console.print(f"[bold red]Recommendation failed:[/bold red] {exc}")
            raise typer.Exit(code=1)
        elapsed = time.monotonic() - started

        console.print(f"[dim]Recommended in {elapsed:.1f}s[/dim]\n")
        console.print(render_recipe(result))

        t = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
        t.add_column("Field", style="bold")
        t.add_column("Value")
        t.add_row("Saved recipe id", str(result.recipe.id))
        t.add_row("Saved profile id", str(result.profile.id))
        console.print(t)

    asyncio.run(_run())


# ---------------------------------------------------------------------------
# Commands: Init (admin / first-time setup, no login required)
# ---------------------------------------------------------------------------

@app.command("init-db")
def init_db() -> None:
    """Create the database tables (safe to run repeatedly)."""
    async def _run() -> None:
        factory = await _make_factory(full_init=False)
        console.print(
            f"[bold green]Database ready[/bold green] at {factory.connection.db_path}"
        )

    asyncio.run(_run())


# ---------------------------------------------------------------------------
# Global version option
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Medicinal Diet Assistant CLI"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
