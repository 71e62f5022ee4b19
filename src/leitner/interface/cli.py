"""Leitner CLI — root commands and subgroup registration."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Annotated, Any, Literal

import typer

from leitner.application.config import resolve_config
from leitner.domain.models import AnswerDifficulty

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="leitner: Leitner-system flashcard scheduler.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

config_app = typer.Typer(help="Manage leitner configuration.")
app.add_typer(config_app, name="config")

deck_app = typer.Typer(help="Deck file utilities.", no_args_is_help=True)
app.add_typer(deck_app, name="deck")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for leitner."""
    if verbose >= 2:
        logging.getLogger("leitner").setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.getLogger("leitner").setLevel(logging.INFO)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: Annotated[str | None, typer.Option(help="Host to bind the server to.")] = None,
    port: Annotated[int | None, typer.Option(help="Port to bind the server to.")] = None,
    deck: Annotated[
        Path | None, typer.Option(help="YAML deck file to load into bucket 0.")
    ] = None,
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """[bold green]Serve[/bold green] the practice API."""
    import uvicorn

    config = resolve_config({"host": host, "port": port, "deck_file": deck})

    # The app is built by uvicorn in its own import; hand the deck over via env.
    if config.deck_file:
        os.environ["LEITNER_DECK_FILE"] = str(config.deck_file)

    uvicorn.run(
        "leitner.server:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=reload,
    )


@app.command()
def simulate(
    path: Annotated[Path, typer.Argument(help="YAML deck file to practice.")],
    days: Annotated[int, typer.Option(min=1, help="Number of days to simulate.")] = 10,
    difficulty: Annotated[
        Literal["wrong", "easy", "medium", "hard"],
        typer.Option(help="Grade given to every due card."),
    ] = "easy",
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Practice a deck for several days, answering every due card with one grade."""
    from leitner.application.practice_service import PracticeService
    from leitner.domain.errors import DeckFileError
    from leitner.infrastructure.deck_loader import load_deck
    from leitner.infrastructure.state import InMemoryStateRepository

    grade = AnswerDifficulty[difficulty.capitalize()]

    try:
        cards = load_deck(path)
    except DeckFileError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from None

    service = PracticeService(InMemoryStateRepository(initial_cards=cards))

    schedule: list[dict[str, Any]] = []
    for _ in range(days):
        session = service.get_practice_session()
        for card in session.cards:
            service.record_answer(card.front, card.back, grade)
        schedule.append({"day": session.day, "due": len(session.cards)})
        service.advance_day()

    progress = service.get_progress().to_dict()

    if json_output:
        typer.echo(json.dumps({"schedule": schedule, "progress": progress}, indent=2))
        return

    for entry in schedule:
        typer.echo(f"Day {entry['day']}: {entry['due']} due")
    typer.echo(
        f"Cards: {progress['totalCards']}  "
        f"Events: {progress['totalPracticeEvents']}  "
        f"Success: {progress['successRate']:.1f}%  "
        f"Moves/card: {progress['averageMovesPerCard']:.2f}"
    )
    buckets = "  ".join(f"{b}:{n}" for b, n in progress["cardsByBucket"].items())
    typer.echo(f"Buckets: {buckets}")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


# ---------------------------------------------------------------------------
# Deck subgroup
# ---------------------------------------------------------------------------


@deck_app.command("check")
def deck_check(
    path: Annotated[Path, typer.Argument(help="Path to the deck YAML file.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
):
    """Validate a deck file and report every problem found."""
    from leitner.infrastructure.deck_loader import check_deck

    result = check_deck(path)

    if json_output:
        typer.echo(
            json.dumps(
                {"ok": result.ok, "cards": len(result.cards), "errors": result.errors},
                indent=2,
            )
        )
    elif result.ok:
        typer.secho(f"OK: {len(result.cards)} cards", fg="green")
    else:
        typer.secho(f"Errors: {len(result.errors)}", fg="red")
        for error in result.errors:
            typer.echo(f"  {error}")

    if not result.ok:
        raise typer.Exit(1)
