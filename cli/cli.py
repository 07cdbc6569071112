"""Developer CLI for the ATHLO coaching core.

Runs the metrics engine, the context assembler and the configured coaching
provider locally against the sample athlete. Without an API key every
provider command shows the degraded output.
"""

import asyncio
import json
from dataclasses import replace
from datetime import date

import typer
from loguru import logger
from rich.console import Console
from rich.live import Live
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from athlo.coach.context_builder import ContextAssembler
from athlo.coach.errors import ConfigurationError
from athlo.coach.providers import get_coach_provider
from athlo.coach.sample import create_sample_snapshot
from athlo.config.settings import settings
from athlo.core.logger import setup_logger
from athlo.metrics import acwr_band, acwr_recommendation, calculate_acwr, readiness_components
from athlo.schemas import (
    DEFAULT_CONTEXT_WINDOW,
    MINIMAL_CONTEXT_WINDOW,
    SHORT_CONTEXT_WINDOW,
    ContextWindow,
    ConversationMessage,
    WorkoutGenerationParams,
)

console = Console()

app = typer.Typer(
    name="athlo",
    help="ATHLO coaching CLI - metrics, context assembly and coach chat",
    add_completion=False,
)

WINDOW_PRESETS: dict[str, ContextWindow] = {
    "default": DEFAULT_CONTEXT_WINDOW,
    "short": SHORT_CONTEXT_WINDOW,
    "minimal": MINIMAL_CONTEXT_WINDOW,
}


def _setup_logging(debug: bool = False) -> None:
    setup_logger(level="DEBUG" if debug else None)


def _window(preset: str) -> ContextWindow:
    window = WINDOW_PRESETS.get(preset.lower())
    if window is None:
        console.print(f"[red]Error:[/red] Unknown window preset '{preset}'. Choose from: {', '.join(WINDOW_PRESETS)}")
        raise typer.Exit(1)
    return window


def _sample_assembler() -> ContextAssembler:
    today = date.today()
    return ContextAssembler(create_sample_snapshot(today), today=today)


@app.command()
def readiness(
    hrv: float = typer.Option(..., "--hrv", help="Morning HRV (ms)"),
    baseline: float = typer.Option(..., "--baseline", help="HRV baseline (ms)"),
    sleep: float = typer.Option(..., "--sleep", help="Sleep quality, 1-5"),
    stress: float = typer.Option(..., "--stress", help="Perceived stress, 1-10"),
    mood: float = typer.Option(..., "--mood", help="Mood, 1-5"),
    doms: list[float] = typer.Option([], "--doms", help="Soreness per body region, 1-10 (repeatable)"),
) -> None:
    """Compute the 0-100 readiness score and its components."""
    try:
        components = readiness_components(hrv, baseline, sleep, stress, mood, doms)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    table = Table(title="Readiness")
    table.add_column("Component")
    table.add_column("Score", justify="right")
    for name in ("hrv_score", "sleep_score", "stress_score", "mood_score", "doms_score"):
        table.add_row(name.removesuffix("_score").upper(), f"{components[name]:.1f}")
    table.add_row("[bold]Readiness[/bold]", f"[bold]{components['readiness']}[/bold]")
    console.print(table)


@app.command()
def acwr(
    acute: float = typer.Option(..., "--acute", help="Acute (7-day) load"),
    chronic: float = typer.Option(..., "--chronic", help="Chronic (28-day) load"),
) -> None:
    """Classify an acute:chronic workload ratio."""
    try:
        ratio = calculate_acwr(acute, chronic)
        band = acwr_band(ratio)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    advice = acwr_recommendation(ratio)
    console.print(
        Panel(
            f"ACWR: [bold]{ratio:.2f}[/bold] ({band.label})\n{advice.message}\nAction: {advice.action}",
            title=f"Load ratio: {band.risk.value}",
            border_style="cyan",
        )
    )


@app.command()
def context(
    window: str = typer.Option("default", "--window", "-w", help="Window preset: default, short, minimal"),
    days: int | None = typer.Option(None, "--days", help="Override the window's lookback days"),
    max_tokens: int | None = typer.Option(None, "--max-tokens", help="Degrade the context to fit this budget"),
) -> None:
    """Print the assembled context for the sample athlete."""
    selected = _window(window)
    try:
        if days is not None:
            selected = replace(selected, days=days)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    assembler = _sample_assembler()
    if max_tokens is None:
        text = assembler.build_context(selected)
    else:
        text = assembler.optimize_for_token_limit(max_tokens, selected)

    console.print(Panel(Text(text) if text else Text("(empty)", style="dim"), title="Athlete context", border_style="green"))
    console.print(f"[dim]~{assembler.estimate_tokens(selected)} tokens before budgeting[/dim]")


@app.command()
def summary(
    window: str = typer.Option("default", "--window", "-w", help="Window preset: default, short, minimal"),
) -> None:
    """Print the one-line summary for the sample athlete."""
    console.print(_sample_assembler().build_summary(_window(window)), markup=False)


async def _stream_chat(message: str, max_tokens: int) -> None:
    provider = get_coach_provider()
    context_text = _sample_assembler().optimize_for_token_limit(max_tokens)
    messages = [ConversationMessage(role="user", content=message)]

    final = None
    with Live(console=console, refresh_per_second=8) as live:
        async for chunk in provider.chat_stream(messages, context=context_text):
            live.update(Markdown(chunk.content))
            final = chunk

    if final is not None and final.suggestions:
        console.print("\n[yellow]Suggestions:[/yellow]")
        for suggestion in final.suggestions:
            console.print(f"  - {escape(suggestion)}")


@app.command()
def chat(
    message: str = typer.Argument(..., help="Message to send to the coach"),
    max_tokens: int = typer.Option(settings.context_max_tokens, "--max-tokens", help="Context token budget"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Ask the coach a question, streaming the reply."""
    _setup_logging(debug)
    try:
        asyncio.run(_stream_chat(message, max_tokens))
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e


@app.command()
def workout(
    sport: str = typer.Option("running", "--sport", help="Sport"),
    workout_type: str = typer.Option("endurance", "--type", help="endurance, interval, tempo, recovery, strength, race"),
    duration: int = typer.Option(60, "--duration", help="Duration in minutes"),
    intensity: str = typer.Option("moderate", "--intensity", help="easy, moderate, hard, recovery"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate a structured workout and print it as JSON."""
    _setup_logging(debug)
    try:
        params = WorkoutGenerationParams(sport=sport, type=workout_type, duration_min=duration, intensity=intensity)
        provider = get_coach_provider()
    except (ValueError, ConfigurationError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    context_text = _sample_assembler().build_context(SHORT_CONTEXT_WINDOW)
    result = asyncio.run(provider.generate_workout(params, context=context_text))
    logger.debug(f"Generated workout '{result.name}' ({result.duration_min} min)")
    console.print_json(json.dumps(result.model_dump(mode="json")))


if __name__ == "__main__":
    app()
