"""Main entry point for the song-presenter CLI.

Provides a Typer-based CLI for previewing presentation decks built from
song, template and session files.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from song_presenter import __version__
from song_presenter.config import PresenterConfig, ensure_config_exists, get_config_path
from song_presenter.loaders import (
    build_session_csv,
    load_session,
    load_song,
    load_song_library,
    load_template,
)
from song_presenter.logging_config import setup_logging
from song_presenter.models import Slide, Template
from song_presenter.pitch import format_pitch
from song_presenter.presentation import build_deck, build_session_deck

console = Console()

app = typer.Typer(
    name="song-presenter",
    help="Preview presentation decks for songs and sessions",
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"song-presenter version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """song-presenter: slide decks for live group singing.

    ## Commands

    * [bold cyan]deck[/bold cyan] - Preview the deck for one song
    * [bold cyan]session[/bold cyan] - Preview the deck for a whole session
    * [bold cyan]config[/bold cyan] - Show or change configuration

    ## Getting Started

    [dim]$ song-presenter deck song.json --template template.json[/dim]
    """
    pass


def _load_config(config_path: Optional[Path]) -> PresenterConfig:
    """Load configuration and start the session log.

    Exits with status 1 when the configuration can't be loaded.
    """
    try:
        if config_path:
            config = PresenterConfig.load(config_path)
        else:
            config = ensure_config_exists()
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)

    logger = setup_logging(config.log.log_dir, config.log.level)
    logger.info(f"Configuration loaded from: {config_path or get_config_path()}")
    return config


def _load_optional_template(template_path: Optional[Path]) -> Optional[Template]:
    if template_path is None:
        return None
    try:
        return load_template(template_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading template: {e}[/red]")
        raise typer.Exit(1)


def _first_line(text: str, width: int = 40) -> str:
    line = next((line for line in text.split("\n") if line.strip()), "")
    return line if len(line) <= width else line[: width - 1] + "…"


def _coming_up(slide: Slide) -> str:
    if slide.next_song_name is None:
        return ""
    if slide.next_is_continuation:
        return "[dim]continues[/dim]"

    hint = slide.next_song_name
    details = [part for part in (slide.next_singer_name, format_pitch(slide.next_pitch)) if part]
    if details:
        hint += f" ({', '.join(details)})"
    return hint


def _print_deck(slides: List[Slide], title: str, as_json: bool) -> None:
    """Print a deck as a Rich table or as JSON records."""
    if as_json:
        console.print_json(json.dumps([slide.to_dict() for slide in slides], ensure_ascii=False, default=str))
        return

    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Type")
    table.add_column("Song", style="cyan")
    table.add_column("Slide", justify="center")
    table.add_column("Singer")
    table.add_column("Pitch")
    table.add_column("Content")
    table.add_column("Coming up", style="green")

    for slide in slides:
        song_label = slide.song_name
        if slide.session_song_index is not None and not slide.is_static:
            song_label = f"{slide.session_song_index}/{slide.total_songs} {slide.song_name}"
        table.add_row(
            str(slide.index),
            "[yellow]static[/yellow]" if slide.is_static else "song",
            song_label,
            slide.position_label,
            slide.singer_name or "",
            format_pitch(slide.pitch),
            _first_line(slide.content),
            _coming_up(slide),
        )

    console.print(table)
    console.print(f"[dim]{len(slides)} slide(s)[/dim]")


@app.command("deck")
def deck_command(
    song_path: Path = typer.Argument(..., help="Song JSON file"),
    template_path: Optional[Path] = typer.Option(
        None,
        "--template",
        "-t",
        help="Template JSON file",
    ),
    singer: Optional[str] = typer.Option(None, "--singer", "-s", help="Singer name"),
    pitch: Optional[str] = typer.Option(None, "--pitch", "-p", help="Pitch, e.g. 'G# minor'"),
    as_json: bool = typer.Option(False, "--json", help="Print slides as JSON"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Preview the deck for a single song."""
    config = _load_config(config_path)

    try:
        song = load_song(song_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading song: {e}[/red]")
        raise typer.Exit(1)

    template = _load_optional_template(template_path)
    slides = build_deck(song, template, singer_name=singer, pitch=pitch, config=config.deck)
    _print_deck(slides, song.name, as_json)


@app.command("session")
def session_command(
    session_path: Path = typer.Argument(..., help="Session JSON or CSV file"),
    songs_dir: Optional[Path] = typer.Option(
        None,
        "--songs-dir",
        "-d",
        help="Folder of song JSON files that session rows refer to",
    ),
    template_path: Optional[Path] = typer.Option(
        None,
        "--template",
        "-t",
        help="Template JSON file",
    ),
    export_csv: Optional[Path] = typer.Option(
        None,
        "--export-csv",
        help="Also write the session as a CSV backup",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print slides as JSON"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Preview the deck for a whole session."""
    config = _load_config(config_path)

    try:
        library = load_song_library(songs_dir) if songs_dir else None
        entries = load_session(session_path, library)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading session: {e}[/red]")
        raise typer.Exit(1)

    if not entries:
        console.print("[yellow]Session has no songs[/yellow]")
        raise typer.Exit(0)

    template = _load_optional_template(template_path)
    slides = build_session_deck(entries, template, config=config.deck)
    _print_deck(slides, session_path.stem, as_json)

    if export_csv:
        export_csv.parent.mkdir(parents=True, exist_ok=True)
        export_csv.write_text(build_session_csv(entries), encoding="utf-8")
        if not as_json:
            console.print(f"[green]Session saved to {export_csv}[/green]")


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action to perform (show, set, path)",
    ),
    key: str = typer.Argument(
        None,
        help="Configuration key (for set action)",
    ),
    value: str = typer.Argument(
        None,
        help="Configuration value (for set action)",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Manage configuration.

    Examples:
        song-presenter config show
        song-presenter config set deck.prepend_title true
        song-presenter config path
    """
    path = config_path or get_config_path()

    if action == "show":
        try:
            cfg = ensure_config_exists(path)
        except OSError as e:
            console.print(f"[red]Error loading config: {e}[/red]")
            raise typer.Exit(1)

        panel = Panel.fit(
            f"[cyan]Max lines per slide:[/cyan] {cfg.deck.max_lines_per_slide}\n"
            f"[cyan]Max translation lines:[/cyan] {cfg.deck.max_translation_lines}\n"
            f"[cyan]Prepend title:[/cyan] {cfg.deck.prepend_title}\n"
            f"[cyan]Skip static slides:[/cyan] {cfg.deck.skip_static_slides}\n"
            f"[cyan]Log directory:[/cyan] {cfg.log.log_dir}\n"
            f"[cyan]Log level:[/cyan] {cfg.log.level}",
            title="Configuration",
            border_style="green",
        )
        console.print(panel)

    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage: song-presenter config set <key> <value>[/red]")
            raise typer.Exit(1)

        try:
            cfg = ensure_config_exists(path)
            cfg.set(key, value)
            cfg.save(path)
            console.print(f"[green]Set {key} = {cfg.get(key)}[/green]")
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    elif action == "path":
        console.print(str(path))

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Valid actions: show, set, path")
        raise typer.Exit(1)


def cli_entry() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli_entry()
