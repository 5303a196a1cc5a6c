"""Main entry point for Impostor."""

import argparse
import asyncio
import os
import random
import sys
import threading
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from .communication.markdown_logger import MarkdownLogger
from .engine.controller import GameController
from .engine.errors import GameError
from .engine.game import GameConfig, GameResult
from .engine.phases import GamePhase
from .engine.roles import describe_role
from .engine.timer import TickClock
from .engine.words import WordBank


# Load environment variables
load_dotenv()

console = Console()


def load_config(config_path: str = "config/game.yaml") -> dict:
    """Load game configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        console.print(f"[red]Config file not found: {config_path}[/red]")
        sys.exit(1)

    with open(path) as f:
        return yaml.safe_load(f) or {}


def build_controller(config_data: dict, seed: Optional[int] = None) -> GameController:
    """Create a controller from loaded configuration."""
    game_config = GameConfig.from_dict(config_data.get("game"))

    word_bank = None
    if game_config.word_bank_path:
        if not Path(game_config.word_bank_path).exists():
            console.print(f"[red]Word bank file not found: {game_config.word_bank_path}[/red]")
            sys.exit(1)
        word_bank = WordBank.from_yaml(game_config.word_bank_path)

    return GameController(
        config=game_config,
        word_bank=word_bank,
        rng=random.Random(seed),
        roster=config_data.get("players") or (),
    )


def display_welcome():
    """Display welcome message."""
    console.print(Panel.fit(
        "[bold cyan]IMPOSTOR[/bold cyan]\n"
        "[dim]Detective vs Deceiver[/dim]",
        border_style="cyan",
    ))
    console.print()


def run_setup(controller: GameController) -> None:
    """Collect names and a category until a game starts."""
    config = controller.config

    while controller.current_phase() == GamePhase.SETUP:
        default_names = ", ".join(controller.roster)
        raw = Prompt.ask(
            f"[bold]Players[/bold] (comma separated, "
            f"{config.min_players}-{config.max_players})",
            default=default_names or None,
            console=console,
        )
        names = (raw or "").split(",")

        category = Prompt.ask(
            "[bold]Category[/bold]",
            choices=controller.categories(),
            default=controller.category_selection,
            console=console,
        )

        try:
            controller.create_session(names, category)
        except GameError as e:
            console.print(f"[red]{e}[/red]")
            console.print(f"[dim]Minimum {config.min_players} players required.[/dim]")


def run_reveal(controller: GameController) -> None:
    """Pass the device around so every player sees their role once."""
    while controller.current_phase() == GamePhase.ASSIGNING:
        player = controller.current_revealee()
        console.clear()
        console.print(Panel.fit(
            f"Pass the device to\n[bold white]{player.name}[/bold white]",
            border_style="blue",
        ))
        console.input("[dim]Press Enter to reveal your role...[/dim]")

        card = controller.role_for_current_revealee()
        if card.is_impostor:
            console.print(Panel(
                "[bold red]YOU ARE THE IMPOSTOR[/bold red]\n\n"
                f"Your context hint: [bold]{card.decoy_hint.upper()}[/bold]\n\n"
                f"[dim]{describe_role(card)}[/dim]",
                border_style="red",
            ))
        else:
            console.print(Panel(
                f"Your secret word: [bold]{card.secret_word.upper()}[/bold]\n"
                f"Category: {card.category}\n\n"
                f"[dim]{describe_role(card)}[/dim]",
                border_style="green",
            ))

        console.input("[dim]Press Enter to hide it and pass the device on...[/dim]")
        console.clear()
        controller.advance_reveal()


async def read_line(prompt: str) -> str:
    """Read a line from the terminal without blocking the event loop.

    The read runs on a daemon thread, so an interrupted game can exit while
    the thread is still waiting on stdin.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def deliver(setter, value) -> None:
        if not future.done():
            setter(value)

    def read() -> None:
        try:
            line = console.input(prompt)
        except EOFError as e:
            if not loop.is_closed():
                loop.call_soon_threadsafe(deliver, future.set_exception, e)
            return
        if not loop.is_closed():
            loop.call_soon_threadsafe(deliver, future.set_result, line)

    threading.Thread(target=read, name="impostor-input", daemon=True).start()
    return await future


async def run_turns(controller: GameController) -> None:
    """Run timed turns until every round is done or someone calls a vote."""
    config = controller.config

    while controller.current_phase() == GamePhase.PLAYING:
        player = controller.current_turn_player()
        console.print()
        console.rule(
            f"Round {controller.current_round()} / {config.rounds_total}"
        )
        console.print(f"Current turn: [bold cyan]{player.name}[/bold cyan]")

        action = await read_line(
            "[dim]Enter to start the timer, 'v' for an emergency vote:[/dim] "
        )
        if action.strip().lower() == "v":
            controller.request_emergency_vote()
            console.print("[bold red]EMERGENCY VOTE![/bold red]")
            return

        controller.start_timer()
        clock = TickClock(
            controller.session,
            on_expire=lambda: console.print("\n[bold red]Time's up![/bold red]"),
        )
        clock.start()
        console.print(f"[yellow]{config.turn_seconds} seconds - describe the word![/yellow]")

        try:
            action = await read_line(
                "[dim]Enter to finish your turn, 'v' for an emergency vote:[/dim] "
            )
        finally:
            clock.stop()

        if action.strip().lower() == "v":
            controller.request_emergency_vote()
            console.print("[bold red]EMERGENCY VOTE![/bold red]")
            return

        remaining = controller.timer_state().remaining_seconds
        console.print(f"[dim]{player.name} finished with {remaining}s left.[/dim]")
        controller.finish_turn()


def run_vote(controller: GameController) -> GameResult:
    """Have the group accuse one player."""
    console.print()
    table = Table(title="Who is the Impostor?", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim")
    table.add_column("Player", style="cyan")
    for player in controller.vote_candidates():
        table.add_row(str(player.index + 1), player.name)
    console.print(table)

    while True:
        choice = IntPrompt.ask("[bold]Accuse player #[/bold]", console=console)
        try:
            return controller.cast_vote(choice - 1)
        except GameError as e:
            console.print(f"[red]{e}[/red]")


def display_results(result: GameResult):
    """Display game results."""
    console.print()

    if result.crew_won:
        console.print(Panel(
            "[bold green]CREW WINS![/bold green]\n"
            "You caught the Impostor.",
            border_style="green",
        ))
    else:
        console.print(Panel(
            "[bold red]IMPOSTOR WINS![/bold red]\n"
            "They escaped detection.",
            border_style="red",
        ))

    table = Table(show_header=False)
    table.add_column("", style="dim")
    table.add_column("", style="bold")
    table.add_row("Accused", result.accused_name)
    table.add_row("The Impostor was", result.impostor_name)
    table.add_row("Hint was", result.decoy_hint)
    table.add_row("The Secret Word was", result.secret_word)
    table.add_row("Category", result.category)
    console.print(table)
    console.print()


def write_log(controller: GameController, logger: MarkdownLogger) -> None:
    """Write the finished game to a markdown transcript."""
    session = controller.session
    result = session.result
    logger.start_game()
    logger.log_setup(session.player_names, session.selected_category)
    logger.log_events(session.events.get_events(), include_private=True)
    logger.log_game_end(
        winner=result.outcome.value,
        impostor=result.impostor_name,
        accused=result.accused_name,
        secret_word=result.secret_word,
        decoy_hint=result.decoy_hint,
    )
    console.print(f"[dim]Game log saved to: {logger.game_dir}[/dim]")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Impostor - a pass-and-play party game")
    parser.add_argument(
        "--config",
        default=os.getenv("IMPOSTOR_CONFIG", "config/game.yaml"),
        help="Path to the YAML config file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=int(os.environ["IMPOSTOR_SEED"]) if os.getenv("IMPOSTOR_SEED") else None,
        help="Random seed for reproducible games",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Write a markdown transcript of each game to this directory",
    )
    return parser.parse_args(argv)


async def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    args = parse_args(argv)
    display_welcome()

    console.print(f"[dim]Loading config from: {args.config}[/dim]")
    config_data = load_config(args.config)
    controller = build_controller(config_data, seed=args.seed)
    logger = MarkdownLogger(base_dir=args.log_dir) if args.log_dir else None

    while True:
        run_setup(controller)
        run_reveal(controller)
        console.print("[bold]Everyone has seen their role. Let the game begin![/bold]")
        await run_turns(controller)

        result = run_vote(controller)
        display_results(result)
        if logger:
            write_log(controller, logger)

        choice = Prompt.ask(
            "[p]lay again, [c]hange players or [q]uit",
            choices=["p", "c", "q"],
            default="p",
            console=console,
        )
        if choice == "q":
            break
        if choice == "p":
            controller.reset_keeping_roster()
        else:
            controller.reset_full()


def run():
    """Entry point for the CLI."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        console.print("\n[yellow]Game interrupted by user.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    run()
