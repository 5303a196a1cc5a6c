"""Markdown logger for game transcripts."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from .events import GameEvent, Visibility


class MarkdownLogger:
    """Writes a finished game's events to a markdown file."""

    def __init__(self, base_dir: str = "games"):
        """Initialize the logger.

        Args:
            base_dir: Base directory for game logs.
        """
        self.base_dir = Path(base_dir)
        self.game_dir: Optional[Path] = None
        self.game_id: Optional[str] = None

    def start_game(self, game_id: Optional[str] = None) -> Path:
        """Start logging a new game.

        Args:
            game_id: Optional game identifier. If not provided, uses timestamp.

        Returns:
            Path to the game directory.
        """
        if game_id is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
            game_id = f"game_{timestamp}"

        self.game_id = game_id
        self.game_dir = self.base_dir / game_id
        self.game_dir.mkdir(parents=True, exist_ok=True)

        self._write_game_header()

        return self.game_dir

    @property
    def game_file(self) -> Path:
        return self.game_dir / "game_state.md"

    def _write_game_header(self) -> None:
        """Write the initial game state file header."""
        with open(self.game_file, "w") as f:
            f.write(f"# Impostor Game - {self.game_id}\n\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
            f.write("---\n\n")

    def log_setup(self, players: list[str], category: str) -> None:
        """Log the roster and category.

        Args:
            players: Player names in seating order.
            category: The resolved category.
        """
        with open(self.game_file, "a") as f:
            f.write("## Players\n\n")
            f.write("| Seat | Player |\n")
            f.write("|------|--------|\n")
            for i, name in enumerate(players, start=1):
                f.write(f"| {i} | {name} |\n")
            f.write(f"\n**Category:** {category}\n\n---\n\n")

    def log_events(self, events: list[GameEvent], include_private: bool = False) -> None:
        """Log events grouped under a heading per phase.

        Args:
            events: Events in the order they happened.
            include_private: Whether to include events that give away secrets.
        """
        with open(self.game_file, "a") as f:
            current_phase = None
            for event in events:
                if event.visibility == Visibility.PRIVATE and not include_private:
                    continue
                if event.phase != current_phase:
                    f.write(f"## {event.phase.replace('_', ' ').title()}\n\n")
                    current_phase = event.phase

                if event.visibility == Visibility.PRIVATE:
                    f.write(f"- *(secret)* {event.content}\n")
                elif event.player:
                    f.write(f"- **{event.player}**: {event.content}\n")
                else:
                    f.write(f"- {event.content}\n")
            f.write("\n")

    def log_game_end(
        self,
        winner: str,
        impostor: str,
        accused: str,
        secret_word: str,
        decoy_hint: str,
    ) -> None:
        """Log the game ending.

        Args:
            winner: Winning side ("crew" or "impostor").
            impostor: Name of the impostor.
            accused: Name of the accused player.
            secret_word: The crew's word.
            decoy_hint: The impostor's hint.
        """
        with open(self.game_file, "a") as f:
            f.write("---\n\n")
            f.write("# GAME OVER\n\n")
            f.write(f"## Winner: {winner.upper()}\n\n")
            f.write("| Accused | Impostor | Secret Word | Decoy Hint |\n")
            f.write("|---------|----------|-------------|------------|\n")
            f.write(f"| {accused} | {impostor} | {secret_word} | {decoy_hint} |\n")
            f.write(f"\n\nEnded: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
