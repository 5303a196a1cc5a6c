"""Game event records and transcripts."""

from .events import EventLog, GameEvent, Visibility
from .markdown_logger import MarkdownLogger

__all__ = ["EventLog", "GameEvent", "Visibility", "MarkdownLogger"]
