"""Announcement channels between the engine and whoever is watching it."""

from dataclasses import dataclass, field
from typing import Optional
from enum import Enum


class Visibility(Enum):
    """Message visibility levels."""
    PUBLIC = "public"  # Every player sees it
    PRIVATE = "private"  # Only the human sees it (their hand, their prompts)
    DEBUG = "debug"  # Hidden information, shown only in debug mode


@dataclass
class Message:
    """A message in a channel."""
    speaker: str
    content: str
    phase: str
    visibility: Visibility


@dataclass
class Channel:
    """An ordered log of messages of one visibility."""

    name: str
    visibility: Visibility = Visibility.PUBLIC
    messages: list[Message] = field(default_factory=list)

    def add_message(self, speaker: str, content: str, phase: str) -> Message:
        """Add a message to the channel."""
        msg = Message(
            speaker=speaker,
            content=content,
            phase=phase,
            visibility=self.visibility,
        )
        self.messages.append(msg)
        return msg

    def get_messages(self, phase: Optional[str] = None) -> list[Message]:
        """Get messages, optionally filtered by phase."""
        if phase is None:
            return self.messages
        return [m for m in self.messages if m.phase == phase]


class ChannelManager:
    """Manages all communication channels for a game.

    Messages are also queued in posting order so the command loop can print
    everything that happened since its last command.
    """

    def __init__(self):
        self.public = Channel(name="public", visibility=Visibility.PUBLIC)
        self.private = Channel(name="private", visibility=Visibility.PRIVATE)
        self.debug = Channel(name="debug", visibility=Visibility.DEBUG)
        self._pending: list[Message] = []

    def announce(self, content: str, phase: str, speaker: str = "SYSTEM") -> None:
        """Tell every player something."""
        self._pending.append(self.public.add_message(speaker, content, phase))

    def tell_human(self, content: str, phase: str) -> None:
        """Tell only the human player something."""
        self._pending.append(self.private.add_message("SYSTEM", content, phase))

    def reveal(self, content: str, phase: str) -> None:
        """Record hidden information, visible only in debug mode."""
        self._pending.append(self.debug.add_message("DEBUG", content, phase))

    def drain(self, include_debug: bool = False) -> list[Message]:
        """Return and forget the messages posted since the last drain."""
        pending, self._pending = self._pending, []
        if include_debug:
            return pending
        return [m for m in pending if m.visibility != Visibility.DEBUG]
