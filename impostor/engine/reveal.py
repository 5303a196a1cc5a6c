"""Walks each player through seeing their own role."""

from .roles import ImpostorRole, InnocentRole, RoleCard
from .words import WordPair


class RevealSequencer:
    """Tracks whose turn it is to look at the device.

    Whether the card is currently shown or hidden is up to the UI; the
    sequencer only knows which player is up.
    """

    def __init__(
        self,
        player_count: int,
        impostor_index: int,
        word_pair: WordPair,
        category: str,
    ):
        self.player_count = player_count
        self._impostor_index = impostor_index
        self._word_pair = word_pair
        self._category = category
        self.cursor = 0

    def role_for(self, player_index: int) -> RoleCard:
        """Get the role card a player should see. Safe to call repeatedly."""
        if not 0 <= player_index < self.player_count:
            raise IndexError(f"No player at index {player_index}")
        if player_index == self._impostor_index:
            return ImpostorRole(decoy_hint=self._word_pair.decoy_hint)
        return InnocentRole(
            secret_word=self._word_pair.secret_word,
            category=self._category,
        )

    def current_role(self) -> RoleCard:
        return self.role_for(self.cursor)

    def advance(self) -> bool:
        """Move on to the next player.

        Returns:
            True if another player still has to look, False once everyone has.
        """
        if self.cursor < self.player_count - 1:
            self.cursor += 1
            return True
        return False
