"""
Conversation context for follow-up questions.

Reads the caller-owned history only; nothing is stored between calls.
There is no entity memory: a follow-up is resolved by concatenating it
with the most recent user turn.
"""

from typing import Optional, Sequence

from domain.models import ConversationTurn, Role


class ConversationContext:
    """Read-only view over the prior turns of a conversation."""

    def __init__(self, history: Sequence[ConversationTurn]):
        self._history = tuple(history)

    def __len__(self) -> int:
        return len(self._history)

    @property
    def has_history(self) -> bool:
        return bool(self._history)

    def last_user_turn(self) -> Optional[ConversationTurn]:
        """Most recent turn authored by the user, if any."""
        for turn in reversed(self._history):
            if turn.role == Role.USER:
                return turn
        return None

    def resolve_follow_up(self, query: str) -> str:
        """Combine *query* with the last user question.

        Returns *query* unchanged when no user turn exists.
        """
        previous = self.last_user_turn()
        if previous is None:
            return query
        return f"{previous.content} {query}"
