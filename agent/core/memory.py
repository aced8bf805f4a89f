from __future__ import annotations

"""Server-side conversation memory.

Histories live in process memory only, keyed by the caller's user id. They
grow without limit until reset or restart.
"""

import logging
from typing import Dict, List, Literal

from pydantic import BaseModel


logger = logging.getLogger(__name__)


class ConversationEntry(BaseModel):
    role: Literal["user", "ai"]
    content: str


class ConversationStore:
    def __init__(self, name: str) -> None:
        self.name = name
        self._histories: Dict[str, List[ConversationEntry]] = {}

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._histories

    def __len__(self) -> int:
        return len(self._histories)

    def history(self, user_id: str) -> List[ConversationEntry]:
        return list(self._histories.get(user_id, []))

    def append_exchange(self, user_id: str, user_message: str, ai_message: str) -> None:
        entries = self._histories.setdefault(user_id, [])
        entries.append(ConversationEntry(role="user", content=user_message))
        entries.append(ConversationEntry(role="ai", content=ai_message))

    def reset(self, user_id: str) -> bool:
        """Drop one user's history. Returns False if the user is unknown."""
        if user_id not in self._histories:
            return False
        del self._histories[user_id]
        logger.info("Reset %s history for user_id=%s", self.name, user_id)
        return True

    def reset_all(self) -> int:
        cleared = len(self._histories)
        self._histories.clear()
        logger.info("Reset %s history for all users (%s cleared)", self.name, cleared)
        return cleared

    def clear(self) -> None:
        self._histories.clear()


roleplay_store = ConversationStore("roleplay")
therapist_store = ConversationStore("therapist")
