from __future__ import annotations

import threading
import uuid
from typing import Dict, List, Optional

from ...engine.game import Game


class InMemorySessionStore:
    """Thread-safe in-memory store of Lines of Action games keyed by `game_id`.

    Games live only as long as the process; nothing is persisted.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Register `game` (a new standard game by default) and return its id."""
        gid = uuid.uuid4().hex
        with self._lock:
            self._games[gid] = game if game is not None else Game.new()
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def set(self, game_id: str, game: Game) -> None:
        """Replace an existing game; raises KeyError for unknown ids."""
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._games)

    def delete(self, game_id: str) -> None:
        with self._lock:
            self._games.pop(game_id, None)
