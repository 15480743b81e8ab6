"""WebSocket connection management and state serialization."""

import json
import logging
from dataclasses import asdict

from fastapi import WebSocket

from .constants import GRID_ROWS, GRID_COLS
from .game import SnakeGame
from .models import Snapshot

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks one game per open socket so every ticker dies with its socket."""

    def __init__(self):
        self.connections: dict[WebSocket, SnakeGame] = {}

    async def connect(self, ws: WebSocket, game: SnakeGame):
        await ws.accept()
        self.connections[ws] = game

    def disconnect(self, ws: WebSocket):
        game = self.connections.pop(ws, None)
        if game is not None:
            game.return_to_menu()

    def shutdown(self):
        for ws in list(self.connections):
            self.disconnect(ws)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def build_state_msg(snapshot: Snapshot) -> str:
    return json.dumps({"type": "state", **asdict(snapshot)})


def build_level_start_msg(snapshot: Snapshot, tick_ms: int) -> str:
    return json.dumps({
        "type": "level_start",
        "level": snapshot.level,
        "theme": snapshot.theme,
        "grid": [GRID_ROWS, GRID_COLS],
        "tick_ms": tick_ms,
    })


def build_game_over_msg(snapshot: Snapshot) -> str:
    return json.dumps({
        "type": "game_over",
        "score": snapshot.score,
        "high_score": snapshot.high_score,
        "new_high_score": snapshot.new_high_score,
    })


def build_error_msg(message: str) -> str:
    return json.dumps({"type": "error", "message": message})
