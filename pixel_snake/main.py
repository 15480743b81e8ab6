"""FastAPI application: HTTP routes, WebSocket endpoint, per-socket game."""

import json
import logging
import os
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .constants import DIRECTIONS
from .connection_manager import (
    ConnectionManager, build_state_msg, build_level_start_msg,
    build_game_over_msg, build_error_msg,
)
from .game import SnakeGame, new_high_scores
from .levels import InvalidLevelError, get_level, levels_to_list
from .ticker import AsyncioTicker

logger = logging.getLogger(__name__)

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
HTML_PATH = os.path.join(ROOT_DIR, "index.html")
static_dir = os.path.join(ROOT_DIR, "static")

manager = ConnectionManager()
# best score per level, shared by every connection until the process exits
high_scores = new_high_scores()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    manager.shutdown()


app = FastAPI(lifespan=lifespan)
app.mount("/static", StaticFiles(directory=static_dir), name="static")


@app.get("/")
async def serve_index():
    return FileResponse(HTML_PATH, media_type="text/html")


@app.get("/levels")
async def list_levels():
    return levels_to_list()


async def push_state(ws: WebSocket, game: SnakeGame):
    snapshot = game.snapshot()
    if snapshot is None:
        return
    await manager.send_personal(ws, build_state_msg(snapshot))
    if snapshot.game_over:
        await manager.send_personal(ws, build_game_over_msg(snapshot))


async def send_level_start(ws: WebSocket, game: SnakeGame):
    snapshot = game.snapshot()
    await manager.send_personal(ws, build_level_start_msg(snapshot, get_level(snapshot.level).tick_ms))
    await manager.send_personal(ws, build_state_msg(snapshot))


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    game = SnakeGame(high_scores=high_scores)
    game.ticker_factory = partial(AsyncioTicker, after=partial(push_state, ws, game))
    await manager.connect(ws, game)
    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
                kind = msg["type"]
            except (ValueError, TypeError, KeyError):
                logger.warning("malformed message: %.80s", raw)
                await manager.send_personal(ws, build_error_msg("malformed message"))
                continue

            if kind == "start":
                try:
                    game.start_level(msg.get("level"))
                except InvalidLevelError as exc:
                    logger.warning("%s", exc)
                    await manager.send_personal(ws, build_error_msg(str(exc)))
                    continue
                await send_level_start(ws, game)
            elif kind == "restart":
                if game.restart() is not None:
                    await send_level_start(ws, game)
            elif kind == "input":
                d = msg.get("direction")
                if isinstance(d, str) and d in DIRECTIONS:
                    game.change_direction(d)
                else:
                    logger.warning("bad direction: %.80r", d)
                    await manager.send_personal(ws, build_error_msg("unknown direction"))
            elif kind == "pause":
                game.toggle_pause()
                await push_state(ws, game)
            elif kind == "menu":
                game.return_to_menu()
                await manager.send_personal(ws, json.dumps({"type": "menu"}))
            else:
                logger.debug("unknown message type %r", kind)
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)


def run():
    import uvicorn

    host = os.environ.get("PIXEL_SNAKE_HOST", "0.0.0.0")
    port = int(os.environ.get("PIXEL_SNAKE_PORT", "8765"))
    log_level = os.environ.get("PIXEL_SNAKE_LOG_LEVEL", "info").lower()
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Snake server starting on http://localhost:%d", port)
    uvicorn.run(app, host=host, port=port, log_level=log_level)


if __name__ == "__main__":
    run()
