import asyncio
import json
import logging
import os
from functools import wraps

from quart import Quart, websocket, jsonify, render_template

from game.engine import MoveResult, Outcome
from game.history import GameHistory, move_list

HOST = os.environ.get("TICTACTOE_HOST", "127.0.0.1")
PORT = int(os.environ.get("TICTACTOE_PORT", "5000"))
DEBUG = os.environ.get("TICTACTOE_DEBUG", "0") == "1"
LOG_LEVEL = os.environ.get("TICTACTOE_LOG_LEVEL", "INFO").upper()
CERTFILE = os.environ.get("TICTACTOE_CERTFILE")
KEYFILE = os.environ.get("TICTACTOE_KEYFILE")

TEMPLATE_FOLDER = os.path.join("game", "templates")

app = Quart(__name__, template_folder=TEMPLATE_FOLDER)


def resolve_log_level(name: str) -> int:
    level = logging.getLevelNamesMapping().get(name)
    if level is None:
        app.logger.warning("Unknown log level %r, using INFO", name)
        return logging.INFO
    return level


app.logger.setLevel(resolve_log_level(LOG_LEVEL))

connected = set()


class GameSession:
    def __init__(self) -> None:
        self.history = GameHistory()
        self.ascending = True

    def toggle_order(self) -> None:
        self.ascending = not self.ascending


games = {}


def collect_websocket(func):
    @wraps(func)
    async def wrapper(*args, **kwargs):
        websocket_obj = websocket._get_current_object()
        connected.add(websocket_obj)
        try:
            return await func(websocket_obj, *args, **kwargs)
        finally:
            connected.remove(websocket_obj)
    return wrapper


def get_int(message, key) -> int:
    value = message.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} needs to be an integer")
    return value


def serialize_state(session: GameSession, result: MoveResult = None) -> dict:
    history = session.history
    game_status = history.status
    winning_line = history.winning_line

    return {
        "intent": "state",
        "squares": [player.value for player in history.squares],
        "status": game_status.label,
        "winner": game_status.player.value if game_status.outcome == Outcome.WINNER else None,
        "isDraw": game_status.outcome == Outcome.DRAW,
        "nextPlayer": history.next_player.value,
        "winningLine": None if winning_line is None else list(winning_line),
        "currentMove": history.cursor,
        "ascending": session.ascending,
        "moves": [
            {
                "move": entry.move,
                "description": entry.description,
                "isCurrent": entry.is_current,
                "position": entry.position,
            }
            for entry in move_list(history, session.ascending)
        ],
        "moveResult": None if result is None else result.value,
    }


@app.route("/")
async def index():
    return await render_template("index.html")


@app.route("/health")
async def health():
    return jsonify({"intent": "success"})


async def handle_message(ctx, message):
    if not isinstance(message, dict):
        raise ValueError("Message needs to be a JSON object")

    session = games[ctx]

    match message.get("intent"):
        case "pingpong":
            await ctx.send_json({"intent": "pingpong"})

        case "get_state":
            await ctx.send_json(serialize_state(session))

        case "play":
            cell_idx = get_int(message, "cellIdx")
            player = session.history.next_player
            result = session.history.play(cell_idx)
            if result != MoveResult.INVALID:
                app.logger.debug("%s played cell %d (%s)", player.value, cell_idx, result.value)

            await ctx.send_json(serialize_state(session, result))

        case "jump":
            target = get_int(message, "move")
            session.history.jump(target)
            app.logger.debug("Jumped to move #%d", target)
            await ctx.send_json(serialize_state(session))

        case "restart":
            session.history.restart()
            app.logger.debug("Game restarted")
            await ctx.send_json(serialize_state(session))

        case "toggle_order":
            session.toggle_order()
            await ctx.send_json(serialize_state(session))

        case _:
            raise ValueError("Invalid intent")


@app.websocket("/ws")
@collect_websocket
async def ws(ctx):
    games[ctx] = GameSession()
    app.logger.info("Game session opened (%d connected)", len(connected))
    try:
        await ctx.send_json(serialize_state(games[ctx]))
        while True:
            try:
                message = await ctx.receive_json()
                await handle_message(ctx, message)
            except json.JSONDecodeError:
                app.logger.warning("Received invalid JSON")
                await ctx.send_json({"intent": "error", "description": "Invalid JSON"})
            except ValueError as e:
                app.logger.warning("Rejected message: %s", e)
                await ctx.send_json({"intent": "error", "description": str(e)})
    except asyncio.CancelledError:
        app.logger.info("Game session closed")
        raise
    finally:
        games.pop(ctx, None)


def main():
    ssl = dict(certfile=CERTFILE, keyfile=KEYFILE) if CERTFILE and KEYFILE else {}
    app.run(host=HOST, port=PORT, debug=DEBUG, **ssl)


if __name__ == "__main__":
    main()
