from __future__ import annotations

from flask import Flask, jsonify, request
from functools import wraps
import logging
import sys
import threading
from pathlib import Path

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tictactoe import Game
from tictactoe.commentary import CommentaryFeed
from tictactoe.config import AppConfig


def create_app(config: AppConfig | None = None, game: Game | None = None) -> Flask:
    app = Flask(__name__)

    if game is None:
        config = config or AppConfig.from_env()
        game = Game(
            settings=config.game_settings(),
            commentary=CommentaryFeed(config.make_commentator()),
            engine_delay=config.engine_delay,
        )
    app.config["GAME"] = game
    # The dev server is threaded; one request at a time may touch the game
    lock = threading.Lock()

    def serialized(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            with lock:
                game.poll()
                return view(*args, **kwargs)

        return wrapper

    def state(**extra):
        snap = game.snapshot()
        snap.update(extra)
        return jsonify(snap)

    @app.errorhandler(ValueError)
    def bad_value(exc):
        return jsonify({"error": str(exc)}), 400

    @app.get("/api/state")
    @serialized
    def api_state():
        return state()

    @app.post("/api/move")
    @serialized
    def api_move():
        payload = request.get_json(silent=True) or {}
        cell = payload.get("cell")
        if cell is None:
            return jsonify({"error": "Missing cell"}), 400
        if isinstance(cell, bool) or not isinstance(cell, int):
            return jsonify({"error": f"Cell must be an integer, got {cell!r}"}), 400
        accepted = game.request_move(cell)
        return state(accepted=accepted)

    @app.post("/api/undo")
    @serialized
    def api_undo():
        game.undo()
        return state()

    @app.post("/api/redo")
    @serialized
    def api_redo():
        game.redo()
        return state()

    @app.post("/api/reset")
    @serialized
    def api_reset():
        game.reset_game()
        return state()

    @app.post("/api/scores/reset")
    @serialized
    def api_reset_scores():
        game.reset_scores()
        return state()

    @app.post("/api/settings")
    @serialized
    def api_settings():
        data = request.get_json(silent=True) or {}
        names = data.get("names")
        if names is not None and not isinstance(names, dict):
            return jsonify({"error": "names must be an object"}), 400
        reset = game.update_settings(
            mode=data.get("mode"),
            strength=data.get("strength"),
            names=names,
        )
        return state(reset=reset)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app().run(host="0.0.0.0", port=5000, debug=True)
