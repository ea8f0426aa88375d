from __future__ import annotations

import os
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    GameEngine,
    GameAlreadyComplete,
    MemoryGameError,
    TurnOrderError,
    TurnOutcome,
    make_rng,
)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DEFAULT_ROWS = int(os.getenv("MEMORY_DEFAULT_ROWS", "4"))
DEFAULT_COLS = int(os.getenv("MEMORY_DEFAULT_COLS", "4"))
STRICT_SYMBOLS = _env_flag("MEMORY_STRICT_SYMBOLS")
MAX_GAMES = int(os.getenv("MEMORY_MAX_GAMES", "256"))
MAX_CELLS = int(os.getenv("MEMORY_MAX_CELLS", "400"))

app = Flask(__name__)


@dataclass
class _Session:
    engine: GameEngine
    # The engine is not thread-safe; every request on a game holds this lock.
    lock: threading.Lock = field(default_factory=threading.Lock)


_GAMES: "OrderedDict[str, _Session]" = OrderedDict()
_GAMES_LOCK = threading.Lock()


def _store(engine: GameEngine) -> str:
    game_id = uuid.uuid4().hex
    with _GAMES_LOCK:
        _GAMES[game_id] = _Session(engine)
        while len(_GAMES) > MAX_GAMES:
            old_id, _ = _GAMES.popitem(last=False)
            app.logger.info("evicted game %s", old_id)
    return game_id


def _lookup(game_id: str) -> Optional[_Session]:
    with _GAMES_LOCK:
        return _GAMES.get(game_id)


# ---------- JSON conversion ----------

def state_to_json(engine: GameEngine) -> Dict[str, Any]:
    snap = engine.snapshot()
    pending = engine.pending_selection
    mismatch = engine.pending_mismatch
    return {
        "rows": engine.rows,
        "cols": engine.cols,
        "grid": [[cell.symbol for cell in row] for row in snap],
        "revealed": [[cell.revealed for cell in row] for row in snap],
        "matched": [[cell.matched for cell in row] for row in snap],
        "moves": engine.move_count,
        "phase": engine.phase.value,
        "complete": engine.is_complete(),
        "pending": [pending[0], pending[1]] if pending else None,
        "mismatch": [[r, c] for (r, c) in mismatch] if mismatch else None,
    }


def outcome_to_json(outcome: TurnOutcome) -> Dict[str, Any]:
    return {
        "kind": outcome.kind.value,
        "first": list(outcome.first),
        "second": list(outcome.second),
        "symbols": [outcome.first_symbol, outcome.second_symbol],
        "symbol": outcome.symbol,
        "moves": outcome.move_count,
        "complete": outcome.complete,
    }


def _error(code: str, message: str, status: int, engine: Optional[GameEngine] = None) -> Any:
    body: Dict[str, Any] = {"ok": False, "error": code, "message": message}
    if engine is not None:
        body["state"] = state_to_json(engine)
    return jsonify(body), status


def _error_status(e: MemoryGameError) -> int:
    if isinstance(e, (GameAlreadyComplete, TurnOrderError)):
        return 409
    return 400


def _json_object() -> Optional[Dict[str, Any]]:
    """Request body as a dict; an empty body counts as {}, anything but an object is None."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _as_int(value: Any, name: str) -> int:
    # JSON true/false and 1.9 are not coordinates
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    return value


def _read_coord(body: Dict[str, Any]) -> Tuple[int, int]:
    return _as_int(body["row"], "row"), _as_int(body["col"], "col")


# ---------- API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_object()
    if body is None:
        return _error("bad_request", "JSON object body required", 400)
    try:
        rows = _as_int(body.get("rows", DEFAULT_ROWS), "rows")
        cols = _as_int(body.get("cols", DEFAULT_COLS), "cols")
        seed = body.get("seed")
        seed = _as_int(seed, "seed") if seed is not None else None
    except ValueError as e:
        return _error("bad_request", f"bad parameters: {e}", 400)
    if rows * cols > MAX_CELLS:
        return _error("too_large", f"board may have at most {MAX_CELLS} cells", 400)
    try:
        engine = GameEngine(rows, cols, rng=make_rng(seed), allow_wraparound=not STRICT_SYMBOLS)
    except MemoryGameError as e:
        return _error(e.code, str(e), 400)
    game_id = _store(engine)
    app.logger.info("new %dx%d game %s", rows, cols, game_id)
    return jsonify({"ok": True, "gameId": game_id, "state": state_to_json(engine)})


@app.get("/api/games/<game_id>")
def api_state(game_id: str) -> Any:
    session = _lookup(game_id)
    if session is None:
        return _error("not_found", "unknown game", 404)
    with session.lock:
        return jsonify({"ok": True, "state": state_to_json(session.engine)})


@app.delete("/api/games/<game_id>")
def api_delete(game_id: str) -> Any:
    with _GAMES_LOCK:
        session = _GAMES.pop(game_id, None)
    if session is None:
        return _error("not_found", "unknown game", 404)
    return jsonify({"ok": True})


@app.post("/api/games/<game_id>/first")
def api_first(game_id: str) -> Any:
    session = _lookup(game_id)
    if session is None:
        return _error("not_found", "unknown game", 404)
    body = _json_object()
    if body is None:
        return _error("bad_request", "JSON object body required", 400)
    try:
        row, col = _read_coord(body)
    except (KeyError, TypeError, ValueError):
        return _error("bad_request", "row and col are required integers", 400)
    with session.lock:
        engine = session.engine
        try:
            engine.select_first(row, col)
        except MemoryGameError as e:
            return _error(e.code, str(e), _error_status(e), engine)
        return jsonify({"ok": True, "state": state_to_json(engine)})


@app.post("/api/games/<game_id>/second")
def api_second(game_id: str) -> Any:
    session = _lookup(game_id)
    if session is None:
        return _error("not_found", "unknown game", 404)
    body = _json_object()
    if body is None:
        return _error("bad_request", "JSON object body required", 400)
    try:
        row, col = _read_coord(body)
    except (KeyError, TypeError, ValueError):
        return _error("bad_request", "row and col are required integers", 400)
    with session.lock:
        engine = session.engine
        try:
            outcome = engine.select_second(row, col)
        except MemoryGameError as e:
            return _error(e.code, str(e), _error_status(e), engine)
        return jsonify({"ok": True, "outcome": outcome_to_json(outcome), "state": state_to_json(engine)})


@app.post("/api/games/<game_id>/acknowledge")
def api_acknowledge(game_id: str) -> Any:
    session = _lookup(game_id)
    if session is None:
        return _error("not_found", "unknown game", 404)
    with session.lock:
        engine = session.engine
        try:
            engine.acknowledge_mismatch()
        except MemoryGameError as e:
            return _error(e.code, str(e), _error_status(e), engine)
        return jsonify({"ok": True, "state": state_to_json(engine)})


if __name__ == "__main__":
    # debug=True only for development
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "5000")), debug=True)
