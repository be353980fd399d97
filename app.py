from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from flask import Flask, Response, jsonify, request

from game import (
    Board,
    GameState,
    MoveError,
    Player,
    Status,
    StatusKind,
    apply_move,
    legal_moves,
    new_game,
    render,
)

# Stateless: every request carries the full game state, nothing is kept server-side.
app = Flask(__name__)


def _player_to_json(p: Optional[Player]) -> Optional[str]:
    return None if p is None else p.value


def _player_from_json(v: Any) -> Optional[Player]:
    if v is None:
        return None
    return Player(str(v))


def status_to_json(s: Status) -> Dict[str, Any]:
    return {"kind": s.kind.value, "winner": _player_to_json(s.winner)}


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "cells": [_player_to_json(c) for c in s.board.cells()],
        "metaboard": [_player_to_json(c) for c in s.board.metaboard],
        "player": s.player.value,
        "legalBoards": sorted(s.legal_boards),
        "status": status_to_json(s.status),
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    """Rebuilds a GameState from state_to_json output. Raises ValueError on inconsistent input."""
    board = Board.from_cells([_player_from_json(c) for c in obj["cells"]])
    player = Player(str(obj.get("player", "X")))
    st = obj.get("status") or {}
    if not isinstance(st, dict):
        raise ValueError("status must be an object")
    status = Status(StatusKind(str(st.get("kind", StatusKind.IN_PROGRESS.value))), _player_from_json(st.get("winner")))

    raw_legal = obj.get("legalBoards")
    if raw_legal is None:
        legal = frozenset() if status.is_over else board.playable_boards()
    else:
        legal = frozenset(int(b) for b in raw_legal)
    for b in legal:
        if not board.is_playable(b):
            raise ValueError(f"board {b} is not playable")
    if status.is_over and legal:
        raise ValueError("a finished game has no legal boards")
    if not status.is_over and not legal:
        raise ValueError("a game in progress needs at least one legal board")

    winner = board.winner()
    if status.kind is StatusKind.WON:
        if status.winner != winner:
            raise ValueError(f"status says {status.winner} won but the metaboard winner is {winner}")
    elif winner is not None:
        raise ValueError(f"metaboard already won by {winner}")
    elif status.kind is StatusKind.TIED and board.playable_boards():
        raise ValueError("a tied game has no playable boards")
    return GameState(board=board, player=player, legal_boards=legal, status=status)


def _json_body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _read_state(body: Dict[str, Any]) -> GameState:
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        raise ValueError("state required")
    return json_to_state(s_in)


def _bad_state(e: Exception) -> Any:
    return jsonify({"ok": False, "error": f"bad state: {e}"}), 400


def _game_payload(state: GameState) -> Dict[str, Any]:
    return {
        "ok": True,
        "state": state_to_json(state),
        "legalMoves": legal_moves(state),
    }


# ---------- Text view ----------

@app.get("/")
def index() -> Any:
    return Response(render(new_game()), mimetype="text/plain")


# ---------- Core Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    return jsonify(_game_payload(new_game()))


@app.post("/api/legal")
def api_legal() -> Any:
    body = _json_body()
    try:
        state = _read_state(body)
    except (KeyError, TypeError, ValueError, IndexError) as e:
        return _bad_state(e)
    return jsonify({"ok": True, "legalMoves": legal_moves(state)})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    try:
        state = _read_state(body)
    except (KeyError, TypeError, ValueError, IndexError) as e:
        return _bad_state(e)

    try:
        player = _player_from_json(body.get("player")) or state.player
    except ValueError:
        return jsonify({"ok": False, "error": f"unknown player {body.get('player')!r}"}), 400

    legal: List[int] = legal_moves(state)
    try:
        next_state = apply_move(state, player, body.get("position"))
    except MoveError as e:
        return jsonify({"ok": False, "error": str(e), "errorKind": e.kind, "legalMoves": legal}), 400
    payload = _game_payload(next_state)
    payload["status"] = status_to_json(next_state.status)
    return jsonify(payload)


@app.post("/api/render")
def api_render() -> Any:
    body = _json_body()
    try:
        state = _read_state(body)
    except (KeyError, TypeError, ValueError, IndexError) as e:
        return _bad_state(e)
    return jsonify({"ok": True, "text": render(state)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
