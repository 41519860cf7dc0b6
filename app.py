from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from freecell_core.config import EngineConfig, env_flag, setup_logging
from game import (
    Card,
    FoundationLoc,
    FreeCellLoc,
    GameState,
    Location,
    TableauLoc,
    auto_promote,
    click,
    deal_new_game,
    duplicate_cards,
    is_won,
    legal_moves,
    play_move,
)

logger = logging.getLogger(__name__)

CONFIG = EngineConfig.from_env()

app = Flask(__name__)


# ---------- JSON codec ----------

def _card_to_json(c: Optional[Card]) -> Optional[Dict[str, str]]:
    if c is None:
        return None
    return {"suit": c.suit, "rank": c.rank}


def _json_to_card(obj: Any) -> Optional[Card]:
    if obj is None:
        return None
    return Card(suit=str(obj["suit"]), rank=str(obj["rank"]))


def loc_to_json(loc: Optional[Location]) -> Optional[Dict[str, Any]]:
    if loc is None:
        return None
    if isinstance(loc, TableauLoc):
        return {"type": "tableau", "pile": loc.pile, "card": loc.card}
    if isinstance(loc, FreeCellLoc):
        return {"type": "free", "index": loc.cell}
    return {"type": "foundation", "index": loc.slot}


def json_to_loc(obj: Any) -> Location:
    if not isinstance(obj, dict):
        raise ValueError("location must be an object")
    kind = obj.get("type")
    if kind == "tableau":
        card = obj.get("card")
        return TableauLoc(pile=int(obj["pile"]), card=None if card is None else int(card))
    if kind == "free":
        return FreeCellLoc(cell=int(obj["index"]))
    if kind == "foundation":
        return FoundationLoc(slot=int(obj["index"]))
    raise ValueError(f"unknown location type: {kind!r}")


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "tableau": [[_card_to_json(c) for c in pile] for pile in s.tableau],
        "freeCells": [_card_to_json(c) for c in s.free_cells],
        "foundations": [_card_to_json(c) for c in s.foundations],
        "selection": loc_to_json(s.selection),
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    sel = obj.get("selection")
    state = GameState(
        tableau=tuple(tuple(_json_to_card(c) for c in pile) for pile in obj["tableau"]),
        free_cells=tuple(_json_to_card(c) for c in obj["freeCells"]),
        foundations=tuple(_json_to_card(c) for c in obj["foundations"]),
        selection=None if sel is None else json_to_loc(sel),
    )
    dups = duplicate_cards(state)
    if dups:
        raise ValueError(f"duplicated cards: {', '.join(c.code() for c in dups)}")
    return state


def _moves_to_json(s: GameState) -> List[Dict[str, Any]]:
    return [{"source": loc_to_json(src), "dest": loc_to_json(dst)} for src, dst in legal_moves(s)]


def _result_to_json(result) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    return {
        "ok": result.ok,
        "error": result.error.value if result.error is not None else None,
        "cards": [_card_to_json(c) for c in result.cards],
        "promoted": [_card_to_json(c) for c in result.promoted],
        "won": result.won,
    }


def _bad_request(msg: str) -> Any:
    return jsonify({"ok": False, "error": msg}), 400


# ---------- Core Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    seed = body.get("seed", CONFIG.seed)
    if seed is not None and not isinstance(seed, int):
        return _bad_request("seed must be an integer")
    state, promoted = auto_promote(deal_new_game(seed=seed))
    logger.info("new game via API (seed=%r)", seed)
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "won": is_won(state),
        "legalMoves": _moves_to_json(state),
    })


@app.post("/api/state")
def api_state() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = json_to_state(body["state"])
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    state, promoted = auto_promote(state)
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "promoted": [_card_to_json(c) for c in promoted],
        "won": is_won(state),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = json_to_state(body["state"])
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    return jsonify({"ok": True, "legalMoves": _moves_to_json(state)})


@app.post("/api/select")
def api_select() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = json_to_state(body["state"])
        loc = json_to_loc(body["location"])
        auto_route = body.get("autoRoute", CONFIG.auto_route)
        if not isinstance(auto_route, bool):
            return _bad_request("autoRoute must be a boolean")
        next_state, result = click(state, loc, auto_route=auto_route)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad request: {e}")
    return jsonify({
        "ok": True,
        "state": state_to_json(next_state),
        "result": _result_to_json(result),
        "won": is_won(next_state),
    })


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = json_to_state(body["state"])
        source = json_to_loc(body["source"])
        dest = json_to_loc(body["dest"])
        next_state, result = play_move(state, source, dest)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad request: {e}")
    if not result.ok:
        return jsonify({
            "ok": False,
            "error": result.error.value,
            "state": state_to_json(state),
            "legalMoves": _moves_to_json(state),
        }), 400
    return jsonify({
        "ok": True,
        "result": _result_to_json(result),
        "state": state_to_json(next_state),
        "won": result.won,
        "legalMoves": _moves_to_json(next_state),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = env_flag("FLASK_DEBUG", env_flag("DEBUG", False))
    setup_logging(verbose=debug)
    host = os.getenv("FREECELL_HOST", "127.0.0.1")
    port = int(os.getenv("FREECELL_PORT", "5000"))
    app.run(host=host, port=port, debug=debug)
