# realm_rush/sockets.py
import logging
import time

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from . import state
from .content.balance import SIDES
from .engine.dice import rng_for
from .engine.match import start_match, select_move, reset_match
from .engine.mirror import JsonLinesMirror
from .engine.models import MoveRejected
from .engine.opponent import choose_move
from .engine.resolver import post_combat_summary

LOGGER = logging.getLogger(__name__)

AI_NAME = "Arena Bot"

def snapshot_for(room, viewer_sid):
    """
    Returns a UI-friendly snapshot from one viewer's side.
    The enemy's pending move stays hidden until the turn resolves.
    """
    match = room.match
    you_side = room.side_for(viewer_sid) or SIDES[0]
    enemy_side = SIDES[1] if you_side == SIDES[0] else SIDES[0]

    def pack(side, reveal):
        payload = match.side(side).to_payload()
        if not reveal:
            payload["currentMove"] = None
        return payload

    return {
        "match_id": match.match_id,
        "mode": room.mode,
        "state": match.state,
        "turn": match.current_turn,
        "you_side": you_side,
        "you": pack(you_side, True),
        "enemy": pack(enemy_side, match.state != "playing"),
        "log": [entry.to_payload() for entry in match.battle_log[-30:]],
        "winner": match.winner,
        "log_length": len(match.battle_log),
    }

def _broadcast(socketio, room):
    for sid in room.players:
        socketio.emit("arena_snapshot", snapshot_for(room, sid), to=sid)

def _later(socketio, delay, fn):
    # pacing only; zero delay runs inline
    if not delay or delay <= 0:
        fn()
        return

    def run():
        socketio.sleep(delay)
        fn()

    socketio.start_background_task(run)

def _mirror_for(config):
    path = config.get("ARENA_MIRROR_PATH")
    if not path:
        return None
    return JsonLinesMirror(path)

def _pacing(config):
    return (
        float(config.get("ARENA_AI_THINK_SECONDS", 0) or 0),
        float(config.get("ARENA_RESOLVE_SECONDS", 0) or 0),
    )

def _submit(socketio, room, side, move, think_delay, resolve_delay):
    """Applies one move to the room's match; raises MoveRejected untouched."""
    with room.lock:
        resolving = []
        result = select_move(room.match, side, move, mirror=room.mirror, on_resolving=resolving.append)

        if not resolving:
            room.match = result
            _broadcast(socketio, room)
            if room.mode == "solo" and side == SIDES[0]:
                _later(socketio, think_delay, lambda: _ai_turn(socketio, room, think_delay, resolve_delay))
            return

        shown = resolving[0]
        room.match = shown
        _broadcast(socketio, room)

    def commit():
        with room.lock:
            # a reset or rematch in the meantime wins
            if state.arena_rooms.get(room.room_id) is not room or room.match is not shown:
                return
            room.match = result
            _broadcast(socketio, room)
            if result.state == "finished":
                socketio.emit("arena_system", f"Match ended. Winner: {result.winner}", to=room.room_id)
                socketio.emit("arena_summary", post_combat_summary(result), to=room.room_id)

    _later(socketio, resolve_delay, commit)

def _ai_turn(socketio, room, think_delay, resolve_delay):
    with room.lock:
        if state.arena_rooms.get(room.room_id) is not room:
            return
        match = room.match
        ai_side = SIDES[1]
        # only answers a move the human has already made
        if match.state != "playing" or match.side(ai_side).is_ready or not match.side(SIDES[0]).is_ready:
            return
        r = rng_for(room.seed, match.current_turn)
        move = choose_move(match.side(ai_side), match.side(SIDES[0]), r)
        try:
            _submit(socketio, room, ai_side, move, think_delay, resolve_delay)
        except MoveRejected as exc:
            LOGGER.debug("Automated move dropped in %s: %s", room.room_id, exc)

def _payload_name(payload, fallback):
    if isinstance(payload, dict):
        name = str(payload.get("name") or "").strip()
        if name:
            return name[:24]
    return fallback

def register_arena_socket_handlers(socketio):
    @socketio.on("arena_queue")
    def arena_queue(payload=None):
        sid = request.sid
        if state.get_room_by_sid(sid):
            emit("arena_system", "Already in a match.")
            return
        state.enqueue(sid, _payload_name(payload, f"Player {sid[:5]}"))
        emit("arena_system", "Queued for the arena...")

        if len(state.arena_queue) >= 2:
            p1 = state.arena_queue.pop(0)
            p2 = state.arena_queue.pop(0)
            seed = int(time.time() * 1000) & 0xFFFFFFFF
            room = state.create_room(p1, p2, seed)
            room.names = {
                SIDES[0]: state.queued_names.pop(p1, "Player 1"),
                SIDES[1]: state.queued_names.pop(p2, "Player 2"),
            }
            room.mirror = _mirror_for(current_app.config)
            room.match = start_match(room.names[SIDES[0]], room.names[SIDES[1]], room.room_id, room.mirror)

            join_room(room.room_id, sid=p1)
            join_room(room.room_id, sid=p2)

            socketio.emit("arena_system", "Match found. Choose your move.", to=room.room_id)
            _broadcast(socketio, room)

    @socketio.on("arena_solo")
    def arena_solo(payload=None):
        sid = request.sid
        if state.get_room_by_sid(sid):
            emit("arena_system", "Already in a match.")
            return
        state.dequeue(sid)
        seed = None
        if isinstance(payload, dict) and payload.get("seed") is not None:
            try:
                seed = int(payload["seed"])
            except (TypeError, ValueError):
                emit("arena_system", "Seed must be a number.")
                return
        if seed is None:
            seed = int(time.time() * 1000) & 0xFFFFFFFF

        room = state.create_solo_room(sid, seed)
        room.names = {SIDES[0]: _payload_name(payload, "Player 1"), SIDES[1]: AI_NAME}
        room.mirror = _mirror_for(current_app.config)
        room.match = start_match(room.names[SIDES[0]], room.names[SIDES[1]], room.room_id, room.mirror)
        join_room(room.room_id, sid=sid)

        emit("arena_system", f"{AI_NAME} accepts the challenge.")
        _broadcast(socketio, room)

    @socketio.on("arena_move")
    def arena_move(payload=None):
        sid = request.sid
        room = state.get_room_by_sid(sid)
        if not room:
            emit("arena_system", "Not in a match.")
            return

        action = payload if isinstance(payload, dict) else {"move": payload}
        move = str(action.get("move") or "").strip().lower()
        side = room.side_for(sid)
        think_delay, resolve_delay = _pacing(current_app.config)
        try:
            _submit(socketio, room, side, move, think_delay, resolve_delay)
        except MoveRejected as exc:
            LOGGER.warning("Rejected move from %s in %s: %s", sid[:5], room.room_id, exc)
            emit("arena_system", str(exc))
            return
        emit("arena_system", "Move received.")

    @socketio.on("arena_rematch")
    def arena_rematch():
        sid = request.sid
        room = state.get_room_by_sid(sid)
        if not room:
            emit("arena_system", "Not in a match.")
            return
        with room.lock:
            if room.match.state not in ("finished", "lobby"):
                emit("arena_system", "Match still in progress.")
                return
            room.match = start_match(room.names[SIDES[0]], room.names[SIDES[1]], room.room_id, room.mirror)
            socketio.emit("arena_system", "Rematch! Choose your move.", to=room.room_id)
            _broadcast(socketio, room)

    @socketio.on("arena_reset")
    def arena_reset():
        sid = request.sid
        room = state.get_room_by_sid(sid)
        if not room:
            emit("arena_system", "Not in a match.")
            return
        with room.lock:
            room.match = reset_match(room.room_id, room.mirror)
            socketio.emit("arena_system", "Back to the lobby.", to=room.room_id)
            _broadcast(socketio, room)

    @socketio.on("disconnect")
    def arena_disconnect(*args):
        sid = request.sid
        state.dequeue(sid)
        room = state.get_room_by_sid(sid)
        if not room:
            return
        room_id = room.room_id
        leave_room(room_id, sid=sid)
        socketio.emit("arena_system", "Opponent disconnected. Match ended.", to=room_id)
        state.cleanup_room(room_id)
