# realm_rush/state.py
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .content.balance import SIDES
from .engine.mirror import MatchMirror
from .engine.models import Match
from .engine.match import new_match

@dataclass
class ArenaRoom:
    room_id: str
    players: List[str]                     # sids, one per human side
    mode: str = "pvp"                      # "pvp" | "solo"
    seed: int = 0                          # drives the automated side
    names: Dict[str, str] = field(default_factory=dict)      # side -> name
    sides: Dict[str, str] = field(default_factory=dict)      # sid -> side
    match: Match = field(default_factory=new_match)
    mirror: Optional[MatchMirror] = None
    # held around every read-then-replace of match; reentrant for inline bot turns
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def side_for(self, sid: str) -> Optional[str]:
        return self.sides.get(sid)

arena_queue: List[str] = []
queued_names: Dict[str, str] = {}
arena_rooms: Dict[str, ArenaRoom] = {}
sid_to_room: Dict[str, str] = {}

def enqueue(sid: str, name: str) -> None:
    if sid not in arena_queue:
        arena_queue.append(sid)
    queued_names[sid] = name

def dequeue(sid: str) -> None:
    if sid in arena_queue:
        arena_queue.remove(sid)
    queued_names.pop(sid, None)

def create_room(p1: str, p2: str, seed: int) -> ArenaRoom:
    room_id = f"arena-{p1[:5]}-{p2[:5]}"
    room = ArenaRoom(room_id=room_id, players=[p1, p2], seed=seed)
    room.sides = {p1: SIDES[0], p2: SIDES[1]}
    room.match = new_match(room_id)
    arena_rooms[room_id] = room
    sid_to_room[p1] = room_id
    sid_to_room[p2] = room_id
    return room

def create_solo_room(sid: str, seed: int) -> ArenaRoom:
    room_id = f"arena-{sid[:5]}-solo"
    room = ArenaRoom(room_id=room_id, players=[sid], mode="solo", seed=seed)
    room.sides = {sid: SIDES[0]}
    room.match = new_match(room_id)
    arena_rooms[room_id] = room
    sid_to_room[sid] = room_id
    return room

def get_room_by_sid(sid: str) -> Optional[ArenaRoom]:
    room = sid_to_room.get(sid)
    if not room:
        return None
    return arena_rooms.get(room)

def cleanup_room(room_id: str) -> None:
    room = arena_rooms.pop(room_id, None)
    if not room:
        return
    for sid in room.players:
        sid_to_room.pop(sid, None)

def clear_all() -> None:
    arena_queue.clear()
    queued_names.clear()
    arena_rooms.clear()
    sid_to_room.clear()
