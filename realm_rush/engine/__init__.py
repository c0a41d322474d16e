# realm_rush/engine/__init__.py
from .models import Match, Combatant, BattleLogEntry, MoveRecord, MoveRejected, InvariantViolation
from .match import new_match, start_match, select_move, reset_match
from .resolver import resolve_turn, post_combat_summary
from .opponent import choose_move

__all__ = [
    "Match",
    "Combatant",
    "BattleLogEntry",
    "MoveRecord",
    "MoveRejected",
    "InvariantViolation",
    "new_match",
    "start_match",
    "select_move",
    "reset_match",
    "resolve_turn",
    "post_combat_summary",
    "choose_move",
]
