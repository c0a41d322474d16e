# realm_rush/engine/resolver.py
import logging
from dataclasses import replace
from typing import Dict, Any

from .models import Match, Combatant, BattleLogEntry, MoveRecord, InvariantViolation
from .rules import compute_outcome, evaluate_winner, clamp
from .effects import settle
from ..content.balance import MOVES

LOGGER = logging.getLogger(__name__)


def ready_to_resolve(match: Match) -> bool:
    return match.player1.is_ready and match.player2.is_ready


def _require_moves(match: Match) -> None:
    for ps in (match.player1, match.player2):
        if ps.current_move is None:
            raise InvariantViolation(f"Cannot resolve turn {match.current_turn}: {ps.id} has no move")


def begin_resolution(match: Match) -> Match:
    """The transient "resolving" snapshot shown while a turn is being computed."""
    if match.state != "playing":
        raise InvariantViolation(f"Cannot resolve a match in state {match.state!r}")
    _require_moves(match)
    return replace(match, state="resolving")


def _next_hp(ps: Combatant, taken: int, healed: int) -> int:
    return clamp(ps.hp - taken + healed, 0, ps.max_hp)


def resolve_turn(match: Match) -> Match:
    """
    Resolves both submitted moves simultaneously.
    Both sides are computed from the pre-turn snapshot; the result is a new
    Match with one more battle log entry and either the next turn open for
    moves or the match finished.
    """
    if match.state == "playing":
        match = begin_resolution(match)
    if match.state != "resolving":
        raise InvariantViolation(f"Cannot resolve a match in state {match.state!r}")
    _require_moves(match)

    p1, p2 = match.player1, match.player2
    m1, m2 = p1.current_move, p2.current_move
    turn = match.current_turn

    o1 = compute_outcome(p1, p2, m1, m2)
    o2 = compute_outcome(p2, p1, m2, m1)

    # counter-damage is emitted by the defender and lands on the attacker
    p1_taken = o2.damage + o1.counter_damage
    p2_taken = o1.damage + o2.counter_damage

    new_p1 = replace(
        settle(p1, m1, m2),
        hp=_next_hp(p1, p1_taken, o1.healing),
        current_move=None,
        is_ready=False,
        move_history=p1.move_history + (MoveRecord(turn=turn, move=m1, damage_dealt=o1.damage),),
    )
    new_p2 = replace(
        settle(p2, m2, m1),
        hp=_next_hp(p2, p2_taken, o2.healing),
        current_move=None,
        is_ready=False,
        move_history=p2.move_history + (MoveRecord(turn=turn, move=m2, damage_dealt=o2.damage),),
    )

    entry = BattleLogEntry(
        turn=turn,
        player1_move=m1,
        player2_move=m2,
        player1_damage=p1_taken,
        player2_damage=p2_taken,
        player1_healing=o1.healing,
        player2_healing=o2.healing,
    )
    LOGGER.debug(
        "Turn %s resolved: %s %s (hp %s) vs %s %s (hp %s)",
        turn, p1.id, m1, new_p1.hp, p2.id, m2, new_p2.hp,
    )

    winner = evaluate_winner(new_p1.hp, new_p2.hp, turn, p1.name, p2.name)
    state = "playing"
    if winner is not None:
        state = "finished"
        LOGGER.info("Match %s finished on turn %s, winner: %s", match.match_id or "-", turn, winner)

    return replace(
        match,
        player1=new_p1,
        player2=new_p2,
        state=state,
        current_turn=turn + 1,
        winner=winner,
        battle_log=match.battle_log + (entry,),
    )


def post_combat_summary(match: Match) -> Dict[str, Any]:
    """End-of-match stats per side, built from move histories and the battle log."""
    def totals_for(ps: Combatant, taken_key: str, healed_key: str) -> Dict[str, Any]:
        counts = {move: 0 for move in MOVES}
        for record in ps.move_history:
            counts[record.move] = counts.get(record.move, 0) + 1
        return {
            "name": ps.name,
            "moves": counts,
            "damage_dealt": sum(record.damage_dealt for record in ps.move_history),
            "damage_taken": sum(getattr(entry, taken_key) for entry in match.battle_log),
            "healing": sum(getattr(entry, healed_key) for entry in match.battle_log),
            "hp": ps.hp,
        }

    return {
        "turns": len(match.battle_log),
        "winner": match.winner,
        match.player1.id: totals_for(match.player1, "player1_damage", "player1_healing"),
        match.player2.id: totals_for(match.player2, "player2_damage", "player2_healing"),
    }
