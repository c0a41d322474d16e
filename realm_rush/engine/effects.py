# realm_rush/engine/effects.py
from __future__ import annotations

from dataclasses import replace

from .models import Combatant, InvariantViolation
from .rules import clamp
from ..content.balance import (
    ATTACK,
    POWERUP,
    MOVES,
    DEFAULTS,
    MOVE_COSTS,
    MOVE_REGEN_BONUS,
    CAPS,
)


def move_cost(move: str) -> int:
    if move not in MOVES:
        raise InvariantViolation(f"No energy cost for move {move!r}")
    return MOVE_COSTS[move]


def next_energy(ps: Combatant, move: str) -> int:
    """Spend the move's cost, then flat regen plus the move's bonus regen."""
    cost = move_cost(move)
    regen = DEFAULTS["energy_regen_per_turn"] + MOVE_REGEN_BONUS[move]
    return clamp(ps.energy - cost + regen, 0, ps.max_energy)


def next_multiplier(ps: Combatant, move: str) -> float:
    if move == ATTACK:
        return CAPS["multiplier_min"]
    # affordability is checked against pre-turn energy
    if move == POWERUP and ps.energy >= MOVE_COSTS[POWERUP]:
        return min(CAPS["multiplier_max"], ps.power_multiplier + CAPS["multiplier_step"])
    return ps.power_multiplier


def next_consecutive_attacks(ps: Combatant, move: str) -> int:
    return ps.consecutive_attacks + 1 if move == ATTACK else 0


def next_attack_buff(move: str, opponent_move: str) -> bool:
    # recomputed every turn, never carried forward
    return move == POWERUP and opponent_move == ATTACK


def settle(ps: Combatant, move: str, opponent_move: str) -> Combatant:
    """Energy and buff bookkeeping for one side, computed from its pre-turn state."""
    return replace(
        ps,
        energy=next_energy(ps, move),
        power_multiplier=next_multiplier(ps, move),
        consecutive_attacks=next_consecutive_attacks(ps, move),
        has_attack_buff=next_attack_buff(move, opponent_move),
    )
