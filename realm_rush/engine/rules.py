# realm_rush/engine/rules.py
import math
from typing import NamedTuple, Optional

from .models import Combatant, InvariantViolation
from ..content.balance import ATTACK, DEFEND, POWERUP, DAMAGE, TURN_CAP, DRAW


class Outcome(NamedTuple):
    damage: int
    healing: int
    counter_damage: int


def clamp(x, lo, hi):
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    # 7.5 -> 8; builtin round() would give banker's rounding
    return int(math.floor(x + 0.5))


def attack_damage(attacker: Combatant, defender: Combatant, defender_move: Optional[str]) -> float:
    if attacker.energy >= DAMAGE["attack_full_energy"]:
        damage = float(DAMAGE["attack_full"])
    else:
        damage = float(DAMAGE["attack_weak"])
    damage *= attacker.power_multiplier
    if attacker.has_attack_buff:
        damage *= DAMAGE["attack_buff"]
    # fatigue on the second and later consecutive attack
    if attacker.consecutive_attacks >= 1:
        damage *= DAMAGE["fatigue"]
    if defender_move == ATTACK:
        damage *= DAMAGE["mutual_attack"]
    elif defender_move == DEFEND:
        if defender.energy >= DAMAGE["defend_energy"]:
            damage *= DAMAGE["defend_strong"]
        else:
            damage *= DAMAGE["defend_weak"]
    return damage


def compute_outcome(
    attacker: Combatant,
    defender: Combatant,
    attacker_move: Optional[str],
    defender_move: Optional[str],
) -> Outcome:
    """
    One side's contribution to a turn, seen from that side as the attacker.
    counter_damage is what the defender hits back with, so it lands on the attacker.
    """
    if attacker_move is None:
        raise InvariantViolation(f"{attacker.id} has no move at resolution time")

    if attacker_move == ATTACK:
        counter = DAMAGE["counter"] if defender_move == DEFEND else 0
        raw = attack_damage(attacker, defender, defender_move)
        return Outcome(damage=round_half_up(raw), healing=0, counter_damage=counter)

    if attacker_move == POWERUP:
        heal = DAMAGE["heal_full"] if attacker.energy >= DAMAGE["heal_energy"] else DAMAGE["heal_weak"]
        return Outcome(damage=0, healing=heal, counter_damage=0)

    if attacker_move == DEFEND:
        return Outcome(damage=0, healing=0, counter_damage=0)

    raise InvariantViolation(f"{attacker.id} has unknown move {attacker_move!r}")


def evaluate_winner(hp1: int, hp2: int, turn: int, name1: str, name2: str) -> Optional[str]:
    """Winner name, "Draw", or None while the match goes on."""
    down1 = hp1 <= 0
    down2 = hp2 <= 0
    if down1 and down2:
        return DRAW
    if down1:
        return name2
    if down2:
        return name1
    if turn >= TURN_CAP:
        if hp1 > hp2:
            return name1
        if hp2 > hp1:
            return name2
        return DRAW
    return None
