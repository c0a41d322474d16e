from __future__ import annotations

import pytest

from realm_rush.engine import effects
from realm_rush.engine.models import Combatant, InvariantViolation
from realm_rush.engine.rules import compute_outcome, evaluate_winner, round_half_up


def fighter(side="player1", **kwargs) -> Combatant:
    return Combatant(id=side, name=side, **kwargs)


def test_attack_into_defend_rounds_half_up_and_counters() -> None:
    out = compute_outcome(fighter(), fighter("player2"), "attack", "defend")
    assert out.damage == 8
    assert out.counter_damage == 5
    assert out.healing == 0


def test_defend_is_weak_when_defender_is_energy_starved() -> None:
    out = compute_outcome(fighter(energy=20), fighter("player2", energy=9), "attack", "defend")
    # 10 * 0.7
    assert out.damage == 7
    assert out.counter_damage == 5


def test_low_energy_attack_uses_weak_base() -> None:
    out = compute_outcome(fighter(energy=24), fighter("player2"), "attack", "powerup")
    assert out.damage == 10


def test_attack_modifiers_stack_multiplicatively() -> None:
    attacker = fighter(power_multiplier=2.0, has_attack_buff=True, consecutive_attacks=1)
    out = compute_outcome(attacker, fighter("player2"), "attack", "attack")
    # 25 * 2.0 * 1.5 * 0.7 * 1.3 = 68.25
    assert out.damage == 68
    assert out.counter_damage == 0


def test_powerup_heals_by_energy() -> None:
    assert compute_outcome(fighter(), fighter("player2"), "powerup", "attack").healing == 10
    assert compute_outcome(fighter(energy=14), fighter("player2"), "powerup", "attack").healing == 5


def test_defend_alone_does_nothing() -> None:
    out = compute_outcome(fighter(), fighter("player2"), "defend", "powerup")
    assert out == (0, 0, 0)


def test_missing_move_is_an_invariant_violation() -> None:
    with pytest.raises(InvariantViolation):
        compute_outcome(fighter(), fighter("player2"), None, "attack")


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(7.5) == 8
    assert round_half_up(5.25) == 5


@pytest.mark.parametrize(
    "move, expected",
    [("attack", 45), ("defend", 65), ("powerup", 65)],
)
def test_next_energy(move, expected) -> None:
    assert effects.next_energy(fighter(), move) == expected


def test_next_energy_clamps() -> None:
    assert effects.next_energy(fighter(energy=0), "attack") == 0
    assert effects.next_energy(fighter(energy=95), "powerup") == 100


def test_multiplier_bookkeeping() -> None:
    assert effects.next_multiplier(fighter(power_multiplier=2.5), "attack") == 1.0
    assert effects.next_multiplier(fighter(power_multiplier=2.5), "powerup") == 2.5
    assert effects.next_multiplier(fighter(power_multiplier=1.5), "powerup") == 2.0
    assert effects.next_multiplier(fighter(power_multiplier=1.5), "defend") == 1.5
    # unaffordable power-up does not charge
    assert effects.next_multiplier(fighter(energy=14), "powerup") == 1.0


def test_consecutive_attacks_and_buff() -> None:
    assert effects.next_consecutive_attacks(fighter(consecutive_attacks=2), "attack") == 3
    assert effects.next_consecutive_attacks(fighter(consecutive_attacks=2), "defend") == 0
    assert effects.next_attack_buff("powerup", "attack") is True
    assert effects.next_attack_buff("powerup", "defend") is False
    assert effects.next_attack_buff("attack", "attack") is False


def test_settle_uses_pre_turn_state() -> None:
    ps = fighter(energy=20, power_multiplier=1.5, has_attack_buff=True)
    settled = effects.settle(ps, "powerup", "defend")
    assert settled.energy == 35
    assert settled.power_multiplier == 2.0
    assert settled.has_attack_buff is False
    assert settled.consecutive_attacks == 0


def test_unknown_move_has_no_cost() -> None:
    with pytest.raises(InvariantViolation):
        effects.move_cost("dance")


@pytest.mark.parametrize(
    "hp1, hp2, turn, expected",
    [
        (0, 0, 3, "Draw"),
        (0, 40, 3, "Bea"),
        (40, -2, 3, "Ana"),
        (60, 40, 15, "Ana"),
        (40, 60, 15, "Bea"),
        (50, 50, 15, "Draw"),
        (60, 40, 14, None),
    ],
)
def test_evaluate_winner(hp1, hp2, turn, expected) -> None:
    assert evaluate_winner(hp1, hp2, turn, "Ana", "Bea") == expected
