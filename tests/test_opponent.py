from __future__ import annotations

import pytest

from realm_rush.engine.dice import rng_for, chance, weighted_pick
from realm_rush.engine.models import Combatant
from realm_rush.engine.opponent import choose_move


class FixedRandom:
    """Stands in for random.Random with a fixed draw."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def bot(**kwargs) -> Combatant:
    return Combatant(id="player2", name="Arena Bot", **kwargs)


def human(**kwargs) -> Combatant:
    return Combatant(id="player1", name="Ana", **kwargs)


def test_low_hp_and_broke_must_defend() -> None:
    assert choose_move(bot(hp=20, energy=10), human(), FixedRandom(0.99)) == "defend"


@pytest.mark.parametrize("draw, expected", [(0.1, "defend"), (0.9, "powerup")])
def test_low_hp_splits_defend_and_powerup(draw, expected) -> None:
    assert choose_move(bot(hp=29, energy=50), human(), FixedRandom(draw)) == expected


def test_charged_multiplier_attacks() -> None:
    assert choose_move(bot(power_multiplier=2.0, energy=20), human(), FixedRandom(0.99)) == "attack"


@pytest.mark.parametrize("draw, expected", [(0.5, "attack"), (0.8, "powerup")])
def test_presses_a_weak_opponent(draw, expected) -> None:
    assert choose_move(bot(energy=40), human(hp=39), FixedRandom(draw)) == expected


def test_rebuilds_energy() -> None:
    assert choose_move(bot(energy=25), human(), FixedRandom(0.0)) == "powerup"


@pytest.mark.parametrize("draw, expected", [(0.2, "powerup"), (0.7, "attack")])
def test_builds_multiplier_while_low(draw, expected) -> None:
    assert choose_move(bot(energy=50), human(), FixedRandom(draw)) == expected


@pytest.mark.parametrize(
    "draw, expected",
    [(0.1, "attack"), (0.5, "defend"), (0.9, "powerup")],
)
def test_default_weighted_pick(draw, expected) -> None:
    assert choose_move(bot(energy=50, power_multiplier=1.5), human(), FixedRandom(draw)) == expected


def test_same_seed_same_decisions() -> None:
    me, them = bot(energy=60, power_multiplier=1.5), human()
    first = [choose_move(me, them, rng_for(99, turn)) for turn in range(1, 16)]
    second = [choose_move(me, them, rng_for(99, turn)) for turn in range(1, 16)]
    assert first == second
    assert set(first) <= {"attack", "defend", "powerup"}


def test_dice_helpers() -> None:
    assert chance(60, FixedRandom(0.59)) is True
    assert chance(60, FixedRandom(0.6)) is False
    assert weighted_pick((("a", 1), ("b", 3)), FixedRandom(0.3)) == "b"
    with pytest.raises(ValueError):
        weighted_pick((("a", 0),), FixedRandom(0.3))
