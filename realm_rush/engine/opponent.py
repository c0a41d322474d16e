# realm_rush/engine/opponent.py
import random
from typing import Optional

from .dice import chance, weighted_pick
from .models import Combatant
from ..content.balance import ATTACK, DEFEND, POWERUP


def choose_move(me: Combatant, opponent: Combatant, rng: Optional[random.Random] = None) -> str:
    """
    Priority-ordered rules for the automated side; the first rule that
    matches decides. Only the weighted picks consume randomness.
    """
    r = rng or random.Random()

    # low hp: turtle up or heal
    if me.hp < 30:
        if me.energy < 15:
            return DEFEND
        return DEFEND if chance(60, r) else POWERUP

    # cash in a charged multiplier
    if me.power_multiplier >= 2.0 and me.energy >= 20:
        return ATTACK

    # press the advantage
    if opponent.hp < 40 and me.energy >= 20:
        return ATTACK if chance(70, r) else POWERUP

    # rebuild the economy
    if me.energy < 30:
        return POWERUP

    if me.power_multiplier < 1.5 and me.energy >= 15:
        return POWERUP if chance(50, r) else ATTACK

    if me.energy >= 20:
        return weighted_pick(((ATTACK, 45), (DEFEND, 30), (POWERUP, 25)), r)
    if me.energy >= 15:
        return weighted_pick(((DEFEND, 50), (POWERUP, 50)), r)
    if me.energy >= 10:
        return DEFEND
    # desperation, affordability ignored
    return weighted_pick(((ATTACK, 50), (DEFEND, 50)), r)
