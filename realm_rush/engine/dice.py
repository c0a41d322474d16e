# realm_rush/engine/dice.py
import random
from typing import Sequence, Tuple

def rng_for(seed: int, turn: int) -> random.Random:
    # deterministic per match seed + turn
    return random.Random(f"{seed}:{turn}")

def chance(pct: int, r: random.Random) -> bool:
    # pct in 0..100
    return r.random() * 100 < pct

def weighted_pick(options: Sequence[Tuple[str, int]], r: random.Random) -> str:
    # options like (("attack", 45), ("defend", 30), ("powerup", 25))
    total = sum(weight for _, weight in options)
    if total <= 0:
        raise ValueError("weights must add up to something positive")
    point = r.random() * total
    for value, weight in options:
        if point < weight:
            return value
        point -= weight
    return options[-1][0]
