# realm_rush/content/balance.py
ATTACK = "attack"
DEFEND = "defend"
POWERUP = "powerup"

MOVES = (ATTACK, DEFEND, POWERUP)

SIDES = ("player1", "player2")

DEFAULTS = {
    "hp": 100,
    "hp_max": 100,
    "energy": 50,
    "energy_max": 100,
    "power_multiplier": 1.0,
    "energy_regen_per_turn": 20,
}

MOVE_COSTS = {
    ATTACK: 25,
    DEFEND: 10,
    POWERUP: 15,
}

# bonus regen on top of the flat per-turn regen
MOVE_REGEN_BONUS = {
    ATTACK: 0,
    DEFEND: 5,
    POWERUP: 10,
}

DAMAGE = {
    "attack_full": 25,
    "attack_weak": 10,
    "attack_full_energy": 25,
    "attack_buff": 1.5,
    "fatigue": 0.7,
    "mutual_attack": 1.3,
    "defend_strong": 0.3,
    "defend_weak": 0.7,
    "defend_energy": 10,
    "counter": 5,
    "heal_full": 10,
    "heal_weak": 5,
    "heal_energy": 15,
}

CAPS = {
    "multiplier_min": 1.0,
    "multiplier_max": 2.5,
    "multiplier_step": 0.5,
}

TURN_CAP = 15

DRAW = "Draw"
