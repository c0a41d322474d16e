# realm_rush/engine/models.py
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Any

from ..content.balance import DEFAULTS


class MoveRejected(ValueError):
    """A move submission that the match cannot accept right now."""


class InvariantViolation(RuntimeError):
    """The engine was driven into a state the state machine should prevent."""


@dataclass(frozen=True)
class MoveRecord:
    turn: int
    move: str
    damage_dealt: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return {"turn": self.turn, "move": self.move, "damageDealt": self.damage_dealt}


@dataclass(frozen=True)
class Combatant:
    id: str                                  # "player1" | "player2"
    name: str
    hp: int = DEFAULTS["hp"]
    max_hp: int = DEFAULTS["hp_max"]
    energy: int = DEFAULTS["energy"]
    max_energy: int = DEFAULTS["energy_max"]
    power_multiplier: float = DEFAULTS["power_multiplier"]
    current_move: Optional[str] = None       # "attack" | "defend" | "powerup" | None
    is_ready: bool = False
    consecutive_attacks: int = 0
    has_attack_buff: bool = False
    move_history: Tuple[MoveRecord, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "hp": self.hp,
            "maxHp": self.max_hp,
            "energy": self.energy,
            "maxEnergy": self.max_energy,
            "powerUpMultiplier": self.power_multiplier,
            "currentMove": self.current_move,
            "isReady": self.is_ready,
            "consecutiveAttacks": self.consecutive_attacks,
            "hasAttackBuff": self.has_attack_buff,
            "moveHistory": [record.to_payload() for record in self.move_history],
        }


@dataclass(frozen=True)
class BattleLogEntry:
    turn: int
    player1_move: str
    player2_move: str
    player1_damage: int                      # damage taken, counter-damage included
    player2_damage: int
    player1_healing: int
    player2_healing: int

    def to_payload(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "player1Move": self.player1_move,
            "player2Move": self.player2_move,
            "player1Damage": self.player1_damage,
            "player2Damage": self.player2_damage,
            "player1Healing": self.player1_healing,
            "player2Healing": self.player2_healing,
        }


@dataclass(frozen=True)
class Match:
    player1: Combatant
    player2: Combatant
    state: str = "lobby"                     # "lobby" | "playing" | "resolving" | "finished"
    current_turn: int = 1
    winner: Optional[str] = None             # a name, "Draw", or None
    battle_log: Tuple[BattleLogEntry, ...] = ()
    match_id: str = field(default="", compare=False)

    def side(self, side_id: str) -> Combatant:
        if side_id == self.player1.id:
            return self.player1
        if side_id == self.player2.id:
            return self.player2
        raise KeyError(f"Unknown side: {side_id}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "matchId": self.match_id,
            "gameState": self.state,
            "currentTurn": self.current_turn,
            "winner": self.winner,
            "player1": self.player1.to_payload(),
            "player2": self.player2.to_payload(),
            "battleLog": [entry.to_payload() for entry in self.battle_log],
        }
