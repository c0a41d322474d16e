# realm_rush/engine/match.py
import logging
from dataclasses import replace
from typing import Callable, Optional

from .models import Match, Combatant, MoveRejected
from .mirror import MatchMirror, publish
from .resolver import ready_to_resolve, begin_resolution, resolve_turn
from ..content.balance import MOVES, SIDES

LOGGER = logging.getLogger(__name__)

ResolvingHook = Callable[[Match], None]


def new_combatant(side_id: str, name: str) -> Combatant:
    return Combatant(id=side_id, name=name)


def new_match(match_id: str = "") -> Match:
    """Fresh lobby snapshot with default combatants."""
    return Match(
        player1=new_combatant(SIDES[0], "Player 1"),
        player2=new_combatant(SIDES[1], "Player 2"),
        match_id=match_id,
    )


def start_match(
    name1: str,
    name2: str,
    match_id: str = "",
    mirror: Optional[MatchMirror] = None,
) -> Match:
    match = Match(
        player1=new_combatant(SIDES[0], name1),
        player2=new_combatant(SIDES[1], name2),
        state="playing",
        match_id=match_id,
    )
    LOGGER.info("Match %s started: %s vs %s", match_id or "-", name1, name2)
    publish(mirror, match)
    return match


def reset_match(match_id: str = "", mirror: Optional[MatchMirror] = None) -> Match:
    match = new_match(match_id)
    publish(mirror, match)
    return match


def select_move(
    match: Match,
    side: str,
    move: Optional[str],
    mirror: Optional[MatchMirror] = None,
    on_resolving: Optional[ResolvingHook] = None,
) -> Match:
    """
    Records one side's move. Once both sides are ready the turn is resolved
    right away and the resolved snapshot is returned.
    Raises MoveRejected without touching the match if the move can't be taken.
    """
    if match.state != "playing":
        raise MoveRejected(f"Match is {match.state}; moves are not being collected.")
    if side not in SIDES:
        raise MoveRejected(f"Unknown side {side!r}.")
    if move not in MOVES:
        raise MoveRejected(f"Unknown move {move!r}.")
    ps = match.side(side)
    if ps.is_ready:
        raise MoveRejected(f"{ps.name} already chose a move this turn.")

    chosen = replace(ps, current_move=move, is_ready=True)
    if side == SIDES[0]:
        match = replace(match, player1=chosen)
    else:
        match = replace(match, player2=chosen)

    if not ready_to_resolve(match):
        return match

    resolving = begin_resolution(match)
    if on_resolving is not None:
        on_resolving(resolving)
    resolved = resolve_turn(resolving)
    publish(mirror, resolved)
    return resolved
