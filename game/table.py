"""
Turn order and betting-round closure.

These helpers answer two questions about a list of seated players: who acts
next, and whether the current betting round is over. They never change the
players they are given.
"""

from typing import List, Optional, Sequence, Tuple

from data.states.player_state import PokerPlayer
from loggers.table_logger import TableLogger


def next_actor_index(
    players: Sequence[PokerPlayer], from_index: Optional[int]
) -> Optional[int]:
    """Get the seat index of the next player who can act.

    Scans forward circularly from the seat after ``from_index``, skipping
    folded and all-in players. The seat at ``from_index`` itself is checked
    last, after a full circle.

    Args:
        players: Players in seat order
        from_index: Seat to start after. -1 or None starts at seat 0.

    Returns:
        Optional[int]: Seat index of the next actor, or None if nobody can act
    """
    count = len(players)
    if count == 0:
        return None
    start = -1 if from_index is None else from_index

    for offset in range(1, count + 1):
        index = (start + offset) % count
        if players[index].can_act:
            TableLogger.log_next_player(players[index].name, index)
            return index

    TableLogger.log_next_player(None, None)
    return None


def next_seat_with_chips(players: Sequence[PokerPlayer], from_index: int) -> int:
    """Get the next seat after ``from_index`` whose player still has chips.

    Used to move the dealer button and blinds, so busted players are skipped.
    Callers must make sure at least one player has chips.
    """
    count = len(players)
    index = from_index
    for _ in range(count):
        index = (index + 1) % count
        if players[index].stack > 0:
            return index
    raise ValueError("No player has chips")


def is_round_complete(
    players: Sequence[PokerPlayer], current_bet: int
) -> Tuple[bool, str]:
    """Determine if the current betting round is complete.

    A betting round is complete when every in-hand player who is not all-in
    has acted since the action was last opened and matched the current bet.
    If no such player remains the round is complete regardless of bets.

    Returns:
        Tuple[bool, str]: Whether the round is complete, and why
    """
    bettors = [p for p in players if p.can_act]

    if not bettors:
        result = (True, "no player can act")
    elif not all(p.has_acted for p in bettors):
        result = (False, "players still need to act")
    elif not all(p.round_bet == current_bet for p in bettors):
        result = (False, "not all players have called")
    else:
        result = (True, "betting round complete")

    TableLogger.log_round_status(*result)
    return result


def players_in_hand(players: Sequence[PokerPlayer]) -> List[PokerPlayer]:
    """Players dealt in who have not folded, all-in or not."""
    return [p for p in players if p.in_hand]


def mobile_players(players: Sequence[PokerPlayer]) -> List[PokerPlayer]:
    """Players who can still put chips in: in the hand, not all-in, chips behind."""
    return [p for p in players if p.in_hand and not p.is_all_in and p.stack > 0]


def log_table_state(players: Sequence[PokerPlayer]) -> None:
    TableLogger.log_player_states(
        active=[p.name for p in players if p.can_act],
        all_in=[p.name for p in players if p.in_hand and p.is_all_in],
        folded=[p.name for p in players if not p.in_hand],
    )
