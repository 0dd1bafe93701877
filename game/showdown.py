from typing import List, Sequence, Union

from data.enums import GameStage
from data.states.game_state import PokerGameState
from data.states.player_state import PokerPlayer
from data.types.action_result import ActionResult
from loggers.pot_logger import PotLogger
from loggers.showdown_logger import ShowdownLogger

from .player import clear_hand
from .pot import calculate_pots, split_pot


def go_to_showdown(state: PokerGameState) -> PokerGameState:
    """
    Close the betting and compute the pots to be awarded.

    Args:
        state: State to update in place. Callers pass a copy they own.

    Returns:
        PokerGameState: The same state, now at showdown with its pots set
            and nobody to act.
    """
    state.pots = calculate_pots(state.players)
    state.game_stage = GameStage.SHOWDOWN
    state.active_player_index = None
    state.add_message("Betting is complete. Calculating final pots for showdown.")

    total = state.get_pot_state().total_pot
    ShowdownLogger.log_showdown_start(len(state.pots), total)
    PotLogger.log_pots_info(state.pots)

    if not state.pots:
        _reset_table(state)
    return state


def award_to_last_player(state: PokerGameState, winner: PokerPlayer) -> PokerGameState:
    """
    Give everything contributed this hand to the only player left in it.

    No side pot computation is needed: nobody else can win any part of it.

    Args:
        state: State to update in place. Callers pass a copy they own.
        winner: The remaining player, taken from ``state.players``

    Returns:
        PokerGameState: The same state, reset for the next hand
    """
    total = state.total_contributed()
    winner.stack += total

    ShowdownLogger.log_single_winner(winner.name, total)
    state.add_message(f"{winner.name} wins {total}. Final Stack: {winner.stack}")

    _reset_table(state)
    return state


def award_pot(
    state: PokerGameState,
    pot_index: int,
    winner_ids: Union[int, Sequence[int]],
) -> ActionResult:
    """
    Pay out one pot to its winner, or split it between tied winners.

    Split pots are divided evenly; odd chips go to the winners nearest the
    first seat. Once the last pot is paid the hand is over and the table
    returns to ``pre-deal``.

    Args:
        state: Current snapshot, left untouched
        pot_index: Index into ``state.pots``
        winner_ids: Id of the winner, or ids of all tied winners

    Returns:
        ActionResult: The new snapshot, or a rejection if the pot does not
            exist or a winner is not eligible for it
    """
    if isinstance(winner_ids, int):
        winner_ids = [winner_ids]
    winner_ids = list(dict.fromkeys(winner_ids))

    if not 0 <= pot_index < len(state.pots):
        reason = f"There is no pot {pot_index + 1} to award."
        ShowdownLogger.log_invalid_award(reason)
        return ActionResult.reject(state, reason)

    pot = state.pots[pot_index]
    if not winner_ids:
        reason = "A pot needs at least one winner."
        ShowdownLogger.log_invalid_award(reason)
        return ActionResult.reject(state, reason)

    ineligible = [pid for pid in winner_ids if pid not in pot.eligible_players]
    if ineligible:
        reason = f"Players {ineligible} are not eligible for pot {pot_index + 1}."
        ShowdownLogger.log_invalid_award(reason)
        return ActionResult.reject(state, reason)

    new_state = state.copy()
    winners: List[PokerPlayer] = [p for p in new_state.players if p.id in winner_ids]
    shares = split_pot(pot.amount, len(winners))
    is_split = len(winners) > 1

    for winner, share in zip(winners, shares):
        winner.stack += share
        ShowdownLogger.log_pot_win(winner.name, share, is_split=is_split)
        new_state.add_message(f"{winner.name} wins a pot of {share}")

    PotLogger.log_pot_awarded(
        pot_index, pot.amount, [(w.name, s) for w, s in zip(winners, shares)]
    )
    new_state.pots = [p for i, p in enumerate(new_state.pots) if i != pot_index]

    if not new_state.pots:
        new_state.add_message("All pots awarded. Hand is over.")
        _reset_table(new_state)

    return ActionResult(state=new_state)


def _reset_table(state: PokerGameState) -> None:
    """Return the table to ``pre-deal``, keeping seats, stacks and the button."""
    for player in state.players:
        clear_hand(player)
    state.pots = []
    state.game_stage = GameStage.PRE_DEAL
    state.current_bet = 0
    state.last_raiser_id = None
    state.last_raise_amount = None
    state.active_player_index = None

    ShowdownLogger.log_hand_over([f"{p.name} ${p.stack}" for p in state.players])
