"""Poker betting round legality and state transitions.

This module applies one player action at a time to a table snapshot:
- Checking that the action is legal for the player whose turn it is
- Moving chips for calls, bets, raises and all-ins
- Reopening the action after a full raise
- Closing the betting round and advancing to the next street
- Ending the hand early when only one player is left

The betting rules enforced are:
- A check needs the player's round bet to equal the current bet
- A call puts in what is owed, or the whole stack if that is less
- An opening bet must be at least the big blind
- A raise must add at least the larger of the big blind and the last full
  raise increment
- An all-in short of a full raise changes the amount to call but does not
  reopen the action for players who already acted
- A round closes once every player who can still act has acted and matched
  the current bet

Illegal actions are rejected without touching the snapshot.
"""

from data.enums import NEXT_STAGE, ActionType, GameStage
from data.states.game_state import PokerGameState
from data.states.player_state import PokerPlayer
from data.types.action_decision import ActionDecision
from data.types.action_result import ActionResult
from loggers.betting_logger import BettingLogger
from loggers.table_logger import TableLogger

from .player import commit_chips, reset_for_new_street
from .showdown import award_to_last_player, go_to_showdown
from .table import (
    is_round_complete,
    log_table_state,
    mobile_players,
    next_actor_index,
    players_in_hand,
)


def min_raise_increment(state: PokerGameState) -> int:
    """The smallest amount a bet or raise must add to the current bet."""
    return max(state.big_blind_amount, state.last_raise_amount or 0)


def min_bet_to(state: PokerGameState) -> int:
    """The smallest round-bet total a bet or raise may go to."""
    if state.current_bet == 0:
        return state.big_blind_amount
    return state.current_bet + min_raise_increment(state)


def apply_action(state: PokerGameState, action: ActionDecision) -> ActionResult:
    """Apply the active player's action and move the hand forward.

    Args:
        state: Current snapshot, never modified
        action: The action taken by the player at ``state.active_player_index``

    Returns:
        ActionResult: On success, a new snapshot in which the next player is
            to act, the next street has started, the hand has reached
            showdown, or the hand has been won by the last player left in
            it. On rejection, the original snapshot and the reason.
    """
    player = state.active_player
    if not state.is_betting or player is None:
        return _reject(state, "Nobody", action, "No betting round is in progress.")
    if not player.can_act:
        return _reject(state, player.name, action, f"{player.name} cannot act.")

    reason = _validate(state, player, action)
    if reason:
        return _reject(state, player.name, action, reason)

    BettingLogger.log_player_turn(
        player_name=player.name,
        stack=player.stack,
        round_bet=player.round_bet,
        current_bet=state.current_bet,
        active_players=[p.name for p in state.players if p.in_hand],
        last_raiser=(
            state.player_by_id(state.last_raiser_id).name
            if state.last_raiser_id is not None
            else None
        ),
    )

    new_state = state.copy()
    actor_index = new_state.active_player_index
    actor = new_state.players[actor_index]
    _execute(new_state, actor, action)
    actor.has_acted = True

    log_table_state(new_state.players)

    remaining = players_in_hand(new_state.players)
    if len(remaining) == 1:
        return ActionResult(state=award_to_last_player(new_state, remaining[0]))

    complete, why = is_round_complete(new_state.players, new_state.current_bet)
    if complete:
        BettingLogger.log_round_complete(new_state.game_stage.value, why)
        return ActionResult(state=advance_stage(new_state))

    next_index = next_actor_index(new_state.players, actor_index)
    if next_index is None:
        BettingLogger.log_round_complete(new_state.game_stage.value, "no player can act")
        return ActionResult(state=advance_stage(new_state))

    new_state.active_player_index = next_index
    BettingLogger.log_line_break()
    return ActionResult(state=new_state)


def advance_stage(state: PokerGameState) -> PokerGameState:
    """
    Move to the next street, or to showdown if betting is over.

    Betting is over after the river, or as soon as fewer than two players
    can still put chips in.

    Args:
        state: State to update in place. Callers pass a copy they own.

    Returns:
        PokerGameState: The same state on its new street
    """
    if state.game_stage == GameStage.RIVER or len(mobile_players(state.players)) < 2:
        return go_to_showdown(state)

    old_stage = state.game_stage
    new_stage = NEXT_STAGE[old_stage]
    BettingLogger.log_stage_change(old_stage.value, new_stage.value)
    state.add_message(f"--- Moving to {new_stage.value.title()} ---")

    for player in state.players:
        reset_for_new_street(player)

    state.game_stage = new_stage
    state.current_bet = 0
    state.last_raiser_id = None
    state.last_raise_amount = None
    state.active_player_index = next_actor_index(state.players, state.dealer_button_index)

    TableLogger.log_action_tracking_reset([p.name for p in state.players if p.can_act])

    if state.active_player_index is None:
        return go_to_showdown(state)
    return state


def _validate(state: PokerGameState, player: PokerPlayer, action: ActionDecision) -> str:
    """Return why the action is illegal, or an empty string if it is legal."""
    owed = state.current_bet - player.round_bet

    if action.action_type == ActionType.CHECK:
        if owed > 0:
            return f"Cannot check, there is a bet of {owed} to you."

    elif action.action_type in (ActionType.BET, ActionType.RAISE):
        is_raise = state.current_bet > 0
        if player.has_acted:
            return "Action has not been reopened; you may only call or fold."
        minimum = min_bet_to(state)
        if action.amount < minimum:
            return f"Invalid {'raise' if is_raise else 'bet'}. Must be at least {minimum}."
        if action.amount - player.round_bet > player.stack:
            return "Cannot bet more than your stack."

    elif action.action_type == ActionType.ALL_IN:
        if player.has_acted and player.round_bet + player.stack > state.current_bet:
            return "Action has not been reopened; you may only call or fold."

    return ""


def _execute(state: PokerGameState, player: PokerPlayer, action: ActionDecision) -> None:
    """Apply a validated action to a state copy."""
    action_type = action.action_type

    if action_type == ActionType.FOLD:
        player.in_hand = False
        BettingLogger.log_player_action(player.name, "fold")
        state.add_message(f"{player.name} folds.")

    elif action_type == ActionType.CHECK:
        BettingLogger.log_player_action(player.name, "check")
        state.add_message(f"{player.name} checks.")

    elif action_type == ActionType.CALL:
        owed = state.current_bet - player.round_bet
        paid = commit_chips(player, owed)
        BettingLogger.log_player_action(player.name, "call", paid, player.is_all_in)
        if paid == 0:
            state.add_message(f"{player.name} checks.")
        else:
            state.add_message(f"{player.name} calls {paid}.")

    elif action_type in (ActionType.BET, ActionType.RAISE):
        verb = "raise" if state.current_bet > 0 else "bet"
        commit_chips(player, action.amount - player.round_bet)
        _raise_to(state, player, action.amount)
        BettingLogger.log_player_action(player.name, verb, player.round_bet, player.is_all_in)
        if verb == "raise":
            state.add_message(f"{player.name} raises to {player.round_bet}.")
        else:
            state.add_message(f"{player.name} bets {player.round_bet}.")

    elif action_type == ActionType.ALL_IN:
        commit_chips(player, player.stack)
        BettingLogger.log_player_action(player.name, "all-in", player.round_bet)
        state.add_message(f"{player.name} goes all-in for {player.round_bet}.")

        if player.round_bet > state.current_bet:
            increment = player.round_bet - state.current_bet
            minimum = min_raise_increment(state)
            if increment >= minimum:
                _raise_to(state, player, player.round_bet)
            else:
                BettingLogger.log_short_all_in(player.name, increment, minimum)
                state.current_bet = player.round_bet


def _raise_to(state: PokerGameState, raiser: PokerPlayer, amount: int) -> None:
    """Record a full raise and make every other player act again."""
    increment = amount - state.current_bet
    state.last_raise_amount = increment
    state.current_bet = amount
    state.last_raiser_id = raiser.id

    for other in state.players:
        if other.id != raiser.id:
            other.has_acted = False

    BettingLogger.log_action_reopened(raiser.name, increment)


def _reject(
    state: PokerGameState, player_name: str, action: ActionDecision, reason: str
) -> ActionResult:
    BettingLogger.log_invalid_action(player_name, action.action_type.value, reason)
    return ActionResult.reject(state, reason)
