"""Teen Patti round bookkeeping.

Tracks the money side of a Teen Patti round played with physical cards:
- Collecting the boot from every player
- Blind play (cards unseen) at the current stake
- Seen play (chaal) at twice the stake
- Paid shows, folds and the last-player-standing win
- Penalties split across the table

Like the poker engine, every operation takes a snapshot and returns an
ActionResult; rejected operations return the snapshot untouched.
"""

from typing import Optional, Sequence

from data.states.player_state import TeenPattiPlayer
from data.states.teen_patti_state import TeenPattiState
from data.types.action_result import ActionResult
from exceptions import PlayerNotFoundError
from loggers.teen_patti_logger import TeenPattiLogger

from .game import format_name


def new_table(players: Sequence[TeenPattiPlayer], max_messages: int = 100) -> TeenPattiState:
    state = TeenPattiState(players=list(players), max_messages=max_messages)
    state.add_message(
        f"New game started with {len(state.players)} players. Please set the boot amount."
    )
    return state


def start_round(
    state: TeenPattiState, starting_player_index: int, boot_amount: int
) -> ActionResult:
    """
    Collect the boot from every player and start a round with everyone blind.

    Args:
        state: Current snapshot
        starting_player_index: Seat index of the first player to act
        boot_amount: Amount each player puts in; becomes the opening stake

    Returns:
        ActionResult: The snapshot with the round under way
    """
    if state.round_active:
        return _reject(state, "A round is already in progress.")
    if len(state.players) < 2:
        return _reject(state, "Need at least two players to start a round.")
    if boot_amount <= 0:
        return _reject(state, "Boot amount must be positive.")
    if not 0 <= starting_player_index < len(state.players):
        return _reject(state, f"No player at seat {starting_player_index}.")

    new_state = state.copy()
    for player in new_state.players:
        player.balance -= boot_amount

    new_state.round_active = True
    new_state.round_contributions = {p.id: boot_amount for p in new_state.players}
    new_state.pot_amount = boot_amount * len(new_state.players)
    new_state.blind_player_ids = {p.id for p in new_state.players}
    new_state.folded_player_ids = set()
    new_state.current_player_index = starting_player_index
    new_state.current_stake = boot_amount
    new_state.last_actor_was_blind = True
    new_state.round_initial_boot_amount = boot_amount

    TeenPattiLogger.log_round_start(
        boot_amount, new_state.pot_amount, [p.name for p in new_state.players]
    )
    new_state.add_message(
        f"Collecting Boot Amount: {boot_amount} from each player. Pot: {new_state.pot_amount}"
    )
    new_state.add_message(
        f"Round started. Stake: {boot_amount}. "
        f"Turn: {new_state.players[starting_player_index].name}"
    )
    return ActionResult(state=new_state)


def play_blind(state: TeenPattiState, amount: int, is_raise: bool = False) -> ActionResult:
    """
    Bet without having seen one's cards.

    A blind play must be at least the stake. A blind raise must be above it
    and becomes the new stake. The turn passes on.
    """
    player = state.current_player
    if player is None:
        return _reject(state, "No round is in progress.")
    if player.id not in state.blind_player_ids:
        return _reject(state, f"{player.name} has seen their cards and cannot play blind.")
    if is_raise and amount <= state.current_stake:
        return _reject(state, f"A blind raise must be more than the stake of {state.current_stake}.")
    if amount < state.current_stake:
        return _reject(state, f"A blind bet must be at least the stake of {state.current_stake}.")

    new_state = state.copy()
    actor = new_state.players[new_state.current_player_index]
    _put_in(new_state, actor, amount)
    if is_raise:
        new_state.current_stake = amount
    new_state.last_actor_was_blind = True

    TeenPattiLogger.log_bet(actor.name, amount, True, new_state.current_stake, new_state.pot_amount)
    if is_raise:
        new_state.add_message(f"{actor.name} raises blind to {amount}.")
    else:
        new_state.add_message(f"{actor.name} plays blind for {amount}.")

    _advance_turn(new_state)
    return ActionResult(state=new_state)


def see_cards(state: TeenPattiState) -> ActionResult:
    """The current player looks at their cards. Their turn continues."""
    player = state.current_player
    if player is None:
        return _reject(state, "No round is in progress.")
    if player.id not in state.blind_player_ids:
        return _reject(state, f"{player.name} has already seen their cards.")

    new_state = state.copy()
    new_state.blind_player_ids.discard(player.id)

    TeenPattiLogger.log_seen(player.name)
    new_state.add_message(f"{player.name} sees their cards.")
    return ActionResult(state=new_state)


def bet_chaal(state: TeenPattiState, amount: int) -> ActionResult:
    """
    Bet as a seen player.

    A chaal must be at least twice the stake. The stake blind players face
    becomes half the chaal (rounded down) when that is higher than the
    current stake.
    """
    player = state.current_player
    if player is None:
        return _reject(state, "No round is in progress.")
    if player.id in state.blind_player_ids:
        return _reject(state, f"{player.name} must see their cards before a chaal.")
    minimum = state.current_stake * 2
    if amount < minimum:
        return _reject(state, f"A chaal must be at least {minimum}.")

    new_state = state.copy()
    actor = new_state.players[new_state.current_player_index]
    _put_in(new_state, actor, amount)

    new_stake = max(new_state.current_stake, amount // 2)
    stake_changed = new_stake > new_state.current_stake
    new_state.current_stake = new_stake
    new_state.last_actor_was_blind = False

    TeenPattiLogger.log_bet(actor.name, amount, False, new_stake, new_state.pot_amount)
    new_state.add_message(f"{actor.name} bets {amount}.")
    if stake_changed:
        new_state.add_message(f"Stake (for blind) updated to {new_stake}.")

    _advance_turn(new_state)
    return ActionResult(state=new_state)


def fold(state: TeenPattiState) -> ActionResult:
    """The current player folds. The last player left wins the pot."""
    player = state.current_player
    if player is None:
        return _reject(state, "No round is in progress.")

    new_state = state.copy()
    new_state.add_message(f"{player.name} folds.")
    return ActionResult(state=_knock_out(new_state, player.id))


def request_show(state: TeenPattiState, cost: int) -> ActionResult:
    """The current player pays for a show. The loser is settled by resolve_show."""
    player = state.current_player
    if player is None:
        return _reject(state, "No round is in progress.")
    if cost <= 0:
        return _reject(state, "A show must cost something.")

    new_state = state.copy()
    actor = new_state.players[new_state.current_player_index]
    _put_in(new_state, actor, cost)

    TeenPattiLogger.log_show(actor.name, cost)
    new_state.add_message(f"{actor.name} pays {cost} for a show.")
    return ActionResult(state=new_state)


def resolve_show(state: TeenPattiState, loser_id: int) -> ActionResult:
    """Fold the player who lost the show."""
    if not state.round_active:
        return _reject(state, "No round is in progress.")
    try:
        loser = state.player_by_id(loser_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))
    if loser_id in state.folded_player_ids:
        return _reject(state, f"{loser.name} has already folded.")

    new_state = state.copy()
    new_state.add_message(f"{loser.name} folds after the Show.")
    return ActionResult(state=_knock_out(new_state, loser_id))


def end_round(state: TeenPattiState, winner_id: Optional[int]) -> ActionResult:
    """
    Pay the pot to the winner and clear the round.

    Passing no winner abandons the pot. The boot of the finished round is
    remembered as a default for the next one.
    """
    if not state.round_active:
        return _reject(state, "No round is in progress.")
    if winner_id is not None:
        try:
            state.player_by_id(winner_id)
        except PlayerNotFoundError as e:
            return _reject(state, str(e))

    new_state = state.copy()
    _finish_round(new_state, winner_id)
    return ActionResult(state=new_state)


def add_player(state: TeenPattiState, name: str, balance: int = 0) -> ActionResult:
    if state.round_active:
        return _reject(state, "Can only add players between rounds.")
    if not name or name.isspace():
        return _reject(state, "Player name cannot be empty.")

    new_state = state.copy()
    new_id = max((p.id for p in new_state.players), default=0) + 1
    player = TeenPattiPlayer(id=new_id, name=format_name(name), balance=balance)
    new_state.players.append(player)
    new_state.add_message(f"Player {player.name} added.")
    return ActionResult(state=new_state)


def remove_player(state: TeenPattiState, player_id: int) -> ActionResult:
    if state.round_active:
        return _reject(state, "Can only remove players between rounds.")
    try:
        player = state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    new_state.players = [p for p in new_state.players if p.id != player_id]
    if new_state.last_winner_id == player_id:
        new_state.last_winner_id = None
    new_state.add_message(f"Player {player.name} removed.")
    return ActionResult(state=new_state)


def reorder_players(state: TeenPattiState, player_ids: Sequence[int]) -> ActionResult:
    """Seat the players in a new order, given as a permutation of their ids."""
    if state.round_active:
        return _reject(state, "Can only reorder players between rounds.")
    if sorted(player_ids) != sorted(p.id for p in state.players):
        return _reject(state, "New order must list every player exactly once.")

    new_state = state.copy()
    by_id = {p.id: p for p in new_state.players}
    new_state.players = [by_id[pid] for pid in player_ids]
    new_state.last_winner_id = None
    new_state.current_player_index = -1
    new_state.add_message("Player order updated.")
    return ActionResult(state=new_state)


def deduct_and_distribute(state: TeenPattiState, player_id: int, amount: int) -> ActionResult:
    """
    Charge a player a penalty and share it among everyone else.

    Each other player receives ``amount // (players - 1)``; any remainder is
    not paid out.
    """
    if len(state.players) < 2:
        return _reject(state, "Cannot distribute with less than two players.")
    if amount <= 0:
        return _reject(state, "Amount to deduct must be positive.")
    try:
        state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    share = amount // (len(new_state.players) - 1)
    for player in new_state.players:
        if player.id == player_id:
            player.balance -= amount
            penalised = player
        else:
            player.balance += share

    TeenPattiLogger.log_penalty(penalised.name, amount, share)
    new_state.add_message(
        f"Deducted {amount} from {penalised.name} and distributed {share} to everyone else."
    )
    return ActionResult(state=new_state)


def _put_in(state: TeenPattiState, player: TeenPattiPlayer, amount: int) -> None:
    player.balance -= amount
    state.pot_amount += amount
    state.round_contributions[player.id] = state.round_contributions.get(player.id, 0) + amount


def _advance_turn(state: TeenPattiState) -> None:
    """Pass the turn to the next player who has not folded."""
    if len(state.active_players()) <= 1:
        return
    index = state.current_player_index
    while True:
        index = (index + 1) % len(state.players)
        if state.players[index].id not in state.folded_player_ids:
            break
    state.current_player_index = index


def _knock_out(state: TeenPattiState, player_id: int) -> TeenPattiState:
    """Fold a player, ending the round if only one is left."""
    state.folded_player_ids.add(player_id)
    remaining = state.active_players()
    TeenPattiLogger.log_fold(state.player_by_id(player_id).name, [p.name for p in remaining])

    if len(remaining) == 1:
        winner = remaining[0]
        state.add_message(f"{winner.name} is the last player remaining and wins!")
        _finish_round(state, winner.id)
    else:
        _advance_turn(state)
    return state


def _finish_round(state: TeenPattiState, winner_id: Optional[int]) -> None:
    if winner_id is not None:
        winner = state.player_by_id(winner_id)
        winner.balance += state.pot_amount
        state.last_winner_id = winner_id
        TeenPattiLogger.log_round_end(winner.name, state.pot_amount)
        state.add_message(f"Congratulations! {winner.name} won the pot of {state.pot_amount}")
    else:
        TeenPattiLogger.log_no_winner(state.pot_amount)
        state.add_message("Round ended with no winner determined.")

    state.round_active = False
    state.current_player_index = -1
    state.pot_amount = 0
    state.current_stake = 0
    state.folded_player_ids = set()
    state.blind_player_ids = set()
    state.round_contributions = {}
    state.last_actor_was_blind = False


def _reject(state: TeenPattiState, reason: str) -> ActionResult:
    TeenPattiLogger.log_rejected(reason)
    return ActionResult.reject(state, reason)
