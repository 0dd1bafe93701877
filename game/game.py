from typing import Optional, Sequence, Tuple, Union

from data.enums import ActionType, GameStage
from data.states.game_state import PokerGameState
from data.states.player_state import PokerPlayer
from data.types.action_decision import ActionDecision
from data.types.action_result import ActionResult
from exceptions import PlayerNotFoundError
from game.config import GameConfig
from loggers.betting_logger import BettingLogger
from loggers.game_logger import GameLogger
from loggers.player_logger import PlayerLogger
from loggers.table_logger import TableLogger

from . import betting, showdown
from .player import commit_chips, reset_for_new_hand
from .table import next_actor_index, next_seat_with_chips


def format_name(name: str) -> str:
    return " ".join(part.capitalize() for part in name.split())


def setup_game(
    players: Sequence[Tuple[str, int]],
    small_blind: Optional[int] = None,
    big_blind: Optional[int] = None,
    config: Optional[GameConfig] = None,
) -> PokerGameState:
    """
    Seat players at a fresh table.

    Args:
        players: ``(name, stack)`` pairs in seat order
        small_blind: Small blind, defaults to the config value
        big_blind: Big blind, defaults to the config value
        config: Table defaults; a default GameConfig if omitted

    Returns:
        PokerGameState: A table at ``pre-deal`` with players numbered from 1

    Raises:
        ValueError: If a name is blank, a stack is negative or the blinds are invalid
    """
    config = config or GameConfig()
    small_blind = config.small_blind if small_blind is None else small_blind
    big_blind = config.big_blind if big_blind is None else big_blind
    if small_blind <= 0 or big_blind <= 0:
        raise ValueError("Blinds must be positive")

    seated = []
    for seat, (name, stack) in enumerate(players, start=1):
        if not name or name.isspace():
            raise ValueError("Player name cannot be empty or whitespace")
        if stack < 0:
            raise ValueError("Cannot seat a player with a negative stack")
        seated.append(
            PokerPlayer(id=seat, name=format_name(name), stack=stack, total_buy_in=stack)
        )
        PlayerLogger.log_player_seated(format_name(name), stack)

    GameLogger.log_game_config([p.name for p in seated], small_blind, big_blind)

    state = PokerGameState(
        players=seated,
        small_blind_amount=small_blind,
        big_blind_amount=big_blind,
        max_messages=config.max_messages,
    )
    state.add_message(
        f"Game setup with {len(seated)} players. Blinds are {small_blind}/{big_blind}."
    )
    return state


def start_new_hand(state: PokerGameState) -> ActionResult:
    """
    Move the button, post the blinds and hand the action to the first player.

    The button and both blinds move to the next players who still have
    chips. Heads-up, the dealer posts the small blind. Short stacks post what
    they have and are all-in. The current bet is the full big blind even if
    the big blind was posted short.

    Returns:
        ActionResult: The new snapshot at ``pre-flop`` (or straight at
            showdown when nobody can act), or a rejection if a hand is in
            progress or fewer than two players have chips
    """
    if state.game_stage != GameStage.PRE_DEAL:
        return _reject(state, "A hand is already in progress.")
    if sum(1 for p in state.players if p.stack > 0) < 2:
        return _reject(state, "Not enough players with stacks to start a hand.")

    new_state = state.copy()
    players = new_state.players

    dealer_index = next_seat_with_chips(players, new_state.dealer_button_index)
    if sum(1 for p in players if p.stack > 0) == 2:
        small_blind_index = dealer_index
    else:
        small_blind_index = next_seat_with_chips(players, dealer_index)
    big_blind_index = next_seat_with_chips(players, small_blind_index)

    for player in players:
        reset_for_new_hand(player)

    GameLogger.log_hand_header(players[dealer_index].name)
    GameLogger.log_chip_counts({p.name: p.stack for p in players}, "Starting stacks")
    TableLogger.log_dealer_position(dealer_index, players[dealer_index].name)
    new_state.add_message(f"--- New Hand Started. Dealer: {players[dealer_index].name} ---")

    for index, blind, amount in (
        (small_blind_index, "small blind", new_state.small_blind_amount),
        (big_blind_index, "big blind", new_state.big_blind_amount),
    ):
        poster = players[index]
        posted = commit_chips(poster, amount)
        BettingLogger.log_blind(poster.name, blind, amount, posted)
        new_state.add_message(f"{poster.name} posts {blind} of {posted}.")

    new_state.game_stage = GameStage.PRE_FLOP
    new_state.pots = []
    new_state.current_bet = new_state.big_blind_amount
    new_state.last_raise_amount = new_state.big_blind_amount
    new_state.last_raiser_id = None
    new_state.dealer_button_index = dealer_index
    new_state.small_blind_index = small_blind_index
    new_state.big_blind_index = big_blind_index
    new_state.active_player_index = next_actor_index(players, big_blind_index)

    GameLogger.log_table_positions(
        {
            "Dealer": players[dealer_index].name,
            "Small blind": players[small_blind_index].name,
            "Big blind": players[big_blind_index].name,
        }
    )

    if new_state.active_player_index is None:
        showdown.go_to_showdown(new_state)
    return ActionResult(state=new_state)


def add_player(state: PokerGameState, name: str, stack: int) -> ActionResult:
    """Seat a new player between hands. Their id is one above the highest id."""
    if state.game_stage != GameStage.PRE_DEAL:
        return _reject(state, "Can only add players between hands.")
    if not name or name.isspace():
        return _reject(state, "Player name cannot be empty.")
    if stack < 0:
        return _reject(state, "Stack cannot be negative.")

    new_state = state.copy()
    new_id = max((p.id for p in new_state.players), default=0) + 1
    player = PokerPlayer(id=new_id, name=format_name(name), stack=stack, total_buy_in=stack)
    new_state.players.append(player)

    PlayerLogger.log_player_seated(player.name, stack)
    new_state.add_message(f"Player {player.name} has been added to the game.")
    return ActionResult(state=new_state)


def remove_player(state: PokerGameState, player_id: int) -> ActionResult:
    """Unseat a player between hands, keeping the button on the same rotation."""
    if state.game_stage != GameStage.PRE_DEAL:
        return _reject(state, "Can only remove players between hands.")
    try:
        state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    index = next(i for i, p in enumerate(new_state.players) if p.id == player_id)
    removed = new_state.players.pop(index)
    if index <= new_state.dealer_button_index:
        new_state.dealer_button_index -= 1

    GameLogger.log_player_removed(removed.name)
    new_state.add_message(f"Player {removed.name} has been removed.")
    return ActionResult(state=new_state)


def add_chips(state: PokerGameState, player_id: int, amount: int) -> ActionResult:
    """Top up a player's stack between hands. Counts toward their buy-in."""
    if amount <= 0:
        return _reject(state, "Amount to add must be positive.")
    if state.game_stage != GameStage.PRE_DEAL:
        return _reject(state, "Can only add chips between hands.")
    try:
        state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    player = new_state.player_by_id(player_id)
    player.stack += amount
    player.total_buy_in += amount

    GameLogger.log_chips_added(player.name, amount, player.stack)
    new_state.add_message(f"Added {amount} chips to {player.name}.")
    return ActionResult(state=new_state)


def _reject(state: PokerGameState, reason: str) -> ActionResult:
    GameLogger.log_rejected(reason)
    return ActionResult.reject(state, reason)


class PokerGame:
    """
    Holds the current snapshot of a tracked poker table.

    Each method runs one transition and keeps the resulting snapshot only if
    the transition was accepted, so the object always holds a legal state.

    Attributes:
        state (PokerGameState): Current snapshot
        config (GameConfig): Table defaults

    Example:
        >>> game = PokerGame([("alice", 1000), ("bob", 1000), ("carol", 1000)])
        >>> game.start_new_hand()
        >>> game.act("call")
    """

    state: PokerGameState
    config: GameConfig

    def __init__(
        self,
        players: Optional[Sequence[Tuple[str, int]]] = None,
        config: Optional[GameConfig] = None,
        state: Optional[PokerGameState] = None,
    ) -> None:
        """Seat a new table, or resume one from a saved snapshot.

        Args:
            players: (name, stack) pairs for a new table
            config: Table defaults
            state: Snapshot to resume. Takes the place of ``players``.

        Raises:
            ValueError: If neither is given, both are given, or fewer than
                2 players are seated
        """
        if (players is None) == (state is None):
            raise ValueError("Provide either players or a saved state")
        self.config = config or GameConfig()
        if state is not None:
            self.state = state
            return
        if len(players) < 2:
            raise ValueError("Must provide at least 2 players")
        self.state = setup_game(players, config=self.config)

    @classmethod
    def from_state(cls, state: PokerGameState, config: Optional[GameConfig] = None) -> "PokerGame":
        return cls(config=config, state=state)

    def _keep(self, result: ActionResult) -> ActionResult:
        if result.accepted:
            self.state = result.state
        return result

    def start_new_hand(self) -> ActionResult:
        return self._keep(start_new_hand(self.state))

    def act(self, action: Union[ActionType, str], amount: Optional[int] = None) -> ActionResult:
        """Apply an action for the player whose turn it is.

        Unknown actions, and bets or raises without an amount, are rejected
        like any other illegal action.
        """
        try:
            decision = ActionDecision(action_type=action, amount=amount)
        except ValueError as e:
            return _reject(self.state, f"Invalid action {action!r}: {e}")
        return self._keep(betting.apply_action(self.state, decision))

    def award_pot(self, pot_index: int, winner_ids: Union[int, Sequence[int]]) -> ActionResult:
        return self._keep(showdown.award_pot(self.state, pot_index, winner_ids))

    def add_player(self, name: str, stack: Optional[int] = None) -> ActionResult:
        stack = self.config.starting_stack if stack is None else stack
        return self._keep(add_player(self.state, name, stack))

    def remove_player(self, player_id: int) -> ActionResult:
        return self._keep(remove_player(self.state, player_id))

    def add_chips(self, player_id: int, amount: int) -> ActionResult:
        return self._keep(add_chips(self.state, player_id, amount))
