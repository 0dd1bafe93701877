"""Blackjack bet bookkeeping.

Tracks the money side of a blackjack table dealt with physical cards:
- Per-hand bets between the table minimum and maximum
- Locked bets, which re-bet each player's last bet every round
- Hit, stand, double, split, surrender and insurance on the hand in turn
- Settling each hand as a win, loss, push, bust or blackjack
- A running dealer result, top-ups and players sitting out on a break

Cards are never dealt or scored here; the dealer reports each outcome. As in
the Teen Patti ledger, every operation takes a snapshot and returns an
ActionResult, and rejected operations return the snapshot untouched.
"""

from typing import Iterator, Optional, Sequence, Tuple, Union

from data.enums import (
    HAND_OUTCOMES,
    PAYOUT_RATIOS,
    BlackjackPayout,
    BlackjackStage,
    HandStatus,
)
from data.states.blackjack_state import BlackjackHand, BlackjackPlayer, BlackjackState
from data.types.action_result import ActionResult
from exceptions import PlayerNotFoundError
from game.config import GameConfig
from loggers.blackjack_logger import BlackjackLogger

from .game import format_name


def new_table(
    players: Sequence[Tuple],
    config: Optional[GameConfig] = None,
    allow_surrender: bool = True,
) -> BlackjackState:
    """
    Seat players at a fresh blackjack table with bets locked to the minimum.

    Args:
        players: ``(name, stack)`` pairs in play order, optionally with a
            third item giving how many hands the player plays each round
        config: Bet limits, blackjack payout and message log size
        allow_surrender: Whether late surrender is offered

    Returns:
        BlackjackState: A table in the betting stage with players numbered from 1

    Raises:
        ValueError: If a name is blank, a stack is negative or a hand count
            is below one
    """
    config = config or GameConfig()

    seated = []
    for seat, (name, stack, *hands) in enumerate(players, start=1):
        if not name or name.isspace():
            raise ValueError("Player name cannot be empty or whitespace")
        if stack < 0:
            raise ValueError("Cannot seat a player with a negative stack")
        hands_per_round = hands[0] if hands else 1
        if hands_per_round < 1:
            raise ValueError("A player must play at least one hand")
        seated.append(
            BlackjackPlayer(
                id=seat,
                name=format_name(name),
                stack=stack,
                total_buy_in=stack,
                hands_per_round=hands_per_round,
                last_bet=config.min_bet,
            )
        )

    state = BlackjackState(
        players=seated,
        min_bet=config.min_bet,
        max_bet=config.max_bet,
        blackjack_payout=BlackjackPayout(config.blackjack_payout),
        allow_surrender=allow_surrender,
        max_messages=config.max_messages,
    )
    state.add_message(
        f"Game setup with {len(seated)} players. Bets are locked to {config.min_bet}."
    )
    return state


def unlock_bets(state: BlackjackState) -> ActionResult:
    """Refund any bets and give each player empty hands to bet on."""
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "Can only change bets between rounds.")

    new_state = state.copy()
    for player in new_state.players:
        _refund_bets(player)
        if not player.on_break:
            player.hands = _empty_hands(player)
    new_state.bets_locked = False
    new_state.add_message("Bets unlocked. Place new bets for all active hands.")
    return ActionResult(state=new_state)


def place_bet(state: BlackjackState, player_id: int, hand_index: int, amount: int) -> ActionResult:
    """
    Put a bet on one of a player's hands, replacing any bet already there.

    Bets can only be placed between rounds once bets are unlocked, and must
    lie between the table minimum and maximum.
    """
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "Can only place bets before the deal.")
    if state.bets_locked:
        return _reject(state, "Bets are locked. Unlock them to change bets.")
    if not state.min_bet <= amount <= state.max_bet:
        return _reject(state, f"Bet must be between {state.min_bet} and {state.max_bet}.")
    try:
        player = state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))
    if player.on_break:
        return _reject(state, f"{player.name} is on a break.")
    if not 0 <= hand_index < len(player.hands):
        return _reject(state, f"{player.name} has no hand {hand_index + 1}.")
    available = player.stack + player.hands[hand_index].bet
    if available < amount:
        return _reject(state, f"{player.name} does not have enough chips.")

    new_state = state.copy()
    bettor = new_state.player_by_id(player_id)
    bettor.stack = available - amount
    bettor.hands[hand_index].bet = amount

    BlackjackLogger.log_bet(bettor.name, hand_index + 1, amount, bettor.stack)
    new_state.add_message(f"{bettor.name} bets {amount} on hand {hand_index + 1}.")
    return ActionResult(state=new_state)


def start_round(state: BlackjackState) -> ActionResult:
    """
    Take the bets and hand the turn to the first hand.

    With bets locked, each player re-bets their last bet on every hand they
    play, for as many hands as their stack covers. With bets unlocked, every
    hand of every player not on a break must already carry a bet. Betting is
    locked again once the round starts.
    """
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "A round is already in progress.")

    new_state = state.copy()
    active = [p for p in new_state.players if not p.on_break]

    if new_state.bets_locked:
        for player in active:
            bet = player.last_bet or new_state.min_bet
            player.hands = []
            for _ in range(player.hands_per_round):
                if player.stack < bet:
                    break
                player.stack -= bet
                player.hands.append(BlackjackHand(bet=bet))
            if not player.hands:
                new_state.add_message(f"{player.name} has insufficient chips to play.")
        if not any(p.hands for p in active):
            return _reject(state, "No player had enough chips to re-bet. Round not started.")
    else:
        hands = [hand for p in active for hand in p.hands]
        bet_on = [hand for hand in hands if hand.bet > 0]
        if not bet_on:
            return _reject(state, "Place a bet on at least one hand to start.")
        if len(bet_on) < len(hands):
            return _reject(state, f"Place bets on all {len(hands)} active hands.")

    for player in new_state.players:
        if player.on_break:
            new_state.add_message(f"{player.name} is on a break.")

    new_state.stage = BlackjackStage.PLAYER_TURN
    new_state.bets_locked = True
    new_state.current_player_id = None
    new_state.current_hand_index = None

    BlackjackLogger.log_round_start(
        {
            f"{player.name} hand {index + 1}": hand.bet
            for player, index, hand in _hands_in_play_order(new_state)
        },
        auto_bet=state.bets_locked,
    )
    new_state.add_message("--- NEW ROUND ---")
    _advance_turn(new_state)
    return ActionResult(state=new_state)


def hit(state: BlackjackState) -> ActionResult:
    """The hand in turn takes a card. It keeps the turn."""
    reason = _check_turn(state)
    if reason:
        return _reject(state, reason)

    new_state = state.copy()
    player, hand = new_state.current_player, new_state.current_hand
    hand.has_hit = True
    _log_action(new_state, player, "hits")
    return ActionResult(state=new_state)


def stand(state: BlackjackState) -> ActionResult:
    reason = _check_turn(state)
    if reason:
        return _reject(state, reason)

    new_state = state.copy()
    player, hand = new_state.current_player, new_state.current_hand
    hand.status = HandStatus.STAND
    _log_action(new_state, player, "stands")
    _advance_turn(new_state)
    return ActionResult(state=new_state)


def double_down(state: BlackjackState) -> ActionResult:
    """Double the bet, take one card and stand."""
    reason = _check_turn(state)
    if reason:
        return _reject(state, reason)
    player, hand = state.current_player, state.current_hand
    if hand.has_hit:
        return _reject(state, "Cannot double down after hitting.")
    if player.stack < hand.bet:
        return _reject(state, "Not enough chips to double down.")

    new_state = state.copy()
    player, hand = new_state.current_player, new_state.current_hand
    player.stack -= hand.bet
    hand.bet *= 2
    hand.is_doubled = True
    hand.status = HandStatus.STAND
    _log_action(new_state, player, "doubles down")
    _advance_turn(new_state)
    return ActionResult(state=new_state)


def split(state: BlackjackState) -> ActionResult:
    """
    Split the hand in turn into two, each carrying the original bet.

    The new hand is played straight after the one it came from. The turn
    stays on the first of the two.
    """
    reason = _check_turn(state)
    if reason:
        return _reject(state, reason)
    player, hand = state.current_player, state.current_hand
    if hand.has_hit:
        return _reject(state, "Cannot split after hitting.")
    if player.stack < hand.bet:
        return _reject(state, "Not enough chips to split.")

    new_state = state.copy()
    player, hand = new_state.current_player, new_state.current_hand
    player.stack -= hand.bet
    hand.is_split = True
    player.hands.insert(
        new_state.current_hand_index + 1, BlackjackHand(bet=hand.bet, is_split=True)
    )
    _log_action(new_state, player, "splits")
    return ActionResult(state=new_state)


def surrender(state: BlackjackState) -> ActionResult:
    """
    Give up the hand for half the bet back.

    The dealer keeps the other half. Late surrender comes after the dealer
    has checked for blackjack, so any insurance on the hand is lost.
    """
    reason = _check_turn(state)
    if reason:
        return _reject(state, reason)
    hand = state.current_hand
    if not state.allow_surrender:
        return _reject(state, "Surrender is not allowed.")
    if hand.has_hit:
        return _reject(state, "Cannot surrender after hitting.")

    new_state = state.copy()
    player, hand = new_state.current_player, new_state.current_hand
    refund = hand.bet / 2
    player.stack += refund
    hand.net = -refund - hand.insurance
    hand.status = HandStatus.SURRENDERED
    new_state.dealer_net -= hand.net
    _log_action(new_state, player, "surrenders")
    _advance_turn(new_state)
    _finish_round_if_settled(new_state)
    return ActionResult(state=new_state)


def take_insurance(state: BlackjackState) -> ActionResult:
    """
    Insure the hand in turn for half its bet against a dealer blackjack.

    The side bet is settled with the hand: it pays 2:1 if the dealer had
    blackjack and is lost otherwise.
    """
    reason = _check_turn(state)
    if reason:
        return _reject(state, reason)
    player, hand = state.current_player, state.current_hand
    if hand.has_hit:
        return _reject(state, "Insurance is only offered before hitting.")
    if hand.insurance:
        return _reject(state, "Insurance already taken on this hand.")
    amount = hand.bet // 2
    if amount == 0:
        return _reject(state, "Bet is too small to insure.")
    if player.stack < amount:
        return _reject(state, "Not enough chips for insurance.")

    new_state = state.copy()
    player, hand = new_state.current_player, new_state.current_hand
    player.stack -= amount
    hand.insurance = amount
    _log_action(new_state, player, f"takes insurance for {amount}")
    return ActionResult(state=new_state)


def settle_hand(
    state: BlackjackState,
    player_id: int,
    hand_index: int,
    outcome: Union[HandStatus, str],
    dealer_blackjack: bool = False,
) -> ActionResult:
    """
    Pay out or collect one hand as the dealer reports it.

    A win pays even money and a blackjack pays the table's 3:2 or 6:5. A
    push returns the bet; a loss or bust leaves it with the dealer. Insurance
    on the hand pays 2:1 when ``dealer_blackjack`` is set and is lost
    otherwise. Hands can be settled out of turn, such as a natural paid at
    once. The round ends when the last hand is settled.

    Args:
        state: Current snapshot
        player_id: Owner of the hand
        hand_index: Index of the hand among the player's hands
        outcome: One of win, lose, push, blackjack or busted
        dealer_blackjack: Whether the dealer turned up a blackjack

    Returns:
        ActionResult: The snapshot with the hand settled
    """
    if state.stage == BlackjackStage.BETTING:
        return _reject(state, "No round is in progress.")
    try:
        outcome = HandStatus(outcome)
    except ValueError:
        return _reject(state, f"Unknown outcome {outcome!r}.")
    if outcome not in HAND_OUTCOMES:
        return _reject(state, f"Cannot settle a hand as {outcome.value}.")
    try:
        player = state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))
    if not 0 <= hand_index < len(player.hands):
        return _reject(state, f"{player.name} has no hand {hand_index + 1}.")
    if player.hands[hand_index].is_settled:
        return _reject(state, f"{player.name}'s hand {hand_index + 1} is already settled.")

    new_state = state.copy()
    player = new_state.player_by_id(player_id)
    hand = player.hands[hand_index]

    bet = hand.bet
    if outcome == HandStatus.BLACKJACK:
        numerator, denominator = PAYOUT_RATIOS[new_state.blackjack_payout]
        winnings = bet * numerator / denominator
    elif outcome == HandStatus.WIN:
        winnings = bet
    elif outcome == HandStatus.PUSH:
        winnings = 0
    else:
        winnings = -bet
    player.stack += bet + winnings

    insurance_net = 0
    if hand.insurance:
        if dealer_blackjack:
            insurance_net = hand.insurance * 2
            player.stack += hand.insurance * 3
        else:
            insurance_net = -hand.insurance

    hand.status = outcome
    hand.net = winnings + insurance_net
    new_state.dealer_net -= hand.net

    BlackjackLogger.log_settled(
        player.name, hand_index + 1, outcome.value, hand.net, new_state.dealer_net
    )
    new_state.add_message(_settle_message(player.name, hand_index + 1, outcome, bet, winnings))
    if hand.insurance:
        if dealer_blackjack:
            new_state.add_message(f"Insurance pays {_chips(insurance_net)}.")
        else:
            new_state.add_message(f"Insurance of {hand.insurance} is lost.")

    if new_state.current_player_id == player_id and new_state.current_hand_index == hand_index:
        _advance_turn(new_state)
    _finish_round_if_settled(new_state)
    return ActionResult(state=new_state)


def add_player(state: BlackjackState, name: str, stack: int, hands_per_round: int = 1) -> ActionResult:
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "Can only add players between rounds.")
    if not name or name.isspace():
        return _reject(state, "Player name cannot be empty.")
    if stack < 0:
        return _reject(state, "Stack cannot be negative.")
    if hands_per_round < 1:
        return _reject(state, "A player must play at least one hand.")

    new_state = state.copy()
    new_id = max((p.id for p in new_state.players), default=0) + 1
    player = BlackjackPlayer(
        id=new_id,
        name=format_name(name),
        stack=stack,
        total_buy_in=stack,
        hands_per_round=hands_per_round,
        last_bet=new_state.min_bet,
    )
    if not new_state.bets_locked:
        player.hands = _empty_hands(player)
    new_state.players.append(player)
    new_state.add_message(f"Player {player.name} has been added with a buy-in of {stack}.")
    return ActionResult(state=new_state)


def remove_player(state: BlackjackState, player_id: int) -> ActionResult:
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "Can only remove players between rounds.")
    try:
        player = state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    new_state.players = [p for p in new_state.players if p.id != player_id]
    new_state.add_message(f"Player {player.name} has been removed.")
    return ActionResult(state=new_state)


def add_chips(state: BlackjackState, player_id: int, amount: int) -> ActionResult:
    """Top up a player between rounds. The top-up counts towards their buy-in."""
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "Can only add chips between rounds.")
    if amount <= 0:
        return _reject(state, "Amount must be positive.")
    try:
        state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    player = new_state.player_by_id(player_id)
    player.stack += amount
    player.total_buy_in += amount

    BlackjackLogger.log_chips_added(player.name, amount, player.total_buy_in)
    new_state.add_message(
        f"Added {amount} to {player.name}'s stack. "
        f"Total buy-in: {_chips(player.total_buy_in)}."
    )
    return ActionResult(state=new_state)


def toggle_break(state: BlackjackState, player_id: int) -> ActionResult:
    """Send a player on a break, refunding any bets, or bring them back."""
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "Can only take a break between rounds.")
    try:
        state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    player = new_state.player_by_id(player_id)
    player.on_break = not player.on_break
    _refund_bets(player)
    if not player.on_break and not new_state.bets_locked:
        player.hands = _empty_hands(player)
    new_state.add_message(
        f"{player.name} is now {'on a break' if player.on_break else 'back'}."
    )
    return ActionResult(state=new_state)


def set_hand_count(state: BlackjackState, player_id: int, hands_per_round: int) -> ActionResult:
    if state.stage != BlackjackStage.BETTING:
        return _reject(state, "Can only change hand count between rounds.")
    if hands_per_round < 1:
        return _reject(state, "A player must play at least one hand.")
    try:
        state.player_by_id(player_id)
    except PlayerNotFoundError as e:
        return _reject(state, str(e))

    new_state = state.copy()
    player = new_state.player_by_id(player_id)
    player.hands_per_round = hands_per_round
    if not new_state.bets_locked and not player.on_break:
        _refund_bets(player)
        player.hands = _empty_hands(player)
    new_state.add_message(f"{player.name} will now play {hands_per_round} hand(s) per round.")
    return ActionResult(state=new_state)


def _check_turn(state: BlackjackState) -> Optional[str]:
    hand = state.current_hand
    if hand is None or hand.status != HandStatus.PLAYING:
        return "No hand is being played."
    return None


def _hands_in_play_order(state: BlackjackState) -> Iterator[Tuple[BlackjackPlayer, int, BlackjackHand]]:
    for player in state.players:
        if player.on_break:
            continue
        for index, hand in enumerate(player.hands):
            yield player, index, hand


def _advance_turn(state: BlackjackState) -> None:
    """Pass the turn to the next hand still being played, or to the dealer."""
    seats = list(_hands_in_play_order(state))
    start = 0
    for position, (player, index, _) in enumerate(seats):
        if player.id == state.current_player_id and index == state.current_hand_index:
            start = position + 1
            break

    for player, index, hand in seats[start:]:
        if hand.status == HandStatus.PLAYING:
            state.current_player_id = player.id
            state.current_hand_index = index
            state.add_message(f"Turn: {player.name}, hand {index + 1}")
            return

    state.current_player_id = None
    state.current_hand_index = None
    state.stage = BlackjackStage.DEALER_TURN
    BlackjackLogger.log_dealer_turn()
    state.add_message("All players have acted. Dealer's turn. Settle all hands.")


def _finish_round_if_settled(state: BlackjackState) -> None:
    """Close the round once every hand has been settled.

    Each player's last bet is remembered from their last hand, before any
    double, for the next locked round.
    """
    if state.stage == BlackjackStage.BETTING or not state.all_hands_settled():
        return

    results = {}
    for player in state.players:
        if player.hands:
            results[player.name] = sum(hand.net for hand in player.hands)
            player.last_bet = player.hands[-1].placed_bet
        player.hands = []

    state.stage = BlackjackStage.BETTING
    state.current_player_id = None
    state.current_hand_index = None
    state.bets_locked = True

    BlackjackLogger.log_round_over(results, state.dealer_net)
    state.add_message("--- ROUND OVER ---")
    state.add_message("Bets locked to last amount. Unlock them to change bets.")


def _refund_bets(player: BlackjackPlayer) -> None:
    player.stack += sum(hand.bet for hand in player.hands)
    player.hands = []


def _empty_hands(player: BlackjackPlayer):
    return [BlackjackHand() for _ in range(player.hands_per_round)]


def _log_action(state: BlackjackState, player: BlackjackPlayer, action: str) -> None:
    hand_number = state.current_hand_index + 1
    BlackjackLogger.log_hand_action(player.name, hand_number, action, state.current_hand.bet)
    state.add_message(f"{player.name} (hand {hand_number}) {action}.")


def _settle_message(name: str, hand_number: int, outcome: HandStatus, bet: int, winnings: float) -> str:
    label = f"{name} (hand {hand_number})"
    if outcome == HandStatus.BLACKJACK:
        return f"{label} has BLACKJACK! Wins {_chips(winnings)}."
    if outcome == HandStatus.WIN:
        return f"{label} wins {_chips(winnings)}."
    if outcome == HandStatus.PUSH:
        return f"{label} pushes."
    if outcome == HandStatus.BUSTED:
        return f"{label} busted and loses {bet}."
    return f"{label} loses {bet}."


def _chips(amount: float) -> Union[int, float]:
    """Show whole amounts without a trailing .0."""
    return int(amount) if float(amount).is_integer() else round(amount, 2)


def _reject(state: BlackjackState, reason: str) -> ActionResult:
    BlackjackLogger.log_rejected(reason)
    return ActionResult.reject(state, reason)
