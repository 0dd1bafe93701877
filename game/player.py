from data.states.player_state import PokerPlayer
from loggers.player_logger import PlayerLogger


def commit_chips(player: PokerPlayer, amount: int) -> int:
    """
    Move chips from a player's stack into their round bet and hand contribution.

    The amount is capped at the player's stack. A player left with no chips
    is flagged all-in.

    Args:
        player: Player to update in place (callers pass a copy)
        amount: Chips to move. Must be non-negative.

    Returns:
        int: Chips actually moved

    Raises:
        ValueError: If amount is negative
    """
    if amount < 0:
        raise ValueError("Cannot commit a negative amount")

    amount = min(amount, player.stack)
    player.stack -= amount
    player.round_bet += amount
    player.total_pot_contribution += amount

    PlayerLogger.log_chips_committed(player.name, amount, player.round_bet, player.stack)

    if player.stack == 0 and player.in_hand and not player.is_all_in:
        player.is_all_in = True
        PlayerLogger.log_all_in(player.name, player.round_bet)
    return amount


def reset_for_new_street(player: PokerPlayer) -> None:
    """Clear the round bet and acted flag before the next street."""
    previous_bet = player.round_bet
    player.round_bet = 0
    player.has_acted = False
    PlayerLogger.log_state_reset(player.name, previous_bet, "new street")


def reset_for_new_hand(player: PokerPlayer) -> None:
    """Clear all per-hand state. Players with chips are dealt in."""
    player.in_hand = player.stack > 0
    player.is_all_in = False
    player.round_bet = 0
    player.total_pot_contribution = 0
    player.has_acted = False
    PlayerLogger.log_state_reset(player.name, context="new hand")


def clear_hand(player: PokerPlayer) -> None:
    """Take the player out of hand bookkeeping once the hand is over."""
    player.in_hand = False
    player.is_all_in = False
    player.round_bet = 0
    player.total_pot_contribution = 0
    player.has_acted = False
