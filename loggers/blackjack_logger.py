import logging
from typing import Dict

logger = logging.getLogger(__name__)


class BlackjackLogger:
    """Handles all logging operations for blackjack rounds."""

    @staticmethod
    def log_round_start(bets: Dict[str, int], auto_bet: bool) -> None:
        """Log the bets on every hand dealt into a new round."""
        source = "re-bet from last round" if auto_bet else "placed"
        logger.info(f"\n=== Blackjack round: {sum(bets.values())} bet ({source}) ===")
        for name, amount in bets.items():
            logger.info(f"  {name}: ${amount}")

    @staticmethod
    def log_bet(player_name: str, hand_number: int, amount: int, stack: float) -> None:
        logger.debug(f"{player_name} bets ${amount} on hand {hand_number} (stack ${stack})")

    @staticmethod
    def log_hand_action(player_name: str, hand_number: int, action: str, bet: int) -> None:
        logger.info(f"{player_name} hand {hand_number}: {action} (bet ${bet})")

    @staticmethod
    def log_dealer_turn() -> None:
        logger.info("All hands played; dealer to settle")

    @staticmethod
    def log_settled(
        player_name: str, hand_number: int, outcome: str, net: float, dealer_net: float
    ) -> None:
        logger.info(
            f"{player_name} hand {hand_number} settled as {outcome}: "
            f"{net:+g} (dealer net ${dealer_net:g})"
        )

    @staticmethod
    def log_round_over(results: Dict[str, float], dealer_net: float) -> None:
        logger.info("\n=== Blackjack round over ===")
        for name, net in results.items():
            logger.info(f"  {name}: {net:+g}")
        logger.info(f"  Dealer net: ${dealer_net:g}")

    @staticmethod
    def log_chips_added(player_name: str, amount: int, total_buy_in: float) -> None:
        logger.info(f"Added ${amount} to {player_name}; total buy-in ${total_buy_in:g}")

    @staticmethod
    def log_rejected(reason: str) -> None:
        logger.info(f"Blackjack action rejected: {reason}")
