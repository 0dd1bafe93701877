import logging
from typing import Optional

logger = logging.getLogger(__name__)


class PlayerLogger:
    """Handles all logging operations for player chip movements."""

    @staticmethod
    def log_player_seated(name: str, stack: int) -> None:
        """Log when a player takes a seat."""
        logger.info(f"Player seated: {name} with ${stack} chips")

    @staticmethod
    def log_chips_committed(
        player_name: str,
        amount: int,
        round_bet: int,
        stack: int,
    ) -> None:
        """Log when a player moves chips toward the pot."""
        logger.debug(
            f"{player_name} puts in ${amount} "
            f"(round bet: ${round_bet}, chips remaining: ${stack})"
        )

    @staticmethod
    def log_all_in(player_name: str, round_bet: int) -> None:
        logger.info(f"{player_name} is all-in for a round bet of ${round_bet}")

    @staticmethod
    def log_state_reset(
        player_name: str, previous_bet: Optional[int] = None, context: str = "new street"
    ) -> None:
        """Log when a player's state is reset."""
        if previous_bet:
            logger.debug(f"{player_name}'s bet reset from ${previous_bet} to $0")
        logger.debug(f"{player_name}'s state reset for {context}")
