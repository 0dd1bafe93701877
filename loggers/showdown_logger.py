import logging
from typing import List

logger = logging.getLogger(__name__)


class ShowdownLogger:
    """Handles all logging operations for showdown-related actions."""

    @staticmethod
    def log_showdown_start(pot_count: int, total: int) -> None:
        """Log the start of showdown phase."""
        logger.info(f"\n=== Showdown: {pot_count} pot(s), ${total} total ===")

    @staticmethod
    def log_single_winner(winner_name: str, amount: int) -> None:
        """Log when there's a single winner (others folded)."""
        logger.info(f"{winner_name} wins ${amount} (all others folded)")

    @staticmethod
    def log_pot_win(winner_name: str, amount: int, is_split: bool = False) -> None:
        """Log when a player wins a pot."""
        action = "splits" if is_split else "wins"
        logger.info(f"{winner_name} {action} ${amount}")

    @staticmethod
    def log_invalid_award(reason: str) -> None:
        logger.info(f"Pot award rejected: {reason}")

    @staticmethod
    def log_hand_over(stacks: List[str]) -> None:
        logger.info(f"Hand over. Stacks: {', '.join(stacks)}")
