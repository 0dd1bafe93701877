import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class TableLogger:
    """Handles all logging operations for turn order and round state."""

    @staticmethod
    def log_dealer_position(position: int, player_name: str) -> None:
        """Log dealer button position."""
        logger.info(f"Dealer button at position {position} ({player_name})")

    @staticmethod
    def log_player_states(
        active: List[str], all_in: List[str], folded: List[str]
    ) -> None:
        """Log current state of all players at the table."""
        logger.debug("Table state:")
        logger.debug(f"  Active players: {', '.join(active)}")
        if all_in:
            logger.debug(f"  All-in players: {', '.join(all_in)}")
        if folded:
            logger.debug(f"  Folded players: {', '.join(folded)}")

    @staticmethod
    def log_next_player(player_name: Optional[str], position: Optional[int]) -> None:
        """Log when moving to next player in rotation."""
        if player_name is None:
            logger.debug("No player left to act")
        else:
            logger.debug(f"Next to act: {player_name} (position {position})")

    @staticmethod
    def log_round_status(complete: bool, reason: str) -> None:
        logger.debug(f"Round complete: {complete} ({reason})")

    @staticmethod
    def log_action_tracking_reset(active_players: List[str]) -> None:
        """Log when action tracking is reset for a new street."""
        logger.debug(f"Action tracking reset. Players to act: {', '.join(active_players)}")
