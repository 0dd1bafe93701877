import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


class GameLogger:
    """Handles all logging operations for the poker hand lifecycle."""

    @staticmethod
    def log_game_config(players: List[str], small_blind: int, big_blind: int) -> None:
        """Log the initial table configuration."""
        logger.info(f"\n{'='*50}")
        logger.info("Table Configuration")
        logger.info(f"{'='*50}")
        logger.info(f"Players: {', '.join(players)}")
        logger.info(f"Blinds: ${small_blind}/${big_blind}")
        logger.info(f"{'='*50}\n")

    @staticmethod
    def log_hand_header(dealer_name: str) -> None:
        """Log the start of a new hand."""
        logger.info(f"\n{'='*50}")
        logger.info(f"New hand, dealer: {dealer_name}")
        logger.info(f"{'='*50}")

    @staticmethod
    def log_chip_counts(chips_dict: Dict[str, int], message: str) -> None:
        """Log chip counts for all players."""
        logger.info(f"\n{message}:")
        for player_name, chips in sorted(
            chips_dict.items(), key=lambda x: x[1], reverse=True
        ):
            logger.info(f"  {player_name}: ${chips}")

    @staticmethod
    def log_table_positions(positions: Dict[str, str]) -> None:
        """Log the current table positions."""
        logger.info("\nTable positions:")
        for position, player_name in positions.items():
            logger.info(f"  {position}: {player_name}")

    @staticmethod
    def log_rejected(reason: str) -> None:
        logger.info(f"Table change rejected: {reason}")

    @staticmethod
    def log_player_removed(player_name: str) -> None:
        logger.info(f"{player_name} left the table")

    @staticmethod
    def log_chips_added(player_name: str, amount: int, stack: int) -> None:
        logger.info(f"{player_name} buys in for ${amount} more (stack ${stack})")
