import logging
from typing import List, Tuple

from data.types.pot_types import Pot

logger = logging.getLogger(__name__)


class PotLogger:
    """Handles all logging operations for pot-related actions."""

    @staticmethod
    def log_new_pot(amount: int, threshold: int, eligible: List[int]) -> None:
        """Log creation of a new pot."""
        logger.debug(
            f"Created new pot: amount={amount}, threshold={threshold}, eligible={eligible}"
        )

    @staticmethod
    def log_empty_pot_discarded(threshold: int) -> None:
        logger.debug(f"Discarded empty pot at level {threshold}")

    @staticmethod
    def log_single_player_pot(player_id: int, amount: int) -> None:
        """Log when one player remains and takes everything."""
        logger.debug(f"Only player {player_id} remains, single pot of ${amount}")

    @staticmethod
    def log_pots_info(pots: List[Pot]) -> None:
        """Log detailed pot information."""
        logger.info("\nPots:")
        for i, pot in enumerate(pots, 1):
            players_str = ", ".join(str(p) for p in sorted(pot.eligible_players))
            logger.info(f"  Pot {i}: ${pot.amount} (Eligible: {players_str})")

    @staticmethod
    def log_pot_validation_error(
        total_contributed: int,
        total_in_pots: int,
        pots: List[Pot],
        contributions: List[Tuple[int, int]],
    ) -> None:
        """Log pot validation errors."""
        logger.error(
            f"Pot mismatch - Total contributed: {total_contributed}, "
            f"Total in pots: {total_in_pots}"
        )
        logger.error(f"Pots: {[(pot.amount, sorted(pot.eligible_players)) for pot in pots]}")
        logger.error(f"Contributions: {contributions}")

    @staticmethod
    def log_pot_awarded(pot_index: int, amount: int, shares: List[Tuple[str, int]]) -> None:
        """Log a pot being paid out."""
        winners = ", ".join(f"{name} ${share}" for name, share in shares)
        logger.info(f"Pot {pot_index + 1} (${amount}) awarded: {winners}")
