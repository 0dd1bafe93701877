import logging
from typing import Dict, List

from data.types.settlement_types import Transaction

logger = logging.getLogger(__name__)


class SettlementLogger:
    """Handles all logging operations for settling up."""

    @staticmethod
    def log_net_balances(nets: Dict[str, float]) -> None:
        logger.debug(f"Net results: {nets}")

    @staticmethod
    def log_unbalanced(total: float) -> None:
        """Log when winnings and losses do not cancel out."""
        logger.warning(f"Net results do not sum to zero (off by {total}); leftover is not settled")

    @staticmethod
    def log_transactions(transactions: List[Transaction]) -> None:
        logger.info("\nSettle up:")
        for t in transactions:
            logger.info(f"  {t.from_player} pays {t.to_player} {t.amount}")
