import logging
from typing import List

logger = logging.getLogger(__name__)


class TeenPattiLogger:
    """Handles all logging operations for Teen Patti rounds."""

    @staticmethod
    def log_round_start(boot_amount: int, pot: int, players: List[str]) -> None:
        logger.info(f"\n=== Teen Patti round: boot ${boot_amount} from {', '.join(players)} ===")
        logger.info(f"  Pot: ${pot}")

    @staticmethod
    def log_bet(player_name: str, amount: int, blind: bool, stake: int, pot: int) -> None:
        """Log a blind or seen (chaal) bet."""
        kind = "blind" if blind else "chaal"
        logger.info(f"{player_name} plays {kind} for ${amount} (stake ${stake}, pot ${pot})")

    @staticmethod
    def log_seen(player_name: str) -> None:
        logger.info(f"{player_name} sees their cards")

    @staticmethod
    def log_fold(player_name: str, remaining: List[str]) -> None:
        logger.info(f"{player_name} folds. Remaining: {', '.join(remaining)}")

    @staticmethod
    def log_show(player_name: str, cost: int) -> None:
        logger.info(f"{player_name} pays ${cost} for a show")

    @staticmethod
    def log_round_end(winner_name: str, pot: int) -> None:
        logger.info(f"{winner_name} wins the pot of ${pot}")

    @staticmethod
    def log_no_winner(pot: int) -> None:
        logger.warning(f"Round ended with no winner; ${pot} left unclaimed")

    @staticmethod
    def log_penalty(player_name: str, amount: int, share: int) -> None:
        logger.info(f"Deducted ${amount} from {player_name}, ${share} to every other player")

    @staticmethod
    def log_rejected(reason: str) -> None:
        logger.info(f"Teen Patti action rejected: {reason}")
