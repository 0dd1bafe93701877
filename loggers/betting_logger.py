import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class BettingLogger:
    """Handles all logging operations for betting-related actions."""

    @staticmethod
    def log_player_turn(
        player_name: str,
        stack: int,
        round_bet: int,
        current_bet: int,
        active_players: List[str],
        last_raiser: Optional[str] = None,
    ) -> None:
        """Log the start of a player's turn with all relevant information."""
        logger.info(f"---- {player_name} is active ----")
        logger.info(f"  Active players: {active_players}")
        logger.info(f"  Last raiser: {last_raiser if last_raiser else 'None'}")
        logger.info(f"  Player chips: ${stack}")
        logger.info(f"  Player round bet: ${round_bet}")
        logger.info(f"  Current bet: ${current_bet}")

    @staticmethod
    def log_player_action(
        player_name: str,
        action: str,
        amount: int = 0,
        is_all_in: bool = False,
    ) -> None:
        """Log a player's betting action."""
        status = " (all in)" if is_all_in else ""

        if action == "fold":
            logger.info(f"{player_name} folds")
        elif action == "check":
            logger.info(f"{player_name} checks")
        elif action == "call":
            logger.info(f"{player_name} calls ${amount}{status}")
        elif action in ("bet", "raise"):
            logger.info(f"{player_name} {action}s to ${amount}{status}")
        elif action == "all-in":
            logger.info(f"{player_name} goes all in for ${amount}")

    @staticmethod
    def log_invalid_action(player_name: str, action: str, reason: str) -> None:
        """Log when an action is rejected."""
        logger.info(f"Rejected {action} from {player_name}: {reason}")

    @staticmethod
    def log_action_reopened(player_name: str, increment: int) -> None:
        logger.debug(f"{player_name} raised by ${increment}, action reopened")

    @staticmethod
    def log_short_all_in(player_name: str, increment: int, min_raise: int) -> None:
        """Log an all-in raise too small to reopen the action."""
        logger.info(
            f"{player_name}'s all-in raises by ${increment}, below the minimum "
            f"raise of ${min_raise}; action is not reopened"
        )

    @staticmethod
    def log_round_complete(stage: str, reason: str) -> None:
        logger.info(f"Betting on {stage} closed: {reason}")

    @staticmethod
    def log_stage_change(old_stage: str, new_stage: str) -> None:
        logger.info(f"\n--- Moving from {old_stage} to {new_stage} ---")

    @staticmethod
    def log_blind(player_name: str, blind: str, amount: int, actual_amount: int) -> None:
        """Log blind postings."""
        status = " (all in)" if amount > actual_amount else ""

        if actual_amount < amount:
            logger.info(f"{player_name} posts partial {blind} of ${actual_amount}{status}")
        else:
            logger.info(f"{player_name} posts {blind} of ${actual_amount}")

    @staticmethod
    def log_line_break() -> None:
        """Log an empty line for formatting."""
        logger.info("")
