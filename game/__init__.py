"""
TableTally game engines.
Contains the poker betting and pot settlement engine, the Teen Patti and
blackjack ledgers and the settle-up calculator.
"""

from .betting import apply_action
from .config import GameConfig
from .game import PokerGame, setup_game, start_new_hand
from .pot import calculate_pots
from .settlement import calculate_owings
from .showdown import award_pot

__all__ = [
    "GameConfig",
    "PokerGame",
    "apply_action",
    "award_pot",
    "calculate_owings",
    "calculate_pots",
    "setup_game",
    "start_new_hand",
]
