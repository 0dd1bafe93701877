import os

import pytest

from data.enums import GameStage
from data.states.game_state import PokerGameState
from data.states.player_state import PokerPlayer


@pytest.fixture(autouse=True)
def setup_logging():
    """Automatically disable logging for all tests."""
    import logging

    logging.disable(logging.CRITICAL)
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture(autouse=True)
def clean_env():
    """Keep TABLETALLY_* settings from the developer's shell out of tests."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("TABLETALLY_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [k for k in os.environ if k.startswith("TABLETALLY_")]:
        del os.environ[key]
    os.environ.update(saved)


@pytest.fixture
def player_factory():
    """Factory fixture to create players dealt into a hand.

    Ids default to 1, 2, 3... in creation order; any field can be overridden.
    """
    counter = {"next_id": 1}

    def create_player(**kwargs):
        player_id = kwargs.pop("id", counter["next_id"])
        counter["next_id"] = max(counter["next_id"], player_id) + 1
        attrs = {
            "id": player_id,
            "name": f"Player{player_id}",
            "stack": 1000,
            "total_buy_in": 1000,
            "in_hand": True,
        }
        attrs.update(kwargs)
        return PokerPlayer(**attrs)

    return create_player


@pytest.fixture
def betting_state():
    """Factory for a state in the middle of a betting round.

    Defaults to the flop with nothing bet and blinds of 10/20, the dealer on
    the last seat and the first seat to act.
    """

    def create_state(players, **kwargs):
        attrs = {
            "players": players,
            "game_stage": GameStage.FLOP,
            "current_bet": 0,
            "active_player_index": 0,
            "dealer_button_index": len(players) - 1,
            "small_blind_amount": 10,
            "big_blind_amount": 20,
        }
        attrs.update(kwargs)
        return PokerGameState(**attrs)

    return create_state
