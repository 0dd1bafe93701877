"""JSON snapshots of table state.

Set-valued fields (eligible players of a pot, folded and blind player ids)
are written as sorted arrays and come back as sets when the snapshot is
validated against its model.
"""

import json
import logging
from typing import Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from data.states.blackjack_state import BlackjackState
from data.states.game_state import PokerGameState
from data.states.teen_patti_state import TeenPattiState
from exceptions import InvalidGameStateError

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=BaseModel)


def dump_state(state: Union[PokerGameState, TeenPattiState, BlackjackState]) -> str:
    """Serialize a state snapshot to a JSON string."""
    return json.dumps(state.to_dict())


def load_state(raw: Union[str, bytes], model: Type[StateT]) -> StateT:
    """
    Restore a state snapshot written by dump_state.

    Args:
        raw: JSON text of the snapshot
        model: State model to validate against

    Returns:
        The validated state

    Raises:
        InvalidGameStateError: If the text is not JSON or does not describe
            a valid state for the model
    """
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Rejected saved {model.__name__}: {e.error_count()} errors")
        raise InvalidGameStateError(f"Saved state is not a valid {model.__name__}") from e
