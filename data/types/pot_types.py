from typing import List, Set

from pydantic import BaseModel, Field


class Pot(BaseModel):
    """A pot and the players who may win it.

    Attributes:
        amount: Chips in the pot
        eligible_players: Ids of the players who can be awarded this pot
        threshold: Total hand contribution an eligible player has reached
    """

    amount: int = Field(ge=0)
    eligible_players: Set[int] = Field(default_factory=set)
    threshold: int = Field(default=0, ge=0)


class PotState(BaseModel):
    """Represents the state of all pots in a hand."""

    pots: List[Pot] = []
    total_pot: int = 0
