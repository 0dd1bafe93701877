from typing import Any, Dict

from pydantic import BaseModel, Field


class PokerPlayer(BaseModel):
    """Represents a seated poker player and their money in the current hand.

    Attributes:
        id: Seat identifier, unique at the table
        name: Display name
        stack: Chips behind (must be >= 0)
        total_buy_in: Total chips bought over the session
        in_hand: Dealt into the current hand and not folded
        is_all_in: Whole stack committed, cannot act further this hand
        round_bet: Chips put in on the current street
        total_pot_contribution: Chips put in over the whole hand
        has_acted: Acted since the action was last opened
    """

    id: int
    name: str
    stack: int = Field(ge=0)
    total_buy_in: int = 0
    in_hand: bool = False
    is_all_in: bool = False
    round_bet: int = Field(default=0, ge=0)
    total_pot_contribution: int = Field(default=0, ge=0)
    has_acted: bool = False

    @property
    def can_act(self) -> bool:
        """True when the player is still in the hand and has chips to act with."""
        return self.in_hand and not self.is_all_in

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class TeenPattiPlayer(BaseModel):
    """A Teen Patti player. Balance may go negative; buy-ins are not tracked."""

    id: int
    name: str
    balance: int = 0
