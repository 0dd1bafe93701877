from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from data.enums import ActionType


class ActionDecision(BaseModel):
    """
    A betting action submitted for the player whose turn it is.

    Attributes:
        action_type: The type of action to take
        amount: The round-bet total a bet or raise goes to. Ignored for
            fold, check, call and all-in, which derive their own amounts.
    """

    action_type: ActionType
    amount: Optional[int] = Field(default=None, validate_default=True)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        if info.data.get("action_type") in (ActionType.BET, ActionType.RAISE):
            if v is None:
                raise ValueError("amount is required for a bet or raise")
        if v is not None and v < 0:
            raise ValueError("amount cannot be negative")
        return v

    def __str__(self) -> str:
        base = f"Action: {self.action_type.value}"
        if self.action_type in (ActionType.BET, ActionType.RAISE):
            base += f" {self.amount}"
        return base
