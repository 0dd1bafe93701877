from pydantic import BaseModel, Field


class PlayerBalance(BaseModel):
    """What a player holds now against what they put in."""

    name: str
    current_amount: float
    invested_amount: float = 0

    @property
    def net(self) -> float:
        """Positive if the player is owed money, negative if they owe."""
        return self.current_amount - self.invested_amount


class Transaction(BaseModel):
    """A single transfer that settles part of a debt."""

    from_player: str
    to_player: str
    amount: float = Field(gt=0)
