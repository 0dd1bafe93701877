from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from data.enums import BETTING_STAGES, GameStage
from data.states.player_state import PokerPlayer
from data.types.pot_types import Pot, PotState
from exceptions import PlayerNotFoundError


class PokerGameState(BaseModel):
    """Represents the complete state of a tracked poker table.

    Snapshots are treated as immutable by the engine: every transition works
    on a deep copy and returns it.

    Attributes:
        players (List[PokerPlayer]): Seated players in seat order
        game_stage (GameStage): Street currently being played
        pots (List[Pot]): Pots awaiting award, filled at showdown
        current_bet (int): Round bet every mobile player must match
        last_raiser_id (Optional[int]): Id of the last player to make a full raise
        last_raise_amount (Optional[int]): Size of the last full raise increment
        active_player_index (Optional[int]): Seat index of the player to act,
            None when no one is to act (between hands or at showdown)
        dealer_button_index (int): Seat index of the dealer, -1 before the first hand
        small_blind_index (int): Seat index of the small blind
        big_blind_index (int): Seat index of the big blind
        small_blind_amount (int): Small blind size
        big_blind_amount (int): Big blind size, also the minimum opening bet
        messages (List[str]): Bounded human-readable action log
        max_messages (int): Size bound of the message log
    """

    players: List[PokerPlayer] = []
    game_stage: GameStage = GameStage.PRE_DEAL
    pots: List[Pot] = []
    current_bet: int = Field(default=0, ge=0)
    last_raiser_id: Optional[int] = None
    last_raise_amount: Optional[int] = None
    active_player_index: Optional[int] = None
    dealer_button_index: int = -1
    small_blind_index: int = -1
    big_blind_index: int = -1
    small_blind_amount: int = 10
    big_blind_amount: int = 20
    messages: List[str] = []
    max_messages: int = Field(default=100, gt=0)

    @field_validator("small_blind_amount", "big_blind_amount")
    @classmethod
    def validate_blinds(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Blinds must be positive")
        return v

    @property
    def is_betting(self) -> bool:
        """True while a street is being bet."""
        return self.game_stage in BETTING_STAGES

    @property
    def active_player(self) -> Optional[PokerPlayer]:
        if self.active_player_index is None:
            return None
        if not 0 <= self.active_player_index < len(self.players):
            return None
        return self.players[self.active_player_index]

    def player_by_id(self, player_id: int) -> PokerPlayer:
        for player in self.players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundError(f"No player with id {player_id}")

    def add_message(self, message: str) -> None:
        """Append to the action log, dropping the oldest entries past the bound."""
        self.messages = (self.messages + [message])[-self.max_messages :]

    def total_contributed(self) -> int:
        return sum(p.total_pot_contribution for p in self.players)

    def get_pot_state(self) -> PotState:
        return PotState(
            pots=self.pots, total_pot=sum(pot.amount for pot in self.pots)
        )

    def copy(self) -> "PokerGameState":
        """Create a deep copy of the game state."""
        return self.model_copy(deep=True)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dictionary; eligible-player sets become sorted lists."""
        data = self.model_dump(mode="json")
        for pot in data["pots"]:
            pot["eligible_players"] = sorted(pot["eligible_players"])
        return data
