from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field

from data.states.player_state import TeenPattiPlayer
from exceptions import PlayerNotFoundError


class TeenPattiState(BaseModel):
    """Represents a Teen Patti table between and during rounds.

    Attributes:
        players: Seated players in turn order
        last_winner_id: Winner of the previous round, if any
        round_active: Whether a round is in progress
        current_player_index: Seat index of the player to act, -1 between rounds
        current_stake: Stake a blind player must match; seen players pay double
        pot_amount: Chips in the pot
        folded_player_ids: Players out of the current round
        blind_player_ids: Players who have not yet looked at their cards
        last_actor_was_blind: Whether the previous bet came from a blind player
        round_initial_boot_amount: Boot collected at the start of the last round
        round_contributions: Chips each player put in this round
        messages: Bounded human-readable action log
    """

    players: List[TeenPattiPlayer] = []
    last_winner_id: Optional[int] = None
    round_active: bool = False
    current_player_index: int = -1
    current_stake: int = 0
    pot_amount: int = 0
    folded_player_ids: Set[int] = Field(default_factory=set)
    blind_player_ids: Set[int] = Field(default_factory=set)
    last_actor_was_blind: bool = False
    round_initial_boot_amount: Optional[int] = None
    round_contributions: Dict[int, int] = Field(default_factory=dict)
    messages: List[str] = []
    max_messages: int = Field(default=100, gt=0)

    @property
    def current_player(self) -> Optional[TeenPattiPlayer]:
        if not self.round_active:
            return None
        if not 0 <= self.current_player_index < len(self.players):
            return None
        return self.players[self.current_player_index]

    def active_players(self) -> List[TeenPattiPlayer]:
        return [p for p in self.players if p.id not in self.folded_player_ids]

    def player_by_id(self, player_id: int) -> TeenPattiPlayer:
        for player in self.players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundError(f"No player with id {player_id}")

    def add_message(self, message: str) -> None:
        self.messages = (self.messages + [message])[-self.max_messages :]

    def copy(self) -> "TeenPattiState":
        return self.model_copy(deep=True)

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        data["folded_player_ids"] = sorted(data["folded_player_ids"])
        data["blind_player_ids"] = sorted(data["blind_player_ids"])
        return data
