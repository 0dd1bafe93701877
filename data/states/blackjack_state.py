from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from data.enums import BlackjackPayout, BlackjackStage, HandStatus
from exceptions import PlayerNotFoundError


class BlackjackHand(BaseModel):
    """One boxed hand and the money riding on it.

    Attributes:
        bet: Chips on the hand, doubled if the hand was doubled down
        status: Playing, standing, or how the hand was settled
        has_hit: Took a card, so can no longer double, split or surrender
        is_doubled: Doubled down
        is_split: Came from, or was the source of, a split
        insurance: Insurance side bet taken against a dealer blackjack
        net: Player's result on the hand once settled, insurance included
    """

    bet: int = Field(default=0, ge=0)
    status: HandStatus = HandStatus.PLAYING
    has_hit: bool = False
    is_doubled: bool = False
    is_split: bool = False
    insurance: int = Field(default=0, ge=0)
    net: float = 0

    @property
    def is_settled(self) -> bool:
        return self.status not in (HandStatus.PLAYING, HandStatus.STAND)

    @property
    def placed_bet(self) -> int:
        """The bet before any double down."""
        return self.bet // 2 if self.is_doubled else self.bet


class BlackjackPlayer(BaseModel):
    """A blackjack player. Stacks can hold fractional chips after a 3:2 or 6:5 payout."""

    id: int
    name: str
    stack: float = Field(ge=0)
    total_buy_in: float = 0
    hands_per_round: int = Field(default=1, ge=1)
    hands: List[BlackjackHand] = []
    on_break: bool = False
    last_bet: int = Field(default=0, ge=0)


class BlackjackState(BaseModel):
    """Represents a blackjack table between and during rounds.

    Attributes:
        players: Seated players in play order
        stage: Betting between rounds, then the players' and dealer's turns
        current_player_id: Player whose hand is being played
        current_hand_index: Index of that hand in the player's hands
        min_bet: Smallest bet on a hand
        max_bet: Largest bet on a hand
        allow_surrender: Whether late surrender is offered
        blackjack_payout: What a natural pays, 3:2 or 6:5
        dealer_net: House result over the session
        bets_locked: Rounds start by re-betting each player's last bet
        messages: Bounded human-readable action log
    """

    players: List[BlackjackPlayer] = []
    stage: BlackjackStage = BlackjackStage.BETTING
    current_player_id: Optional[int] = None
    current_hand_index: Optional[int] = None
    min_bet: int = Field(default=10, gt=0)
    max_bet: int = Field(default=1000, gt=0)
    allow_surrender: bool = True
    blackjack_payout: BlackjackPayout = BlackjackPayout.THREE_TO_TWO
    dealer_net: float = 0
    bets_locked: bool = True
    messages: List[str] = []
    max_messages: int = Field(default=100, gt=0)

    @model_validator(mode="after")
    def validate_bet_limits(self) -> "BlackjackState":
        if self.max_bet < self.min_bet:
            raise ValueError("Maximum bet cannot be below the minimum bet")
        return self

    @property
    def current_player(self) -> Optional[BlackjackPlayer]:
        if self.stage != BlackjackStage.PLAYER_TURN or self.current_player_id is None:
            return None
        for player in self.players:
            if player.id == self.current_player_id:
                return player
        return None

    @property
    def current_hand(self) -> Optional[BlackjackHand]:
        player = self.current_player
        if player is None or self.current_hand_index is None:
            return None
        if not 0 <= self.current_hand_index < len(player.hands):
            return None
        return player.hands[self.current_hand_index]

    def player_by_id(self, player_id: int) -> BlackjackPlayer:
        for player in self.players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundError(f"No player with id {player_id}")

    def all_hands_settled(self) -> bool:
        return all(
            hand.is_settled
            for player in self.players
            if not player.on_break
            for hand in player.hands
        )

    def add_message(self, message: str) -> None:
        self.messages = (self.messages + [message])[-self.max_messages :]

    def copy(self) -> "BlackjackState":
        return self.model_copy(deep=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
