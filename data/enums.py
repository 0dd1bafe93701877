from enum import Enum


class ActionType(str, Enum):
    """Valid poker actions."""

    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "all-in"


class GameStage(str, Enum):
    """Stages of a poker hand, in the order they are played."""

    PRE_DEAL = "pre-deal"
    PRE_FLOP = "pre-flop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


# Streets on which betting actions are accepted
BETTING_STAGES = (
    GameStage.PRE_FLOP,
    GameStage.FLOP,
    GameStage.TURN,
    GameStage.RIVER,
)

NEXT_STAGE = {
    GameStage.PRE_DEAL: GameStage.PRE_FLOP,
    GameStage.PRE_FLOP: GameStage.FLOP,
    GameStage.FLOP: GameStage.TURN,
    GameStage.TURN: GameStage.RIVER,
    GameStage.RIVER: GameStage.SHOWDOWN,
    GameStage.SHOWDOWN: GameStage.PRE_DEAL,
}


class BlackjackStage(str, Enum):
    """Phases of a blackjack round."""

    BETTING = "betting"
    PLAYER_TURN = "player-turn"
    DEALER_TURN = "dealer-turn"


class HandStatus(str, Enum):
    """Where a blackjack hand stands. The last six are settled."""

    PLAYING = "playing"
    STAND = "stand"
    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    BLACKJACK = "blackjack"
    BUSTED = "busted"
    SURRENDERED = "surrendered"


# Results the dealer can give a hand when settling it
HAND_OUTCOMES = (
    HandStatus.WIN,
    HandStatus.LOSE,
    HandStatus.PUSH,
    HandStatus.BLACKJACK,
    HandStatus.BUSTED,
)


class BlackjackPayout(str, Enum):
    """House rule for what a natural blackjack pays."""

    THREE_TO_TWO = "3to2"
    SIX_TO_FIVE = "6to5"


PAYOUT_RATIOS = {
    BlackjackPayout.THREE_TO_TWO: (3, 2),
    BlackjackPayout.SIX_TO_FIVE: (6, 5),
}
