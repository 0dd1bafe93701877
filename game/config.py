import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from data.enums import BlackjackPayout

ENV_PREFIX = "TABLETALLY_"

INTEGER_SETTINGS = (
    "small_blind",
    "big_blind",
    "starting_stack",
    "boot_amount",
    "max_messages",
    "min_bet",
    "max_bet",
)


@dataclass
class GameConfig:
    """
    Configuration parameters for a tracked table.

    Attributes:
        small_blind (int): Poker small blind amount (default: 10)
        big_blind (int): Poker big blind amount, also the minimum opening bet (default: 20)
        starting_stack (int): Default stack for newly seated poker players (default: 1000)
        boot_amount (int): Default Teen Patti boot collected from every player (default: 10)
        max_messages (int): Size bound of each table's message log (default: 100)
        min_bet (int): Smallest blackjack bet on a hand (default: 10)
        max_bet (int): Largest blackjack bet on a hand (default: 1000)
        blackjack_payout (str): What a natural blackjack pays, "3to2" or "6to5" (default: "3to2")

    Raises:
        ValueError: If any of the numerical parameters are invalid
    """

    small_blind: int = 10
    big_blind: int = 20
    starting_stack: int = 1000
    boot_amount: int = 10
    max_messages: int = 100
    min_bet: int = 10
    max_bet: int = 1000
    blackjack_payout: str = BlackjackPayout.THREE_TO_TWO.value

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")
        if self.starting_stack < 0:
            raise ValueError("Starting stack cannot be negative")
        if self.boot_amount <= 0:
            raise ValueError("Boot amount must be positive")
        if self.max_messages <= 0:
            raise ValueError("Message log size must be positive")
        if self.min_bet <= 0:
            raise ValueError("Minimum bet must be positive")
        if self.max_bet < self.min_bet:
            raise ValueError("Maximum bet cannot be below the minimum bet")
        if self.blackjack_payout not in {p.value for p in BlackjackPayout}:
            raise ValueError(f"Unknown blackjack payout: {self.blackjack_payout!r}")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "GameConfig":
        """
        Build a config from ``TABLETALLY_*`` environment variables.

        A ``.env`` file is loaded first if present; variables already set in
        the environment take precedence over it. Unset variables keep their
        defaults.

        Raises:
            ValueError: If a variable is not an integer or fails validation
        """
        load_dotenv(env_file)

        values = {}
        for name in INTEGER_SETTINGS:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}")

        payout = os.getenv(f"{ENV_PREFIX}BLACKJACK_PAYOUT", "").strip()
        if payout:
            values["blackjack_payout"] = payout
        return cls(**values)
