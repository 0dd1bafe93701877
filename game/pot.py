"""Pot and side pot allocation.

Pots are computed once, from every player's final contribution to the hand,
when the hand reaches showdown. Each all-in level caps a pot that only
players who reached that level can win; whatever was put in above the
highest all-in level forms the last pot.
"""

from typing import List, Sequence

from data.states.player_state import PokerPlayer
from data.types.pot_types import Pot
from exceptions import InvalidGameStateError
from loggers.pot_logger import PotLogger


def calculate_pots(players: Sequence[PokerPlayer]) -> List[Pot]:
    """
    Partition all contributed chips into pots with their eligible winners.

    Args:
        players (Sequence[PokerPlayer]): Every player dealt into the hand,
            including players who folded after putting chips in.

    Returns:
        List[Pot]: Pots ordered from the lowest contribution level up. Pots
            with no chips are discarded.

    Raises:
        InvalidGameStateError: If the pots do not add up to the total
            contributed, which means the player records are inconsistent.

    Note:
        - With exactly one player left in the hand, that player is the only
          eligible winner of a single pot holding everything.
        - All-in players sharing a contribution amount share one level.
        - Folded players' chips land in every level they reached, but folded
          players are never eligible.
    """
    total_contributed = sum(p.total_pot_contribution for p in players)
    in_hand = [p for p in players if p.in_hand]

    if len(in_hand) == 1:
        winner = in_hand[0]
        PotLogger.log_single_player_pot(winner.id, total_contributed)
        if total_contributed == 0:
            return []
        return [
            Pot(
                amount=total_contributed,
                eligible_players={winner.id},
                threshold=winner.total_pot_contribution,
            )
        ]

    all_in_players = sorted(
        (p for p in players if p.is_all_in and p.total_pot_contribution > 0),
        key=lambda p: p.total_pot_contribution,
    )

    pots: List[Pot] = []
    last_level = 0

    for all_in_player in all_in_players:
        level = all_in_player.total_pot_contribution
        if level <= last_level:
            continue

        amount = sum(
            max(0, min(p.total_pot_contribution, level) - last_level)
            for p in players
        )
        if amount > 0:
            eligible = {p.id for p in in_hand if p.total_pot_contribution >= level}
            pots.append(Pot(amount=amount, eligible_players=eligible, threshold=level))
            PotLogger.log_new_pot(amount, level, sorted(eligible))
        else:
            PotLogger.log_empty_pot_discarded(level)
        last_level = level

    remainder = sum(max(0, p.total_pot_contribution - last_level) for p in players)
    if remainder > 0:
        eligible = {p.id for p in in_hand if not p.is_all_in}
        if not eligible:
            # Everyone left is all-in; the top level's contributors play for it
            eligible = {p.id for p in in_hand if p.total_pot_contribution >= last_level}
        pots.append(Pot(amount=remainder, eligible_players=eligible, threshold=last_level))
        PotLogger.log_new_pot(remainder, last_level, sorted(eligible))

    validate_pots(players, pots)
    return pots


def validate_pots(players: Sequence[PokerPlayer], pots: Sequence[Pot]) -> bool:
    """
    Check that pots account for every contributed chip.

    Args:
        players: Every player dealt into the hand
        pots: Pots computed for the hand

    Returns:
        bool: True if the pots are consistent

    Raises:
        InvalidGameStateError: If the pot total differs from the contributed
            total, or a folded player is eligible for a pot
    """
    total_contributed = sum(p.total_pot_contribution for p in players)
    total_in_pots = sum(pot.amount for pot in pots)

    if total_in_pots != total_contributed:
        PotLogger.log_pot_validation_error(
            total_contributed,
            total_in_pots,
            list(pots),
            [(p.id, p.total_pot_contribution) for p in players],
        )
        raise InvalidGameStateError(
            f"Pots do not match contributions: contributed={total_contributed}, "
            f"pots={total_in_pots}"
        )

    folded = {p.id for p in players if not p.in_hand}
    for pot in pots:
        if pot.eligible_players & folded:
            raise InvalidGameStateError(
                f"Folded players eligible for pot: {sorted(pot.eligible_players & folded)}"
            )
    return True


def split_pot(amount: int, winner_count: int) -> List[int]:
    """
    Split a pot as evenly as possible.

    The odd chips go one each to the first winners, so callers should pass
    winners in seat order.
    """
    if winner_count <= 0:
        raise ValueError("A pot needs at least one winner")
    share, remainder = divmod(amount, winner_count)
    return [share + 1 if i < remainder else share for i in range(winner_count)]
