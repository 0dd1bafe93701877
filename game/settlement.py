from typing import List, Sequence

from data.states.blackjack_state import BlackjackState
from data.states.game_state import PokerGameState
from data.states.teen_patti_state import TeenPattiState
from data.types.settlement_types import PlayerBalance, Transaction
from loggers.settlement_logger import SettlementLogger

from .game import format_name

DEALER_NAME = "Dealer"


def calculate_owings(balances: Sequence[PlayerBalance]) -> List[Transaction]:
    """
    Work out who pays whom to square everyone's result.

    Debtors and creditors are matched greedily in the order given: the first
    debtor pays the first creditor as much as either can, then whichever is
    settled moves on. Amounts are handled in whole cents.

    Args:
        balances: Every player's current and invested amounts

    Returns:
        List[Transaction]: Transfers, at most one fewer than the number of
            players with a non-zero result
    """
    nets = [(format_name(b.name), round(b.net * 100)) for b in balances]
    SettlementLogger.log_net_balances({name: cents / 100 for name, cents in nets})

    imbalance = sum(cents for _, cents in nets)
    if imbalance != 0:
        SettlementLogger.log_unbalanced(imbalance / 100)

    debtors = [[name, -cents] for name, cents in nets if cents < 0]
    creditors = [[name, cents] for name, cents in nets if cents > 0]

    transactions: List[Transaction] = []
    debtor_index = 0
    creditor_index = 0

    while debtor_index < len(debtors) and creditor_index < len(creditors):
        debtor = debtors[debtor_index]
        creditor = creditors[creditor_index]
        amount = min(debtor[1], creditor[1])

        transactions.append(
            Transaction(from_player=debtor[0], to_player=creditor[0], amount=amount / 100)
        )

        debtor[1] -= amount
        creditor[1] -= amount
        if debtor[1] == 0:
            debtor_index += 1
        if creditor[1] == 0:
            creditor_index += 1

    SettlementLogger.log_transactions(transactions)
    return transactions


def poker_owings(state: PokerGameState) -> List[Transaction]:
    """Settle a poker table: each player's stack against their total buy-in."""
    return calculate_owings(
        [
            PlayerBalance(name=p.name, current_amount=p.stack, invested_amount=p.total_buy_in)
            for p in state.players
        ]
    )


def teen_patti_owings(state: TeenPattiState) -> List[Transaction]:
    """Settle a Teen Patti table. Buy-ins are not tracked, so balance is the result."""
    return calculate_owings(
        [PlayerBalance(name=p.name, current_amount=p.balance) for p in state.players]
    )


def blackjack_owings(state: BlackjackState) -> List[Transaction]:
    """
    Settle a blackjack table: each player's stack against their total buy-in.

    The dealer's running result takes part as one more balance, so players
    who beat the house are paid by it and players who lost pay it. Bets on
    hands still in play are not counted, so settle between rounds.
    """
    balances = [
        PlayerBalance(name=p.name, current_amount=p.stack, invested_amount=p.total_buy_in)
        for p in state.players
    ]
    if state.dealer_net:
        balances.append(PlayerBalance(name=DEALER_NAME, current_amount=state.dealer_net))
    return calculate_owings(balances)
