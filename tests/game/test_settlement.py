from unittest.mock import patch

import pytest

from data.states.blackjack_state import BlackjackPlayer, BlackjackState
from data.states.player_state import PokerPlayer, TeenPattiPlayer
from data.states.game_state import PokerGameState
from data.states.teen_patti_state import TeenPattiState
from data.types.settlement_types import PlayerBalance, Transaction
from game.settlement import (
    blackjack_owings,
    calculate_owings,
    poker_owings,
    teen_patti_owings,
)


def as_tuples(transactions):
    return [(t.from_player, t.to_player, t.amount) for t in transactions]


class TestCalculateOwings:
    def test_two_debtors_one_creditor(self):
        balances = [
            PlayerBalance(name="alice", current_amount=1500, invested_amount=1000),
            PlayerBalance(name="bob", current_amount=700, invested_amount=1000),
            PlayerBalance(name="carol", current_amount=800, invested_amount=1000),
        ]

        transactions = calculate_owings(balances)

        assert as_tuples(transactions) == [("Bob", "Alice", 300), ("Carol", "Alice", 200)]

    def test_one_debtor_pays_several_creditors(self):
        balances = [
            PlayerBalance(name="A", current_amount=100),
            PlayerBalance(name="B", current_amount=50),
            PlayerBalance(name="C", current_amount=-150),
        ]

        assert as_tuples(calculate_owings(balances)) == [("C", "A", 100), ("C", "B", 50)]

    def test_greedy_matching_in_input_order(self):
        balances = [
            PlayerBalance(name="A", current_amount=-60),
            PlayerBalance(name="B", current_amount=-40),
            PlayerBalance(name="C", current_amount=30),
            PlayerBalance(name="D", current_amount=70),
        ]

        transactions = calculate_owings(balances)

        assert as_tuples(transactions) == [("A", "C", 30), ("A", "D", 30), ("B", "D", 40)]
        assert len(transactions) <= 3

    def test_fractional_amounts(self):
        balances = [
            PlayerBalance(name="A", current_amount=12.5),
            PlayerBalance(name="B", current_amount=-12.5),
        ]

        assert as_tuples(calculate_owings(balances)) == [("B", "A", 12.5)]

    def test_everyone_even(self):
        balances = [PlayerBalance(name="A", current_amount=100, invested_amount=100)]
        assert calculate_owings(balances) == []

    def test_unbalanced_input_is_logged(self):
        balances = [
            PlayerBalance(name="A", current_amount=100),
            PlayerBalance(name="B", current_amount=-60),
        ]

        with patch("game.settlement.SettlementLogger") as mock_logger:
            transactions = calculate_owings(balances)

        mock_logger.log_unbalanced.assert_called_once_with(40)
        assert as_tuples(transactions) == [("B", "A", 60)]


class TestTableOwings:
    def test_poker_owings_against_buy_in(self):
        state = PokerGameState(
            players=[
                PokerPlayer(id=1, name="Alice", stack=1300, total_buy_in=1000),
                PokerPlayer(id=2, name="Bob", stack=200, total_buy_in=500),
            ]
        )

        assert as_tuples(poker_owings(state)) == [("Bob", "Alice", 300)]

    def test_teen_patti_owings_from_balance(self):
        state = TeenPattiState(
            players=[
                TeenPattiPlayer(id=1, name="Asha", balance=-20),
                TeenPattiPlayer(id=2, name="Bilal", balance=85),
                TeenPattiPlayer(id=3, name="Chen", balance=-65),
            ]
        )

        assert as_tuples(teen_patti_owings(state)) == [
            ("Asha", "Bilal", 20),
            ("Chen", "Bilal", 65),
        ]

    def test_blackjack_owings_between_players(self):
        state = BlackjackState(
            players=[
                BlackjackPlayer(id=1, name="Asha", stack=1100, total_buy_in=1000),
                BlackjackPlayer(id=2, name="Bilal", stack=400, total_buy_in=500),
            ]
        )

        assert as_tuples(blackjack_owings(state)) == [("Bilal", "Asha", 100)]

    def test_blackjack_owings_include_the_dealer(self):
        """The house lost 50 net: Asha won 122.5 and Bilal lost 72.5."""
        state = BlackjackState(
            players=[
                BlackjackPlayer(id=1, name="Asha", stack=1122.5, total_buy_in=1000),
                BlackjackPlayer(id=2, name="Bilal", stack=427.5, total_buy_in=500),
            ],
            dealer_net=-50,
        )

        with patch("game.settlement.SettlementLogger") as mock_logger:
            transactions = blackjack_owings(state)

        mock_logger.log_unbalanced.assert_not_called()
        assert as_tuples(transactions) == [
            ("Bilal", "Asha", 72.5),
            ("Dealer", "Asha", 50),
        ]


class TestSettlementTypes:
    def test_net(self):
        assert PlayerBalance(name="A", current_amount=80, invested_amount=100).net == -20

    def test_transaction_amount_positive(self):
        with pytest.raises(ValueError):
            Transaction(from_player="A", to_player="B", amount=0)
