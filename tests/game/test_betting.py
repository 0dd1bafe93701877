from unittest.mock import patch

import pytest

from data.enums import ActionType, GameStage
from data.types.action_decision import ActionDecision
from game.betting import advance_stage, apply_action, min_bet_to, min_raise_increment


def act(state, action_type, amount=None):
    return apply_action(state, ActionDecision(action_type=action_type, amount=amount))


@pytest.fixture
def mock_betting_logger():
    """Patch the betting logger so calls can be inspected."""
    with patch("game.betting.BettingLogger") as mock_logger:
        yield mock_logger


@pytest.fixture
def three_handed(player_factory, betting_state):
    """Three players on the flop with nothing bet and seat 0 to act."""
    players = [player_factory() for _ in range(3)]
    return betting_state(players)


class TestMinimumBets:
    def test_opening_bet_is_big_blind(self, three_handed):
        assert min_bet_to(three_handed) == 20

    def test_raise_adds_at_least_big_blind(self, three_handed):
        three_handed.current_bet = 15
        three_handed.last_raise_amount = 5
        assert min_raise_increment(three_handed) == 20
        assert min_bet_to(three_handed) == 35

    def test_raise_adds_at_least_last_raise(self, three_handed):
        three_handed.current_bet = 100
        three_handed.last_raise_amount = 60
        assert min_bet_to(three_handed) == 160


class TestCheckAndCall:
    def test_check_passes_the_turn(self, three_handed):
        result = act(three_handed, ActionType.CHECK)

        assert result.accepted
        assert result.state.active_player_index == 1
        assert result.state.players[0].has_acted
        assert result.state.messages[-1] == "Player1 checks."

    def test_cannot_check_facing_a_bet(self, three_handed, mock_betting_logger):
        three_handed.current_bet = 20

        result = act(three_handed, ActionType.CHECK)

        assert not result.accepted
        assert result.message == "Cannot check, there is a bet of 20 to you."
        mock_betting_logger.log_invalid_action.assert_called_once()

    def test_call_puts_in_what_is_owed(self, three_handed):
        three_handed.current_bet = 50
        three_handed.players[0].round_bet = 10
        three_handed.players[0].total_pot_contribution = 10

        result = act(three_handed, ActionType.CALL)

        caller = result.state.players[0]
        assert caller.stack == 960
        assert caller.round_bet == 50
        assert caller.total_pot_contribution == 50
        assert result.state.messages[-1] == "Player1 calls 40."

    def test_short_call_goes_all_in(self, player_factory, betting_state):
        short = player_factory(stack=30)
        state = betting_state(
            [short, player_factory(), player_factory()], current_bet=50
        )

        result = act(state, ActionType.CALL)

        caller = result.state.players[0]
        assert caller.stack == 0
        assert caller.round_bet == 30
        assert caller.is_all_in
        assert result.state.messages[-1] == "Player1 calls 30."

    @pytest.mark.parametrize(
        "action_type,outstanding",
        [(ActionType.CHECK, 0), (ActionType.CALL, 40), (ActionType.FOLD, 40)],
    )
    def test_non_raising_action_keeps_acted_flags(
        self, player_factory, betting_state, action_type, outstanding
    ):
        players = [
            player_factory(),
            player_factory(
                round_bet=outstanding, total_pot_contribution=outstanding, has_acted=True
            ),
            player_factory(
                round_bet=outstanding, total_pot_contribution=outstanding, has_acted=True
            ),
            player_factory(),
        ]
        state = betting_state(
            players, current_bet=outstanding, last_raise_amount=outstanding
        )

        result = act(state, action_type)

        assert result.accepted
        assert [p.has_acted for p in result.state.players] == [True, True, True, False]
        assert result.state.active_player_index == 1

    def test_call_with_nothing_owed_is_a_check(self, three_handed):
        result = act(three_handed, ActionType.CALL)

        assert result.accepted
        assert result.state.players[0].stack == 1000
        assert result.state.messages[-1] == "Player1 checks."


class TestBetAndRaise:
    def test_bet_below_big_blind_rejected(self, three_handed):
        result = act(three_handed, ActionType.BET, 10)

        assert not result.accepted
        assert result.message == "Invalid bet. Must be at least 20."

    def test_raise_below_minimum_rejected(self, three_handed):
        three_handed.current_bet = 50
        three_handed.last_raise_amount = 50

        result = act(three_handed, ActionType.RAISE, 80)

        assert not result.accepted
        assert result.message == "Invalid raise. Must be at least 100."

    def test_bet_beyond_stack_rejected(self, player_factory, betting_state):
        state = betting_state([player_factory(stack=100), player_factory()])

        result = act(state, ActionType.BET, 200)

        assert not result.accepted
        assert result.message == "Cannot bet more than your stack."

    def test_opening_bet(self, three_handed):
        result = act(three_handed, ActionType.BET, 60)

        state = result.state
        assert state.current_bet == 60
        assert state.last_raise_amount == 60
        assert state.last_raiser_id == 1
        assert state.players[0].stack == 940
        assert state.messages[-1] == "Player1 bets 60."

    def test_raise_reopens_action(self, three_handed):
        """A full raise makes everyone else act again.

        Assumptions:
        - Seat 1 opened for 50 and seat 2 called, both have acted
        - Seat 0 raises to 100, a full raise of 50
        """
        three_handed.current_bet = 50
        three_handed.last_raise_amount = 50
        for player in three_handed.players[1:]:
            player.round_bet = 50
            player.total_pot_contribution = 50
            player.stack = 950
            player.has_acted = True

        result = act(three_handed, ActionType.RAISE, 100)

        state = result.state
        assert state.current_bet == 100
        assert state.last_raise_amount == 50
        assert state.last_raiser_id == 1
        assert state.players[0].has_acted
        assert not state.players[1].has_acted
        assert not state.players[2].has_acted
        assert state.active_player_index == 1
        assert state.messages[-1] == "Player1 raises to 100."


class TestAllIn:
    def test_full_all_in_raise_reopens_action(self, player_factory, betting_state):
        players = [
            player_factory(stack=300),
            player_factory(round_bet=100, total_pot_contribution=100, has_acted=True),
            player_factory(round_bet=100, total_pot_contribution=100, has_acted=True),
        ]
        state = betting_state(players, current_bet=100, last_raise_amount=100)

        result = act(state, ActionType.ALL_IN)

        new = result.state
        assert new.current_bet == 300
        assert new.last_raise_amount == 200
        assert new.last_raiser_id == 1
        assert new.players[0].is_all_in
        assert not new.players[1].has_acted
        assert new.messages[-1] == "Player1 goes all-in for 300."

    def test_short_all_in_does_not_reopen_action(
        self, player_factory, betting_state, mock_betting_logger
    ):
        """An all-in for less than a full raise only raises the amount to call.

        Assumptions:
        - Seats 1 and 2 have put in 100 and acted
        - Seat 0 goes all-in for 150, 50 more than the bet, short of the 100 minimum
        - Seat 1 may then call or fold but not raise
        """
        players = [
            player_factory(stack=150),
            player_factory(round_bet=100, total_pot_contribution=100, has_acted=True),
            player_factory(round_bet=100, total_pot_contribution=100, has_acted=True),
        ]
        state = betting_state(
            players, current_bet=100, last_raise_amount=100, last_raiser_id=2
        )

        result = act(state, ActionType.ALL_IN)

        new = result.state
        assert new.current_bet == 150
        assert new.last_raise_amount == 100
        assert new.last_raiser_id == 2
        assert new.players[1].has_acted
        assert new.players[2].has_acted
        assert new.active_player_index == 1
        mock_betting_logger.log_short_all_in.assert_called_once_with("Player1", 50, 100)

        raise_attempt = act(new, ActionType.RAISE, 300)
        assert not raise_attempt.accepted
        assert raise_attempt.message == "Action has not been reopened; you may only call or fold."

        after_call = act(new, ActionType.CALL)
        assert after_call.accepted
        assert after_call.state.players[1].round_bet == 150
        assert after_call.state.active_player_index == 2

    def test_all_in_under_current_bet_leaves_bet_alone(self, player_factory, betting_state):
        players = [
            player_factory(stack=40),
            player_factory(),
            player_factory(round_bet=100, total_pot_contribution=100, stack=900, has_acted=True),
        ]
        state = betting_state(
            players, current_bet=100, last_raise_amount=100, last_raiser_id=3
        )

        result = act(state, ActionType.ALL_IN)

        new = result.state
        assert new.current_bet == 100
        assert new.last_raiser_id == 3
        assert new.players[0].is_all_in
        assert new.players[0].round_bet == 40
        assert new.players[2].has_acted
        assert new.active_player_index == 1

    def test_all_in_player_is_skipped(self, player_factory, betting_state):
        players = [
            player_factory(),
            player_factory(stack=0, is_all_in=True, total_pot_contribution=50),
            player_factory(),
        ]
        state = betting_state(players)

        result = act(state, ActionType.CHECK)

        assert result.state.active_player_index == 2


class TestRejections:
    def test_rejection_returns_original_snapshot(self, three_handed):
        three_handed.current_bet = 20
        before = three_handed.model_dump()

        result = act(three_handed, ActionType.CHECK)

        assert result.state is three_handed
        assert three_handed.model_dump() == before

    def test_accepted_action_leaves_input_untouched(self, three_handed):
        before = three_handed.model_dump()

        result = act(three_handed, ActionType.BET, 40)

        assert result.state is not three_handed
        assert three_handed.model_dump() == before

    def test_no_betting_between_hands(self, three_handed):
        three_handed.game_stage = GameStage.PRE_DEAL

        result = act(three_handed, ActionType.CHECK)

        assert not result.accepted
        assert result.message == "No betting round is in progress."

    def test_no_betting_without_active_player(self, three_handed):
        three_handed.active_player_index = None

        result = act(three_handed, ActionType.FOLD)

        assert not result.accepted

    def test_folded_player_cannot_act(self, three_handed):
        three_handed.players[0].in_hand = False

        result = act(three_handed, ActionType.CHECK)

        assert not result.accepted
        assert result.message == "Player1 cannot act."


class TestRoundFlow:
    def test_fold_to_one_awards_everything(self, player_factory, betting_state):
        """The last player left wins every chip put in this hand.

        Assumptions:
        - Seat 0 bet 300, seat 1 folded after putting in 100
        - Seat 2 put in 100 and folds to the bet
        """
        players = [
            player_factory(stack=700, round_bet=300, total_pot_contribution=300, has_acted=True),
            player_factory(stack=900, in_hand=False, total_pot_contribution=100),
            player_factory(stack=900, round_bet=100, total_pot_contribution=100),
        ]
        state = betting_state(players, current_bet=300, active_player_index=2)

        result = act(state, ActionType.FOLD)

        new = result.state
        assert new.players[0].stack == 1200
        assert new.game_stage == GameStage.PRE_DEAL
        assert new.active_player_index is None
        assert new.pots == []
        assert all(p.total_pot_contribution == 0 for p in new.players)
        assert "Player1 wins 500. Final Stack: 1200" in new.messages

    def test_round_closes_and_advances_street(self, player_factory, betting_state):
        state = betting_state([player_factory(), player_factory()], dealer_button_index=1)

        first = act(state, ActionType.CHECK)
        assert first.state.game_stage == GameStage.FLOP
        second = act(first.state, ActionType.CHECK)

        new = second.state
        assert new.game_stage == GameStage.TURN
        assert new.active_player_index == 0
        assert new.current_bet == 0
        assert not any(p.has_acted for p in new.players)
        assert "--- Moving to Turn ---" in new.messages

    def test_new_street_resets_round_bets(self, player_factory, betting_state):
        players = [
            player_factory(stack=960, round_bet=40, total_pot_contribution=40, has_acted=True),
            player_factory(),
        ]
        state = betting_state(
            players, current_bet=40, last_raise_amount=40, last_raiser_id=1,
            active_player_index=1,
        )

        result = act(state, ActionType.CALL)

        new = result.state
        assert new.game_stage == GameStage.TURN
        assert [p.round_bet for p in new.players] == [0, 0]
        assert [p.total_pot_contribution for p in new.players] == [40, 40]
        assert new.last_raiser_id is None
        assert new.last_raise_amount is None

    def test_river_closes_to_showdown(self, player_factory, betting_state):
        players = [
            player_factory(total_pot_contribution=100, stack=900),
            player_factory(total_pot_contribution=100, stack=900),
        ]
        state = betting_state(players, game_stage=GameStage.RIVER)

        result = act(act(state, ActionType.CHECK).state, ActionType.CHECK)

        new = result.state
        assert new.game_stage == GameStage.SHOWDOWN
        assert new.active_player_index is None
        assert len(new.pots) == 1
        assert new.pots[0].amount == 200
        assert new.pots[0].eligible_players == {1, 2}
        assert new.messages[-1] == "Betting is complete. Calculating final pots for showdown."

    def test_called_all_in_skips_to_showdown(self, player_factory, betting_state):
        """Once fewer than two players can bet, the remaining streets are skipped."""
        players = [player_factory(stack=500), player_factory()]
        state = betting_state(players)

        shoved = act(state, ActionType.ALL_IN)
        result = act(shoved.state, ActionType.CALL)

        new = result.state
        assert new.game_stage == GameStage.SHOWDOWN
        assert len(new.pots) == 1
        assert new.pots[0].amount == 1000
        assert new.pots[0].eligible_players == {1, 2}
        assert new.players[1].stack == 500

    def test_advance_stage_with_nobody_to_act(self, player_factory, betting_state):
        players = [
            player_factory(stack=0, is_all_in=True, total_pot_contribution=100),
            player_factory(stack=0, is_all_in=True, total_pot_contribution=100),
        ]
        state = betting_state(players)

        new = advance_stage(state.copy())

        assert new.game_stage == GameStage.SHOWDOWN
        assert new.pots[0].amount == 200

    def test_advance_stage_from_pre_flop(self, player_factory, betting_state):
        players = [player_factory() for _ in range(3)]
        state = betting_state(players, game_stage=GameStage.PRE_FLOP, dealer_button_index=0)

        new = advance_stage(state.copy())

        assert new.game_stage == GameStage.FLOP
        assert new.active_player_index == 1
        assert new.messages[-1] == "--- Moving to Flop ---"
