import pytest

from game.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()

        assert config.small_blind == 10
        assert config.big_blind == 20
        assert config.starting_stack == 1000
        assert config.boot_amount == 10
        assert config.max_messages == 100

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"small_blind": 0},
            {"big_blind": -20},
            {"small_blind": 30, "big_blind": 20},
            {"starting_stack": -1},
            {"boot_amount": 0},
            {"max_messages": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)


class TestFromEnv:
    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TABLETALLY_SMALL_BLIND", "25")
        monkeypatch.setenv("TABLETALLY_BIG_BLIND", "50")

        config = GameConfig.from_env(str(tmp_path / "missing.env"))

        assert config.small_blind == 25
        assert config.big_blind == 50
        assert config.starting_stack == 1000

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TABLETALLY_STARTING_STACK=5000\nTABLETALLY_BOOT_AMOUNT=5\n")

        config = GameConfig.from_env(str(env_file))

        assert config.starting_stack == 5000
        assert config.boot_amount == 5

    def test_environment_beats_env_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TABLETALLY_MAX_MESSAGES=10\n")
        monkeypatch.setenv("TABLETALLY_MAX_MESSAGES", "40")

        assert GameConfig.from_env(str(env_file)).max_messages == 40

    def test_blank_value_keeps_default(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TABLETALLY_BIG_BLIND", " ")
        assert GameConfig.from_env(str(tmp_path / "missing.env")).big_blind == 20

    def test_non_integer_rejected(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TABLETALLY_BIG_BLIND", "lots")

        with pytest.raises(ValueError, match="TABLETALLY_BIG_BLIND"):
            GameConfig.from_env(str(tmp_path / "missing.env"))

    def test_invalid_combination_rejected(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TABLETALLY_SMALL_BLIND", "100")

        with pytest.raises(ValueError):
            GameConfig.from_env(str(tmp_path / "missing.env"))


class TestBlackjackSettings:
    def test_defaults(self):
        config = GameConfig()

        assert config.min_bet == 10
        assert config.max_bet == 1000
        assert config.blackjack_payout == "3to2"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_bet": 0},
            {"min_bet": 50, "max_bet": 40},
            {"blackjack_payout": "2to1"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TABLETALLY_MIN_BET", "25")
        monkeypatch.setenv("TABLETALLY_MAX_BET", "500")
        monkeypatch.setenv("TABLETALLY_BLACKJACK_PAYOUT", "6to5")

        config = GameConfig.from_env(str(tmp_path / "missing.env"))

        assert config.min_bet == 25
        assert config.max_bet == 500
        assert config.blackjack_payout == "6to5"
