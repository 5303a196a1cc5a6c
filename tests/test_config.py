"""Configuration loading tests"""

from pathlib import Path

import pytest

from impostor.engine.game import GameConfig
from impostor.engine.phases import GamePhase
from impostor.main import build_controller, load_config, parse_args

SHIPPED_CONFIG = Path(__file__).resolve().parent.parent / "config" / "game.yaml"


class TestGameConfig:

    def test_defaults(self):
        config = GameConfig()
        assert (config.min_players, config.max_players) == (3, 7)
        assert config.rounds_total == 3
        assert config.turn_seconds == 20
        assert config.default_category == "Random"

    def test_from_dict_ignores_unknown_keys(self):
        config = GameConfig.from_dict({"rounds_total": 2, "theme": "dark"})
        assert config.rounds_total == 2
        assert config.turn_seconds == 20

    def test_from_none(self):
        assert GameConfig.from_dict(None) == GameConfig()

    @pytest.mark.parametrize("data", ["oops", ["rounds_total", 2], 5])
    def test_from_dict_rejects_non_mapping(self, data):
        with pytest.raises(ValueError):
            GameConfig.from_dict(data)

    @pytest.mark.parametrize("kwargs", [
        {"min_players": 0},
        {"min_players": 5, "max_players": 4},
        {"rounds_total": 0},
        {"turn_seconds": -1},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)


class TestLoadConfig:

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            load_config(str(tmp_path / "nope.yaml"))
        assert exc.value.code == 1

    def test_empty_file(self, tmp_path):
        path = tmp_path / "game.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_build_controller(self, tmp_path):
        words = tmp_path / "words.yaml"
        words.write_text(
            "categories:\n"
            "  Jobs:\n"
            "    - secret: Chef\n"
            "      decoy: Kitchen Role\n"
        )
        path = tmp_path / "game.yaml"
        path.write_text(
            "game:\n"
            "  rounds_total: 2\n"
            "  turn_seconds: 10\n"
            f"  word_bank_path: {words}\n"
            "players: [Ana, Ben, Cy]\n"
        )
        controller = build_controller(load_config(str(path)), seed=3)

        assert controller.config.rounds_total == 2
        assert controller.roster == ("Ana", "Ben", "Cy")
        assert controller.categories() == ["Random", "Jobs"]

        controller.create_session(list(controller.roster))
        assert controller.current_phase() == GamePhase.ASSIGNING
        assert controller.session.word_pair.secret_word == "Chef"
        assert controller.timer_state().duration == 10

    def test_missing_word_bank_exits(self, tmp_path):
        config_data = {"game": {"word_bank_path": str(tmp_path / "missing.yaml")}}
        with pytest.raises(SystemExit) as exc:
            build_controller(config_data)
        assert exc.value.code == 1

    def test_shipped_config(self):
        controller = build_controller(load_config(str(SHIPPED_CONFIG)))
        assert controller.roster == ("Ana", "Ben", "Cy")
        assert controller.config == GameConfig()


class TestArgs:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("IMPOSTOR_CONFIG", raising=False)
        monkeypatch.delenv("IMPOSTOR_SEED", raising=False)
        args = parse_args([])
        assert args.config == "config/game.yaml"
        assert args.seed is None
        assert args.log_dir is None

    def test_env_seed(self, monkeypatch):
        monkeypatch.setenv("IMPOSTOR_SEED", "42")
        assert parse_args([]).seed == 42

    def test_flags(self):
        args = parse_args(["--config", "x.yaml", "--seed", "7", "--log-dir", "logs"])
        assert (args.config, args.seed, args.log_dir) == ("x.yaml", 7, "logs")
