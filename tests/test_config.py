import json

from morseflow.config import CONFIG_ENV_VAR, AppConfig, get_app_config, load_config


def test_defaults():
    cfg = load_config()
    assert cfg.get("translator", "wpm") == 20
    assert cfg.get("translator", "unsupported_character_mode") == "throw"
    assert cfg.get("translator", "max_file_size") == 52428800
    assert cfg.get("audio", "frequency") == 600
    assert cfg.get("connector", "type") == "lan"


def test_missing_key_returns_default():
    cfg = load_config()
    assert cfg.get("translator", "nope", default=7) == 7
    assert cfg.get("translator", "wpm", "deeper") is None


def test_user_file_overrides(tmp_path):
    user = tmp_path / "user.json"
    user.write_text(json.dumps({"translator": {"wpm": 15}, "extra": {"kept": True}}), encoding="utf-8")
    cfg = load_config(user)
    assert cfg.get("translator", "wpm") == 15
    assert cfg.get("translator", "replacement_character") == "?"
    assert cfg.get("extra", "kept") is True


def test_missing_user_file_is_ignored(tmp_path):
    cfg = load_config(tmp_path / "absent.json")
    assert cfg.get("translator", "wpm") == 20


def test_env_var(tmp_path, monkeypatch):
    user = tmp_path / "user.json"
    user.write_text(json.dumps({"audio": {"volume": 0.2}}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(user))
    assert get_app_config().get("audio", "volume") == 0.2


def test_section_is_a_copy():
    cfg = AppConfig({"audio": {"volume": 0.5}})
    cfg.section("audio")["volume"] = 1.0
    assert cfg.get("audio", "volume") == 0.5
    assert cfg.section("missing") == {}


def test_merge_is_recursive():
    cfg = AppConfig({"a": {"x": 1, "y": 2}})
    cfg.merge({"a": {"y": 3}, "b": 4})
    assert cfg.data == {"a": {"x": 1, "y": 3}, "b": 4}
