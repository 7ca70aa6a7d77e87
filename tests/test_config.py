from mcp_dice_engine.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.server_name == "mcp-dice-engine"
    assert settings.log_level == "INFO"
    assert settings.total_dice_cap == 10_000


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DICE_ENGINE_MAX_TOTAL_DICE", "0")
    monkeypatch.setenv("DICE_ENGINE_LOG_LEVEL", "DEBUG")
    settings = Settings(_env_file=None)
    assert settings.total_dice_cap is None
    assert settings.log_level == "DEBUG"
