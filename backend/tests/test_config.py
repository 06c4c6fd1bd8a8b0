from config import Settings, _list_overrides, _parse_list_env


def test_parse_comma_separated(monkeypatch):
    monkeypatch.setenv("GEMINI_MODELS", "gemini-2.5-flash, gemini-2.5-pro,")
    assert _parse_list_env("GEMINI_MODELS") == ["gemini-2.5-flash", "gemini-2.5-pro"]


def test_parse_json_list(monkeypatch):
    monkeypatch.setenv("GEMINI_MODELS", '["a", "b"]')
    assert _parse_list_env("GEMINI_MODELS") == ["a", "b"]


def test_unset_env_gives_none(monkeypatch):
    monkeypatch.delenv("GEMINI_MODELS", raising=False)
    assert _parse_list_env("GEMINI_MODELS") is None


def test_model_chain_override(monkeypatch):
    monkeypatch.setenv("GEMINI_MODELS", "model-x,model-y")
    settings = Settings(**_list_overrides())
    assert settings.gemini_models == ["model-x", "model-y"]


def test_defaults(monkeypatch):
    monkeypatch.delenv("GEMINI_MODELS", raising=False)
    monkeypatch.delenv("MIN_RESUME_CHARS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.gemini_models[0] == "gemini-2.5-flash"
    assert settings.min_resume_chars == 200
    assert settings.max_error_message_chars == 500
