# tests/test_config.py
import pytest

from daily_puzzles.config import (
    Config, DevelopmentConfig, FALLBACK_WORD, ProductionConfig, TestingConfig, WORD_LIST,
    get_config, validate_word_list_integrity
)


@pytest.mark.parametrize("name, expected", [
    ('development', DevelopmentConfig),
    ('production', ProductionConfig),
    ('Testing', TestingConfig),
    ('default', Config),
])
def test_get_config_by_name(name, expected):
    assert get_config(name) is expected


def test_get_config_reads_environment(monkeypatch):
    monkeypatch.setenv('APP_CONFIG', 'production')
    assert get_config() is ProductionConfig
    monkeypatch.delenv('APP_CONFIG')
    assert get_config() is Config


def test_get_config_rejects_unknown_name():
    with pytest.raises(ValueError, match="staging"):
        get_config('staging')


def test_variants_share_base_settings():
    assert ProductionConfig.DEBUG is False
    assert DevelopmentConfig.DEBUG is True
    assert TestingConfig.TESTING is True
    assert TestingConfig.FLIP_DURATION_SECONDS == Config.FLIP_DURATION_SECONDS


def test_bundled_word_list():
    assert validate_word_list_integrity()
    assert FALLBACK_WORD in WORD_LIST
    assert len(WORD_LIST) > 3000
    assert {"QUERY", "FJORD", "GAUZE"} <= WORD_LIST
