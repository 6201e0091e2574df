"""Tests for environment-driven configuration."""
import importlib

from tangkap import config
from tangkap.game.instructions import Locale


def test_locale_read_from_environment(monkeypatch):
    monkeypatch.setenv('LOCALE', 'en')
    try:
        importlib.reload(config)
        assert config.LOCALE == 'en'
        assert Locale().code == 'en'
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_tunables_have_no_prefix(monkeypatch):
    monkeypatch.setenv('TARGET_CATCH_COUNT', '3')
    try:
        importlib.reload(config)
        assert config.TARGET_CATCH_COUNT == 3
    finally:
        monkeypatch.undo()
        importlib.reload(config)
