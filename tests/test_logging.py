"""Tests for console loggers and structured record sinks."""
import json

import pytest

from tangkap import logging as tlog
from tangkap.game_state import GameMode
from tangkap.leaderboard import LeaderboardStore
from tangkap.logging import (
    FileSink,
    LogLevel,
    NullSink,
    emit_record,
    get_logger,
    register_sink,
)


@pytest.fixture
def isolated_config(monkeypatch):
    """Restore logging configuration and sinks after the test."""
    monkeypatch.setitem(tlog._config, 'default_level', LogLevel.INFO)
    monkeypatch.setitem(tlog._config, 'module_levels', {})
    monkeypatch.setitem(tlog._config, 'modules', {})
    monkeypatch.setitem(tlog._config, 'log_dir', None)
    monkeypatch.setattr(tlog, '_sinks', {})
    yield tlog._config
    tlog.close_all_sinks()


def test_logger_format_and_level(isolated_config, capsys):
    log = get_logger('test_fmt')
    log.debug("hidden")
    log.info("Level %d started", 2)

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[test_fmt] INFO: Level 2 started" in out


def test_module_level_override(isolated_config, capsys):
    tlog.configure_logging(level='WARNING', modules={'test_mod': 'DEBUG'})
    get_logger('test_mod').debug("visible")
    get_logger('test_other').info("quiet")

    out = capsys.readouterr().out
    assert "visible" in out
    assert "quiet" not in out


def test_bad_format_args_do_not_raise(isolated_config, capsys):
    get_logger('test_args').info("%d points", "many")
    assert "%d points" in capsys.readouterr().out


def test_get_logger_is_cached():
    assert get_logger('same') is get_logger('same')


def test_emit_record_without_sink(isolated_config):
    assert emit_record('nobody', {'type': 'x'}) is False


def test_file_sink_writes_jsonl(isolated_config, tmp_path):
    sink = FileSink(log_dir=str(tmp_path), session_name="s1")
    register_sink('rounds', sink)
    assert emit_record('rounds', {'type': 'round_over', 'score': 40})
    sink.flush()

    path = sink.log_paths['rounds']
    sink.close()
    lines = [json.loads(line) for line in path.read_text().splitlines()]
    assert [line['type'] for line in lines] == ['header', 'round_over', 'footer']
    assert lines[1]['score'] == 40


def test_sink_factory_follows_module_settings(isolated_config, tmp_path):
    assert isinstance(tlog.create_sink_for_module('rounds'), NullSink)
    isolated_config['modules']['rounds'] = {'enabled': True, 'dir': str(tmp_path)}
    assert isinstance(tlog.create_sink_for_module('rounds'), FileSink)


def test_env_settings_are_parsed(isolated_config, monkeypatch):
    monkeypatch.setenv('TANGKAP_LOG_LEVEL', 'ERROR')
    monkeypatch.setenv('TANGKAP_LOG_SPAWNER', 'TRACE')
    monkeypatch.setenv('TANGKAP_LOGGING_ROUNDS_ENABLED', 'true')
    tlog._load_env_config()

    assert isolated_config['default_level'] == LogLevel.ERROR
    assert isolated_config['module_levels']['spawner'] == LogLevel.TRACE
    assert isolated_config['modules']['rounds'] == {'enabled': True}


def test_ensure_sink_replaces_null_sink_once_enabled(isolated_config, tmp_path):
    assert isinstance(tlog.ensure_sink('rounds'), NullSink)

    isolated_config['modules']['rounds'] = {'enabled': True, 'dir': str(tmp_path)}
    sink = tlog.ensure_sink('rounds')
    assert isinstance(sink, FileSink)
    assert tlog.ensure_sink('rounds') is sink


def test_finished_round_is_written_to_rounds_file(isolated_config, tmp_path, make_game):
    isolated_config['modules']['rounds'] = {'enabled': True, 'dir': str(tmp_path)}
    game = make_game(mode=GameMode.TIMED)
    game.start()
    game.confirm_identity("Rina")
    game.update(61)
    tlog.get_sink('rounds').flush()

    files = list(tmp_path.glob('*_rounds.jsonl'))
    assert len(files) == 1
    records = [json.loads(line) for line in files[0].read_text().splitlines()]
    round_over = [r for r in records if r['type'] == 'round_over']
    assert len(round_over) == 1
    assert round_over[0]['player'] == "Rina"
    assert round_over[0]['entry_id'] == game.last_entry.id


def test_leaderboard_writes_are_recorded(isolated_config, tmp_path, storage, clock):
    isolated_config['modules']['leaderboard'] = {'enabled': True, 'dir': str(tmp_path)}
    store = LeaderboardStore(storage, clock=clock)
    entry = store.add_entry(GameMode.TIMED, "Rina", score=40, level=3)
    tlog.get_sink('leaderboard').flush()

    path, = tmp_path.glob('*_leaderboard.jsonl')
    records = [json.loads(line) for line in path.read_text().splitlines()]
    added = [r for r in records if r['type'] == 'entry_added']
    assert added[0]['id'] == entry.id
    assert added[0]['createdAt'] == entry.created_at
