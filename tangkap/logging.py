"""
Tangkap Seru Logging

Two halves:
- Console loggers, one per module, whose level comes from the environment
  or configure_logging().
- Structured records (finished rounds, leaderboard writes) sent to a
  per-module sink. A module's records go to a JSONL file only when that
  module is switched on; otherwise they are dropped.

Usage:
    from tangkap.logging import get_logger, emit_record

    log = get_logger('spawner')
    log.debug("Spawned %s", obj.id)

    emit_record('rounds', {'type': 'round_over', 'score': 120, 'level': 3})

Environment:
    TANGKAP_LOG_LEVEL=DEBUG               # Default console level
    TANGKAP_LOG_SPAWNER=TRACE             # Console level for one module
    TANGKAP_LOG_DIR=/tmp/tangkap-logs     # Where JSONL record files go
    TANGKAP_LOGGING_ROUNDS_ENABLED=true   # Write 'rounds' records to disk
    TANGKAP_LOGGING_ROUNDS_DIR=/tmp/x     # Per-module directory override
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO


class LogLevel(IntEnum):
    """Console levels, numbered like the stdlib logging module."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES = {level.name: level for level in LogLevel}
_LEVEL_NAMES['WARN'] = LogLevel.WARNING


def _parse_level(name: str) -> LogLevel:
    return _LEVEL_NAMES.get(name.strip().upper(), LogLevel.INFO)


def _parse_flag(value: str) -> Any:
    lowered = value.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    return value


# Process-wide settings, filled from the environment on import
_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},   # module -> LogLevel
    'log_dir': None,       # None = TANGKAP_LOG_DIR or the platform default
    'modules': {},         # module -> {'enabled': bool, 'dir': str}
}


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Set console levels and the record directory from code.

    Args:
        level: Default console level
        modules: module name -> console level overrides
        log_dir: Directory for JSONL record files
    """
    _config['default_level'] = _parse_level(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module.lower()] = _parse_level(module_level)
    if log_dir is not None:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    """Read TANGKAP_LOG_* (levels) and TANGKAP_LOGGING_* (record sinks)."""
    for key, value in os.environ.items():
        if key == 'TANGKAP_LOG_LEVEL':
            _config['default_level'] = _parse_level(value)
        elif key == 'TANGKAP_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith('TANGKAP_LOG_'):
            _config['module_levels'][key[len('TANGKAP_LOG_'):].lower()] = _parse_level(value)
        elif key.startswith('TANGKAP_LOGGING_'):
            module, _, setting = key[len('TANGKAP_LOGGING_'):].lower().partition('_')
            if module and setting:
                _config['modules'].setdefault(module, {})[setting] = _parse_flag(value)


def get_log_dir() -> str:
    """Record directory: configured value, then TANGKAP_LOG_DIR, then a
    per-platform user data directory."""
    configured = _config.get('log_dir') or os.environ.get('TANGKAP_LOG_DIR')
    if configured:
        return str(Path(configured).expanduser())

    if sys.platform == 'darwin':
        base = Path.home() / 'Library' / 'Application Support' / 'TangkapSeru'
    elif sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', str(Path.home()))) / 'TangkapSeru'
    else:
        xdg = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
        base = Path(xdg) / 'tangkap-seru'
    return str(base / 'logs')


# =============================================================================
# Console loggers
# =============================================================================

class GameLogger:
    """Prints "[module] LEVEL: message" lines at or above the module's level."""

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower().replace('.', '_')

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def _log(self, level: LogLevel, label: str, msg: str, args: tuple) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, args)

    def exception(self, msg: str, *args) -> None:
        """Log at ERROR, followed by the traceback being handled."""
        self._log(LogLevel.ERROR, 'ERROR', msg, args)
        exc_type, _, _ = sys.exc_info()
        if exc_type is None:
            return
        for line in traceback.format_exc().rstrip().splitlines():
            self._log(LogLevel.ERROR, 'TRACE', line, ())


@lru_cache(maxsize=64)
def get_logger(module: str) -> GameLogger:
    """Logger for module (one shared instance per name)."""
    return GameLogger(module)


# =============================================================================
# Structured records
# =============================================================================

class LogSink(ABC):
    """Destination for a module's structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered records to their destination."""

    @abstractmethod
    def close(self) -> None:
        """Release the destination. Later emits reopen it."""


class FileSink(LogSink):
    """
    One JSONL file per module: `<session>_<module>.jsonl`.

    Each file starts with a header record and gets a footer record when
    the sink is closed. Files are opened lazily on the first record.

    Args:
        log_dir: Directory for the files (default: get_log_dir())
        session_name: File name prefix (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def _path(self, module: str) -> Path:
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        return self._log_dir / f"{self._session_name}_{module}.jsonl"

    def _write(self, module: str, record: Dict[str, Any]) -> None:
        self._files[module].write(json.dumps(record) + "\n")

    def _open(self, module: str) -> None:
        path = self._path(module)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._files[module] = open(path, 'a', encoding='utf-8')
        self._write(module, {
            'type': 'header',
            'module': module,
            'session_name': self._session_name,
            'start_time': time.time(),
        })

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        if module not in self._files:
            self._open(module)
        self._write(module, {'wall_time': time.time(), **record})

    def flush(self) -> None:
        for handle in self._files.values():
            handle.flush()

    def close(self) -> None:
        for module in list(self._files):
            self._write(module, {'type': 'footer', 'module': module, 'end_time': time.time()})
            self._files.pop(module).close()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Paths of the files opened so far, by module."""
        return {module: self._path(module) for module in self._files}


class NullSink(LogSink):
    """Drops every record (module not switched on)."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route module's records to sink, replacing any earlier sink."""
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module)


def create_sink_for_module(module: str, session_name: Optional[str] = None) -> LogSink:
    """
    FileSink if TANGKAP_LOGGING_<MODULE>_ENABLED is set (or the module is
    enabled in _config['modules']), NullSink otherwise.
    """
    settings = _config['modules'].get(module.lower(), {})
    if settings.get('enabled') is not True:
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


def ensure_sink(module: str) -> LogSink:
    """
    Register the configured sink for module unless a real one is already set.

    Called where a module's records originate. A NullSink left by an
    earlier call is replaced, so enabling a module later takes effect for
    objects created afterwards.
    """
    sink = _sinks.get(module)
    if sink is None or isinstance(sink, NullSink):
        sink = create_sink_for_module(module)
        register_sink(module, sink)
    return sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to module's sink.

    Returns:
        False if no sink is registered for module
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink."""
    try:
        for sink in _sinks.values():
            sink.close()
    finally:
        _sinks.clear()


_load_env_config()
