"""
Tangkap Seru Game Mode

Round/level state machine. Objects fall, the player catches the ones that
match the level's instruction; ten correct catches clear the level. Timed
mode adds a per-level countdown that ends the round and records the
result on the leaderboard.

Three independent repeating timers run while a round is active:
- position: moves every falling object down (POSITION_TICK_MS)
- spawn: drops a new object (cadence per mode and level, re-created on
  level change)
- countdown: timed mode only, once per second, created once per round

The spawn timer reads the countdown through a StateCell at fire time, so
neither timer has to be rebuilt when the other one's state changes.

Usage:
    game = CatchGameMode(mode=GameMode.TIMED)
    game.start()
    game.confirm_identity("Rina")

    # Frame loop
    game.update(dt)
    for obj in game.objects:
        draw(obj)

    # Player input
    game.catch_object(obj.id)
    if game.state.is_level_complete:
        game.advance_level()
"""
import random
from contextlib import ExitStack
from typing import List, Optional

from tangkap import config
from tangkap.events import EventBus, EventType, GameEvent
from tangkap.game.instructions import InstructionGenerator, Locale
from tangkap.game.pacing import get_duration_for_level, spawn_interval_ms
from tangkap.game.resolver import CatchVerdict, resolve
from tangkap.game.spawner import ObjectSpawner
from tangkap.game_state import GameMode, GameState
from tangkap.leaderboard import LeaderboardStore
from tangkap.logging import emit_record, ensure_sink, get_logger
from tangkap.models import FallingObject, LeaderboardEntry, RoundState, SpawnStatistics
from tangkap.scheduler import IntervalScheduler, StateCell, TimerHandle
from tangkap.storage import JsonFileStorage

log = get_logger('game_mode')


class CatchGameMode:
    """Catch game round controller.

    Features:
    - Progressive family unlocks (fruit, then numbers, letters, shapes)
    - Spawn bias that keeps at least ~40% of objects catchable
    - Timed mode with shrinking per-level countdown and leaderboard
    - Untimed practice mode

    Args:
        mode: Timed or untimed play
        leaderboard: Leaderboard store (defaults to file storage in the data dir)
        scheduler: Timer scheduler (defaults to a fresh logical clock)
        events: Notification bus (defaults to a fresh bus)
        rng: Random source shared by spawner and instruction generator
        locale: Language for instructions and toasts
        target_catch_count: Correct catches needed per level
        instructions: Family/target generator (defaults to a random one)
    """

    def __init__(
        self,
        mode: GameMode = GameMode.UNTIMED,
        leaderboard: Optional[LeaderboardStore] = None,
        scheduler: Optional[IntervalScheduler] = None,
        events: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        locale: Optional[Locale] = None,
        target_catch_count: Optional[int] = None,
        instructions: Optional[InstructionGenerator] = None,
    ):
        self._mode = GameMode(mode)
        if leaderboard is None:
            leaderboard = LeaderboardStore(JsonFileStorage(config.get_data_dir()))
        self._leaderboard = leaderboard
        self._scheduler = scheduler if scheduler is not None else IntervalScheduler()
        self.events = events if events is not None else EventBus()

        self._rng = rng if rng is not None else random.Random()
        self._locale = locale if locale is not None else Locale()
        if instructions is None:
            instructions = InstructionGenerator(rng=self._rng, locale=self._locale)
        self._instructions = instructions
        self._spawner = ObjectSpawner(rng=self._rng)
        ensure_sink('rounds')

        # Round state
        self._round = RoundState(
            mode=self._mode,
            target_catch_count=target_catch_count or config.TARGET_CATCH_COUNT,
        )
        self._objects: List[FallingObject] = []
        self._stats = SpawnStatistics()
        self._countdown: StateCell[int] = StateCell(
            get_duration_for_level(1) if self.is_timed else 0
        )
        self._sync_countdown()
        self._result_recorded = False
        self._last_entry: Optional[LeaderboardEntry] = None

        # Timers
        self._position_timer: Optional[TimerHandle] = None
        self._spawn_timer: Optional[TimerHandle] = None
        self._countdown_timer: Optional[TimerHandle] = None

        # Session tracking
        self._round_active = False
        self._session_best = 0
        self._rounds_played = 0

    # =========================================================================
    # Read-only views for the presentation layer
    # =========================================================================

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def is_timed(self) -> bool:
        return self._mode == GameMode.TIMED

    @property
    def phase(self) -> GameState:
        return self._round.phase

    @property
    def state(self) -> RoundState:
        """Snapshot of the current round."""
        return self._round.model_copy()

    @property
    def objects(self) -> List[FallingObject]:
        """Active falling objects (copies)."""
        return [obj.model_copy() for obj in self._objects]

    @property
    def suggested_name(self) -> str:
        """Name to prefill in the identity form."""
        return self._round.player_name or self._leaderboard.saved_name

    @property
    def last_entry(self) -> Optional[LeaderboardEntry]:
        """Leaderboard entry recorded for the last finished round."""
        return self._last_entry

    @property
    def session_best(self) -> int:
        return max(self._session_best, self._round.score)

    @property
    def rounds_played(self) -> int:
        """Rounds finished or abandoned this session."""
        return self._rounds_played

    def top_entries(self, n: int = 10) -> List[LeaderboardEntry]:
        """Best n leaderboard entries for this game's mode."""
        return self._leaderboard.get_top_entries(self._mode, n)

    def get_score(self) -> int:
        return self._round.score

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Leave the menu: ask for a name (timed) or start playing (untimed)."""
        if self.is_timed:
            self._teardown_timers()
            self._round.phase = GameState.AWAITING_IDENTITY
            log.info("Waiting for player name")
        else:
            self._begin_round()

    def confirm_identity(self, name: str) -> bool:
        """Confirm the player name and start a timed round at level 1.

        Returns:
            True if the name was accepted. Rejections emit NAME_REJECTED
            and leave the round untouched.
        """
        if not self.is_timed:
            log.warning("Player names are only used in timed mode")
            return False

        error = self.validate_player_name(name)
        if error is not None:
            self._emit(EventType.NAME_REJECTED, error)
            return False

        name = name.strip()
        self._round.player_name = name
        self._leaderboard.store_name(name)
        self._emit(EventType.NAME_CONFIRMED, self._locale.message('name_confirmed', name=name),
                   name=name)
        self._begin_round()
        return True

    def validate_player_name(self, name: str) -> Optional[str]:
        """Return a localized error message, or None if the name is usable."""
        if len((name or "").strip()) < config.MIN_NAME_LENGTH:
            return self._locale.message('name_too_short', min_length=config.MIN_NAME_LENGTH)
        return None

    def restart(self) -> None:
        """Start over after a finished (or abandoned) round."""
        self._finish_session_round()
        self._teardown_timers()
        self._objects = []
        if self.is_timed:
            self._round.phase = GameState.AWAITING_IDENTITY
        else:
            self._begin_round()

    def exit(self) -> None:
        """Back to the menu. Cancels every timer; nothing fires afterwards."""
        try:
            self._finish_session_round()
        finally:
            self._objects = []
            self._round.phase = GameState.IDLE
            self._teardown_timers()
            log.info("Exited to menu")

    def __enter__(self) -> 'CatchGameMode':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.exit()
        return False

    def update(self, dt: float) -> None:
        """Advance the game clock by dt seconds, firing due timers."""
        self._scheduler.advance(dt * 1000.0)

    # =========================================================================
    # Player commands
    # =========================================================================

    def catch_object(self, object_id: str) -> Optional[CatchVerdict]:
        """Player caught (clicked) an object.

        The object is removed whatever the verdict.

        Returns:
            The verdict, or None if the object is gone or catches are not
            accepted right now (level complete, round over)
        """
        if self._round.phase != GameState.PLAYING:
            return None
        obj = self._find_object(object_id)
        if obj is None:
            return None

        verdict = resolve(obj, self._round.target_classification)
        self._objects.remove(obj)

        if verdict == CatchVerdict.CORRECT:
            self._round.score += config.CORRECT_REWARD
            self._round.catch_count += 1
            self._emit(EventType.CORRECT,
                       self._locale.message('correct', points=config.CORRECT_REWARD),
                       object_id=obj.id, points=config.CORRECT_REWARD)
            if self._round.catch_count >= self._round.target_catch_count:
                self._complete_level()
        else:
            self._emit(EventType.INCORRECT, self._locale.message('incorrect'),
                       object_id=obj.id)
        return verdict

    def miss_object(self, object_id: str) -> bool:
        """Object left the field uncaught. No score change, no verdict."""
        obj = self._find_object(object_id)
        if obj is None:
            return False
        self._objects.remove(obj)
        log.trace("Missed %s", obj.id)
        return True

    def advance_level(self) -> bool:
        """Go to the next level after the current one is complete.

        Returns:
            False if the level is not complete yet
        """
        if self._round.phase != GameState.LEVEL_COMPLETE:
            log.debug("advance_level ignored in %s", self._round.phase.value)
            return False

        self._round.level += 1
        if self.is_timed:
            self._countdown.value = get_duration_for_level(self._round.level)
            self._sync_countdown()
        self._start_level()
        return True

    def reset_leaderboard(self) -> None:
        """Clear this mode's leaderboard."""
        self._leaderboard.reset(self._mode)
        self._emit(EventType.LEADERBOARD_RESET, self._locale.message('leaderboard_reset'),
                   mode=self._mode.value)

    def record_result(self) -> Optional[LeaderboardEntry]:
        """Write the finished round to the leaderboard, once per round.

        Safe to call repeatedly; only the first call after the round ends
        adds an entry.

        Returns:
            The new entry, or None if nothing was recorded
        """
        if self._round.phase != GameState.GAME_OVER or self._result_recorded:
            return None
        self._result_recorded = True

        entry = self._leaderboard.add_entry(
            self._mode,
            name=self._round.player_name,
            score=self._round.score,
            level=self._round.level,
        )
        self._last_entry = entry
        self._emit(EventType.ENTRY_RECORDED,
                   self._locale.message('entry_recorded', score=entry.score),
                   entry_id=entry.id, rank=self._leaderboard.rank_of(self._mode, entry.id))
        return entry

    # =========================================================================
    # Round / level transitions
    # =========================================================================

    def _begin_round(self) -> None:
        self._finish_session_round()
        self._teardown_timers()

        self._round.score = 0
        self._round.level = 1
        self._round_active = True
        self._result_recorded = False
        self._last_entry = None
        if self.is_timed:
            self._countdown.value = get_duration_for_level(1)
            self._sync_countdown()

        self._start_level()

        self._position_timer = self._scheduler.set_interval(
            self._on_position_tick, config.POSITION_TICK_MS)
        if self.is_timed:
            self._countdown_timer = self._scheduler.set_interval(
                self._on_countdown_tick, config.COUNTDOWN_TICK_MS)
        log.info("Round started (%s)", self._mode.value)

    def _start_level(self) -> None:
        level = self._round.level
        family = self._instructions.choose_family(level)
        instruction = self._instructions.generate(family, level)

        self._round.catch_count = 0
        self._round.family = family
        self._round.target_classification = instruction.target_classification
        self._round.instruction = instruction.text
        self._objects = []
        self._stats.reset()
        self._round.phase = GameState.PLAYING

        # Cadence depends on level: replace, never stack
        self._scheduler.cancel(self._spawn_timer)
        self._spawn_timer = self._scheduler.set_interval(
            self._on_spawn_tick, spawn_interval_ms(self._mode, level))

        log.info("Level %d: %s", level, instruction.text)
        self._emit(EventType.LEVEL_STARTED, self._locale.message('level_started', level=level),
                   level=level, family=family.value,
                   target=instruction.target_classification, instruction=instruction.text)

    def _complete_level(self) -> None:
        self._round.phase = GameState.LEVEL_COMPLETE
        log.info("Level %d complete, score %d", self._round.level, self._round.score)
        self._emit(EventType.LEVEL_COMPLETE, self._locale.message('level_complete'),
                   level=self._round.level, score=self._round.score)

    def _enter_game_over(self) -> None:
        if self._round.phase == GameState.GAME_OVER:
            return
        self._round.phase = GameState.GAME_OVER
        self._teardown_timers()
        self._objects = []
        # Entry is stored before listeners hear TIME_UP
        entry = self.record_result()
        emit_record('rounds', {
            'type': 'round_over',
            'mode': self._mode.value,
            'player': self._round.player_name,
            'score': self._round.score,
            'level': self._round.level,
            'entry_id': entry.id if entry is not None else None,
        })
        self._emit(EventType.TIME_UP, self._locale.message('time_up'),
                   score=self._round.score, level=self._round.level)

    def _finish_session_round(self) -> None:
        if not self._round_active:
            return
        self._round_active = False
        self._session_best = max(self._session_best, self._round.score)
        self._rounds_played += 1

    # =========================================================================
    # Timer callbacks
    # =========================================================================

    def _can_spawn(self) -> bool:
        if self._round.phase != GameState.PLAYING:
            return False
        return not self.is_timed or self._countdown.value > 0

    def _on_spawn_tick(self) -> None:
        if not self._can_spawn():
            return
        obj = self._spawner.spawn_one(
            self._round.family,
            self._round.target_classification,
            self._round.level,
            self._stats,
        )
        self._objects.append(obj)

    def _on_position_tick(self) -> None:
        for obj in list(self._objects):
            obj.advance()
            if obj.is_below(config.FIELD_BOTTOM):
                self.miss_object(obj.id)

    def _on_countdown_tick(self) -> None:
        if self._round.phase != GameState.PLAYING or self._countdown.value <= 0:
            return
        self._countdown.value -= 1
        self._sync_countdown()
        if self._countdown.value <= 0:
            log.info("Time's up at level %d, score %d", self._round.level, self._round.score)
            self._enter_game_over()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _teardown_timers(self) -> None:
        handles = (self._spawn_timer, self._countdown_timer, self._position_timer)
        self._spawn_timer = None
        self._countdown_timer = None
        self._position_timer = None
        # Every cancel runs even if an earlier one raises
        with ExitStack() as stack:
            for handle in handles:
                stack.callback(self._scheduler.cancel, handle)

    def _sync_countdown(self) -> None:
        self._round.time_remaining = self._countdown.value if self.is_timed else None

    def _find_object(self, object_id: str) -> Optional[FallingObject]:
        for obj in self._objects:
            if obj.id == object_id:
                return obj
        return None

    def _emit(self, event_type: EventType, message: str = "", **payload) -> None:
        self.events.emit(GameEvent(type=event_type, message=message, payload=payload))
