"""Shared pytest fixtures for Tangkap Seru tests."""
import itertools
import random

import pytest

from tangkap.events import EventBus
from tangkap.game.game_mode import CatchGameMode
from tangkap.game.instructions import InstructionGenerator, Locale
from tangkap.game.resolver import CatchVerdict
from tangkap.game_state import GameMode
from tangkap.leaderboard import LeaderboardStore
from tangkap.models import Instruction, ObjectFamily
from tangkap.scheduler import IntervalScheduler
from tangkap.storage import MemoryStorage


class FixedInstructions(InstructionGenerator):
    """Instruction generator that always asks for the same family and target."""

    def __init__(self, family=ObjectFamily.FRUIT, target="red", **kwargs):
        super().__init__(**kwargs)
        self.family = family
        self.target = target

    def choose_family(self, level):
        return self.family

    def generate(self, family, level):
        return Instruction(
            text=self.locale.instruction(family, self.target),
            target_classification=self.target,
            family=family,
        )


class StubRng:
    """Duck-typed random source with scripted coin flips and picks."""

    def __init__(self, coin=0.9, pick=0):
        self.coin = coin
        self.pick = pick
        self.coin_flips = 0

    def random(self):
        self.coin_flips += 1
        return self.coin

    def choice(self, seq):
        return seq[self.pick % len(seq)]

    def uniform(self, a, b):
        return (a + b) / 2


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clock():
    """Millisecond clock that moves one second per call."""
    ticks = itertools.count(1_700_000_000_000, 1000)
    return lambda: next(ticks)


@pytest.fixture
def leaderboard(storage, clock):
    return LeaderboardStore(storage, clock=clock)


@pytest.fixture
def scheduler():
    return IntervalScheduler()


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def received(events):
    """List that collects every event emitted on the events bus."""
    collected = []
    events.subscribe(collected.append)
    return collected


@pytest.fixture
def locale():
    return Locale('id')


@pytest.fixture
def make_game(leaderboard, scheduler, events, rng, locale):
    """Factory for game modes wired to in-memory collaborators."""
    def _make(mode=GameMode.UNTIMED, fixed=True, family=ObjectFamily.FRUIT,
              target="red", **kwargs):
        instructions = None
        if fixed:
            instructions = FixedInstructions(family=family, target=target,
                                             rng=rng, locale=locale)
        return CatchGameMode(
            mode=mode,
            leaderboard=leaderboard,
            scheduler=scheduler,
            events=events,
            rng=rng,
            locale=locale,
            instructions=instructions,
            **kwargs,
        )
    return _make


@pytest.fixture
def catch_correct():
    """Helper that plays the game forward and catches n matching objects."""
    def _catch(game, count, step=0.05, max_steps=20000):
        caught = 0
        steps = 0
        while caught < count:
            target = game.state.target_classification
            match = next((o for o in game.objects if o.classification == target), None)
            if match is not None:
                assert game.catch_object(match.id) == CatchVerdict.CORRECT
                caught += 1
                continue
            game.update(step)
            steps += 1
            assert steps < max_steps, "no matching object spawned"
        return caught
    return _catch


@pytest.fixture
def stub_rng():
    return StubRng
