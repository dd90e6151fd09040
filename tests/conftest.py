import random

import pytest

from bracketry.constants import SEEDING_MANUAL
from bracketry.models.participant import Participant
from bracketry.models.tournament.tournament_config import TournamentConfig
from bracketry.tournament.engine import TournamentEngine


@pytest.fixture
def make_players():
    """Factory for participants p1..pN, seeded 1..N unless told otherwise."""

    def _make(count, seeded=True):
        return [
            Participant(id=f"p{i}", name=f"Player {i}", seed=i if seeded else None)
            for i in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def engine():
    return TournamentEngine(rng=random.Random(1234))


@pytest.fixture
def new_tournament(engine, make_players):
    """Factory for a tournament with p1..pN, manually seeded and generated."""

    def _new(tournament_format, count, generate=True, **config):
        config.setdefault("seeding", SEEDING_MANUAL)
        result = engine.create_tournament(
            "Test Cup",
            tournament_format,
            TournamentConfig(**config),
            make_players(count),
        )
        tournament = result.tournament
        if generate:
            tournament = engine.generate_bracket(tournament).tournament
        return tournament

    return _new
