import pytest

from bracketry.constants import (
    FORMAT_GROUPS,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    SWISS_ROUNDS_AUTO,
)
from bracketry.exceptions import InvalidConfigurationException
from bracketry.models.participant import Participant
from bracketry.models.tournament.event import create_event
from bracketry.models.tournament.format_rules import SwissRules, format_rules
from bracketry.models.tournament.tournament import Tournament
from bracketry.models.tournament.tournament_config import TournamentConfig


def test_tournament_survives_serialization(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    match = tournament.match_at(1, 0)
    tournament = engine.submit_result(tournament, match.id, 2, 0).tournament
    tournament = engine.eliminate_participant(tournament, "p2").tournament

    data = tournament.to_dict()
    restored = Tournament.from_dict(data)

    assert restored.to_dict() == data
    assert restored.match_at(1, 0).winner_id == "p1"
    assert restored.is_eliminated("p2")
    assert restored.created_at == tournament.created_at


def test_config_accepts_camel_case_keys():
    config = TournamentConfig.from_dict(
        {"groupCount": 4, "bestOf": 3, "swissRounds": 5, "unknown": True}
    )
    assert config.group_count == 4
    assert config.best_of == 3
    assert config.swiss_rounds == 5

    assert TournamentConfig.from_dict(config.to_dict()) == config
    assert TournamentConfig.from_dict(None) == TournamentConfig()


def test_participant_create_generates_ids():
    first = Participant.create("Ann", seed=1)
    second = Participant.create("Ann")
    assert first.id != second.id
    assert Participant.from_dict(first.to_dict()) == first


def test_unknown_event_type_is_rejected():
    with pytest.raises(ValueError):
        create_event("match_exploded", "boom")


def test_unknown_format_is_rejected():
    with pytest.raises(InvalidConfigurationException):
        format_rules("ladder", TournamentConfig())


@pytest.mark.parametrize(
    "rounds, participants, expected",
    [
        (SWISS_ROUNDS_AUTO, 2, 1),
        (SWISS_ROUNDS_AUTO, 5, 3),
        (SWISS_ROUNDS_AUTO, 8, 3),
        (SWISS_ROUNDS_AUTO, 9, 4),
        (7, 4, 7),
    ],
)
def test_swiss_round_count(rounds, participants, expected):
    rules = format_rules(FORMAT_SWISS, TournamentConfig(swiss_rounds=rounds))
    assert isinstance(rules, SwissRules)
    assert rules.total_rounds(participants) == expected


def test_group_rules_leave_out_recorded_only_settings():
    config = TournamentConfig(group_count=3, qualifiers_per_group=1)
    rules = format_rules(FORMAT_GROUPS, config)

    assert rules.group_count == 3
    assert not hasattr(rules, "qualifiers_per_group")
    assert TournamentConfig.from_dict(config.to_dict()).qualifiers_per_group == 1
