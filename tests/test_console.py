from bracketry.console import ConsoleSession, games_arg, main, swiss_rounds_arg
from bracketry.constants import TOURNAMENT_COMPLETED, TOURNAMENT_REGISTRATION
from bracketry.persistence import JsonSnapshotStore


def _run(path, *command):
    return main(["-f", str(path), *command])


def _new_cup(path, *extra):
    return _run(
        path,
        "new",
        "Cup",
        "--format",
        "single_elimination",
        "--seeding",
        "manual",
        "--participants",
        "Ann",
        "Bob",
        *extra,
    )


def test_command_line_session(tmp_path, capsys):
    path = tmp_path / "cup.json"

    assert _new_cup(path) == 0
    assert _run(path, "generate") == 0
    assert JsonSnapshotStore.load_path(path).status == TOURNAMENT_REGISTRATION

    assert _run(path, "result", "1.0", "2", "1") == 0
    tournament = JsonSnapshotStore.load_path(path)
    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.participant_name(tournament.winner_id) == "Ann"

    assert _run(path, "winner") == 0
    assert "Champion: Ann" in capsys.readouterr().out


def test_missing_file_is_reported(tmp_path, capsys):
    assert _run(tmp_path / "nothing.json", "matches") == 1
    assert "Error" in capsys.readouterr().out


def test_knockout_draw_is_rejected(tmp_path):
    path = tmp_path / "cup.json"
    _new_cup(path)
    _run(path, "generate")

    assert _run(path, "result", "1.0", "1", "1") == 1
    tournament = JsonSnapshotStore.load_path(path)
    assert tournament.match_at(1, 0).winner_id is None


def test_refused_command_keeps_the_saved_state(tmp_path, capsys):
    path = tmp_path / "cup.json"
    _new_cup(path)

    assert _run(path, "start") == 1
    assert "Refused" in capsys.readouterr().out
    assert JsonSnapshotStore.load_path(path).matches == []


def test_session_resolves_names_and_match_positions(tmp_path):
    path = tmp_path / "cup.json"
    _new_cup(path)
    _run(path, "generate")

    session = ConsoleSession(path)
    tournament = session.load()
    final = tournament.match_at(1, 0)

    assert session.participant_id("ann") == tournament.participants[0].id
    assert session.participant_id("Nobody") == "Nobody"
    assert session.match_id("1.0") == final.id
    assert session.match_id(final.id[:12]) == final.id


def test_argument_types():
    assert games_arg("2-1, 0-2") == [(2, 1), (0, 2)]
    assert swiss_rounds_arg("auto") == "auto"
    assert swiss_rounds_arg("4") == 4
