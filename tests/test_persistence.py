import pytest

from bracketry.constants import FORMAT_CHAMPIONSHIP
from bracketry.exceptions import PersistenceException, SnapshotLoadException
from bracketry.persistence import DebouncedSync, JsonSnapshotStore
from bracketry.tournament.engine import TournamentEngine


def _failing_writer(snapshot):
    raise PersistenceException("disk full")


def test_store_round_trip(tmp_path, new_tournament):
    store = JsonSnapshotStore(tmp_path / "saves")
    tournament = new_tournament(FORMAT_CHAMPIONSHIP, 3)

    path = store.save(tournament)
    assert path == store.path_for(tournament.id)
    assert store.list_ids() == [tournament.id]

    loaded = store.load(tournament.id)
    assert loaded.to_dict() == tournament.to_dict()

    assert store.delete(tournament.id)
    assert not store.delete(tournament.id)
    assert store.list_ids() == []


def test_store_without_directory_lists_nothing(tmp_path):
    assert JsonSnapshotStore(tmp_path / "missing").list_ids() == []


def test_loading_missing_or_broken_snapshots(tmp_path):
    store = JsonSnapshotStore(tmp_path)
    with pytest.raises(SnapshotLoadException):
        store.load("tournament-nope")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotLoadException):
        JsonSnapshotStore.load_path(broken)

    incomplete = tmp_path / "incomplete.json"
    incomplete.write_text('{"name": "Cup"}', encoding="utf-8")
    with pytest.raises(SnapshotLoadException):
        JsonSnapshotStore.load_path(incomplete)


def test_sync_writes_only_the_latest_state(new_tournament):
    written = []
    sync = DebouncedSync(written.append, delay=60)
    first = new_tournament(FORMAT_CHAMPIONSHIP, 3)
    second = new_tournament(FORMAT_CHAMPIONSHIP, 4)

    sync.schedule(first)
    sync.schedule(second)
    assert sync.has_pending
    sync.flush()

    assert [snapshot["id"] for snapshot in written] == [second.id]
    assert not sync.has_pending
    sync.flush()
    assert len(written) == 1


def test_sync_cancel_drops_the_pending_state(new_tournament):
    written = []
    sync = DebouncedSync(written.append, delay=60)
    sync.schedule(new_tournament(FORMAT_CHAMPIONSHIP, 3))
    sync.cancel()
    sync.flush()
    assert written == []


def test_sync_failures_become_warnings(new_tournament):
    reported = []
    sync = DebouncedSync(_failing_writer, delay=60, on_warning=reported.append)
    sync.schedule(new_tournament(FORMAT_CHAMPIONSHIP, 3))
    sync.flush()

    warnings = sync.pending_warnings()
    assert len(warnings) == 1
    assert "disk full" in warnings[0]
    assert reported == warnings
    assert sync.pending_warnings() == []


def test_engine_reports_sync_failures_on_the_next_operation(make_players):
    sync = DebouncedSync(_failing_writer, delay=60)
    engine = TournamentEngine(sync=sync)
    try:
        created = engine.create_tournament(
            "Cup", FORMAT_CHAMPIONSHIP, participants=make_players(3)
        )
        assert created.warnings == []
        sync.flush()

        generated = engine.generate_bracket(created.tournament)
        assert generated.ok
        assert len(generated.warnings) == 1
        assert generated.tournament.matches
    finally:
        sync.cancel()
