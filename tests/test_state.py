from datetime import datetime, timezone

import pytest

from core.constants import DEFAULT_STAGE_NAMES
from core.models import Stage
from core.progress import song_completion
from core.state import AlbumState


class SaveCounter:
    """Wraps a store and counts save() calls."""

    def __init__(self, store):
        self.store = store
        self.saves = 0

    def __getattr__(self, name):
        return getattr(self.store, name)

    def save(self, songs, title, target):
        self.saves += 1
        self.store.save(songs, title, target)


@pytest.fixture
def counted(state):
    counter = SaveCounter(state.get_store())
    return AlbumState(state.get_album(), counter), counter


def reloaded(state):
    return AlbumState.load(state.get_store())


def test_default_state_is_default_catalog(default_state):
    songs = default_state.get_songs()
    assert len(songs) == 20
    assert default_state.song_ids() == list(range(1, 21))
    assert all([s.name for s in song.stages] == DEFAULT_STAGE_NAMES for song in songs)


def test_rename_album_saves(state):
    assert state.rename_album("  New Title ")
    assert state.get_title() == "New Title"
    assert reloaded(state).get_title() == "New Title"


def test_blank_album_title_is_ignored(counted):
    state, counter = counted
    assert not state.rename_album("   ")
    assert state.get_title() == "Sample Album"
    assert counter.saves == 0


def test_set_deadline_normalizes_to_utc(state):
    assert state.set_deadline("2026-08-01T02:00:00+02:00")
    assert state.get_target() == datetime(2026, 8, 1, tzinfo=timezone.utc)

    record = state.get_store().load()
    assert record[2].isoformat() == "2026-08-01T00:00:00+00:00"


def test_set_deadline_accepts_naive_local_time(state):
    naive = datetime(2027, 1, 15, 9, 30)
    assert state.set_deadline(naive)
    assert state.get_target() == naive.astimezone().astimezone(timezone.utc)
    assert state.get_target().tzinfo == timezone.utc


def test_unreadable_deadline_is_a_no_op(counted):
    state, counter = counted
    before = state.get_target()
    assert not state.set_deadline("whenever")
    assert state.get_target() == before
    assert counter.saves == 0


def test_rename_song(state):
    assert state.rename_song(2, "Lead Single")
    assert state.get_song(2).title == "Lead Single"
    assert reloaded(state).get_song(2).title == "Lead Single"


def test_add_stage_uses_position_label(state):
    assert state.add_stage(3)
    song = state.get_song(3)
    assert song.stages[-1] == Stage("Stage 3", 0)
    assert [s.name for s in song.stages[:2]] == ["Demo", "Mix"]


def test_add_stage_to_empty_song(state):
    assert state.add_stage(6)
    assert state.get_song(6).stages == (Stage("Stage 1", 0),)


def test_update_stage_clamps(state):
    assert state.update_stage(4, 0, value=150)
    assert state.get_song(4).stages[0].value == 100

    assert state.update_stage(4, 0, value=-5)
    assert state.get_song(4).stages[0].value == 0
    assert reloaded(state).get_song(4).stages[0].value == 0


def test_update_stage_clamps_huge_values(state):
    assert state.update_stage(4, 0, value=10 ** 400)
    assert state.get_song(4).stages[0].value == 100

    assert state.update_stage(4, 0, value=-10 ** 400)
    assert state.get_song(4).stages[0].value == 0


def test_update_stage_partial_fields(state):
    assert state.update_stage(3, 1, name="Final Mix")
    assert state.get_song(3).stages[1] == Stage("Final Mix", 50)

    assert state.update_stage(3, 1, value=80)
    assert state.get_song(3).stages[1] == Stage("Final Mix", 80)

    assert state.update_stage(3, 1, name="  ", value=90)
    assert state.get_song(3).stages[1] == Stage("Final Mix", 90)


def test_update_stage_changes_completion(state):
    assert song_completion(state.get_song(4)) == 74
    state.update_stage(4, 0, value=75)
    assert song_completion(state.get_song(4)) == 75


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_update_stage_out_of_range_is_a_no_op(counted, index):
    state, counter = counted
    before = state.get_song(3).stages

    assert not state.update_stage(3, index, name="X", value=10)
    assert state.get_song(3).stages == before
    assert counter.saves == 0


def test_remove_stage_keeps_order(state):
    assert state.remove_stage(2, 2)
    names = [s.name for s in state.get_song(2).stages]
    assert names == ["Demo", "Basic Track", "Lyrics", "Vocals", "Mix"]
    assert [s.name for s in reloaded(state).get_song(2).stages] == names


def test_remove_then_add_does_not_reuse_old_name(state):
    state.remove_stage(1, 0)  # drop "Demo"
    state.add_stage(1)
    names = [s.name for s in state.get_song(1).stages]
    assert names.count("Demo") == 0
    assert names[-1] == "Stage 6"


def test_remove_stage_out_of_range_is_a_no_op(counted):
    state, counter = counted
    assert not state.remove_stage(6, 0)
    assert not state.remove_stage(1, 6)
    assert counter.saves == 0


def test_unknown_song_is_a_no_op(counted):
    state, counter = counted
    before = state.get_album()

    assert not state.rename_song(99, "Ghost")
    assert not state.add_stage(99)
    assert not state.update_stage(99, 0, value=50)
    assert not state.remove_stage(99, 0)
    assert not state.remove_song(99)

    assert state.get_album() is before
    assert counter.saves == 0


def test_add_song(state):
    assert state.add_song()
    song = state.get_songs()[-1]
    assert song.id == 7
    assert song.title == "Song 7"
    assert [s.name for s in song.stages] == DEFAULT_STAGE_NAMES

    assert state.add_song("  Bonus Track ")
    assert state.get_songs()[-1].title == "Bonus Track"
    assert state.song_ids() == [1, 2, 3, 4, 5, 6, 7, 8]


def test_remove_song_keeps_order_and_ids(state):
    assert state.remove_song(3)
    assert state.song_ids() == [1, 2, 4, 5, 6]
    assert state.get_song(4).title == "Interlude"

    # New ids never collide with survivors
    state.add_song()
    assert state.song_ids() == [1, 2, 4, 5, 6, 7]
    assert reloaded(state).song_ids() == [1, 2, 4, 5, 6, 7]


def test_add_song_to_empty_album(state):
    for song_id in list(state.song_ids()):
        state.remove_song(song_id)
    assert state.get_songs() == ()
    state.add_song()
    assert state.song_ids() == [1]


def test_every_edit_saves_once(counted):
    state, counter = counted
    state.rename_album("A")
    state.set_deadline("2027-01-01T00:00:00Z")
    state.rename_song(1, "B")
    state.add_stage(1)
    state.update_stage(1, 0, value=10)
    state.remove_stage(1, 0)
    state.add_song()
    state.remove_song(1)
    assert counter.saves == 8


def test_listeners_get_new_album(state):
    seen = []
    state.add_listener(seen.append)
    state.add_listener(seen.append)  # registered once

    state.rename_album("Heard")
    state.rename_song(99, "Ignored")

    assert len(seen) == 1
    assert seen[0].title == "Heard"

    state.remove_listener(seen.append)
    state.rename_album("Not heard")
    assert len(seen) == 1


def test_reload_after_import(state):
    seen = []
    state.add_listener(seen.append)

    store = state.get_store()
    store.import_snapshot('{"songs": [{"id": 9, "title": "Only", "stages": {"Demo": 90}}], '
                          '"albumTitle": "Imported"}')
    state.reload()

    assert state.get_title() == "Imported"
    assert state.song_ids() == [9]
    assert state.get_song(9).stages == (Stage("Demo", 90),)
    assert len(seen) == 1


def test_reload_after_reset(state):
    state.get_store().reset_to_defaults()
    state.reload()
    assert len(state.get_songs()) == 20
