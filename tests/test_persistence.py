import json
from datetime import datetime, timezone

import msgpack
import pytest

from core.constants import DEFAULT_ALBUM_TITLE, DEFAULT_STAGE_NAMES, STORAGE_KEY
from core.persistence import ProgressStore, SnapshotError
from core.progress import song_completion
from core.test_data import create_legacy_record


def read_raw(store):
    return msgpack.unpackb(store.path.read_bytes(), raw=False)


def test_default_path_uses_versioned_key():
    path = ProgressStore.get_default_path()
    assert path.name == f"{STORAGE_KEY}.msgpack"
    assert STORAGE_KEY.endswith("_v3")


def test_load_without_record_gives_defaults(store):
    songs, title, target = store.load()

    assert not store.exists()
    assert len(songs) == 20
    assert songs[0].title == "Song 1"
    assert [s.name for s in songs[0].stages] == DEFAULT_STAGE_NAMES
    assert all(song_completion(s) == 0 for s in songs)
    assert title == DEFAULT_ALBUM_TITLE
    assert target == datetime(2026, 8, 1, tzinfo=timezone.utc)


def test_save_then_load(store, sample_album):
    store.save(sample_album.songs, sample_album.title, sample_album.target)
    songs, title, target = store.load()

    assert songs == sample_album.songs
    assert title == sample_album.title
    assert target == sample_album.target


def test_saved_record_field_names(store, sample_album):
    store.save(sample_album.songs, sample_album.title, sample_album.target)
    record = read_raw(store)

    assert set(record) == {"songs", "albumTitle", "targetISO"}
    assert record["targetISO"] == "2026-08-01T00:00:00+00:00"
    assert record["songs"][0] == sample_album.songs[0].to_dict()


def test_save_overwrites(store, sample_album):
    store.save(sample_album.songs, "First", sample_album.target)
    store.save(sample_album.songs[:1], "Second", sample_album.target)

    songs, title, _ = store.load()
    assert title == "Second"
    assert len(songs) == 1
    assert not store.path.with_suffix(".tmp").exists()


def test_corrupt_record_gives_defaults(store):
    store.path.write_bytes(b"\xc1\xc1 definitely not msgpack")
    songs, title, _ = store.load()
    assert len(songs) == 20
    assert title == DEFAULT_ALBUM_TITLE


def test_non_mapping_record_gives_defaults(store):
    store.path.write_bytes(msgpack.packb([1, 2, 3]))
    songs, title, _ = store.load()
    assert len(songs) == 20
    assert title == DEFAULT_ALBUM_TITLE


def test_legacy_record_is_migrated_on_load(store):
    store.path.write_bytes(msgpack.packb(create_legacy_record()))
    songs, title, target = store.load()

    assert title == "Legacy Album"
    assert target == datetime(2025, 12, 24, 18, 0, tzinfo=timezone.utc)
    assert [(s.name, s.value) for s in songs[0].stages] == [("Demo", 40), ("Mix", 10)]
    assert [s.name for s in songs[1].stages] == DEFAULT_STAGE_NAMES
    assert song_completion(songs[2]) == 60


def test_broken_and_duplicate_songs_are_skipped(store):
    record = {
        "songs": [
            {"id": 1, "title": "Keep", "stages": []},
            {"title": "No id", "stages": []},
            {"id": 1, "title": "Duplicate", "stages": []},
            {"id": 2, "title": "Bad stages", "stages": ["Demo"]},
            {"id": 3, "title": "Also kept", "stages": [{"name": "Mix", "value": 150}]},
        ],
        "albumTitle": "Mixed Bag",
        "targetISO": "2026-01-01T00:00:00+00:00",
    }
    store.path.write_bytes(msgpack.packb(record))

    songs, title, _ = store.load()
    assert [s.id for s in songs] == [1, 2, 3]
    assert songs[0].title == "Keep"
    assert songs[1].title == "Bad stages"
    assert [s.name for s in songs[1].stages] == DEFAULT_STAGE_NAMES
    assert song_completion(songs[1]) == 0
    assert songs[2].stages[0].value == 100
    assert title == "Mixed Bag"


def test_unreadable_stage_entries_do_not_lose_the_song(store):
    record = {
        "songs": [{"id": 1, "title": "Keep me",
                   "stages": [{"name": "Demo", "value": 90}, None, "Mix"]}],
        "albumTitle": "Partly Broken",
        "targetISO": "2026-01-01T00:00:00+00:00",
    }
    store.path.write_bytes(msgpack.packb(record))

    songs, _, _ = store.load()
    assert [s.id for s in songs] == [1]
    assert songs[0].title == "Keep me"
    assert [(s.name, s.value) for s in songs[0].stages] == [("Demo", 90)]

    # The next save keeps the song
    store.save(songs, "Partly Broken", datetime(2026, 1, 1, tzinfo=timezone.utc))
    assert [s.id for s in store.load()[0]] == [1]


def test_reset_to_defaults(store, sample_album):
    store.save(sample_album.songs, sample_album.title, sample_album.target)
    store.reset_to_defaults()

    assert not store.exists()
    songs, title, _ = store.load()
    assert len(songs) == 20
    assert title == DEFAULT_ALBUM_TITLE

    # Nothing stored: still fine
    store.reset_to_defaults()


def test_export_snapshot_shape(sample_album):
    blob = ProgressStore.export_snapshot(sample_album.songs, sample_album.title)
    data = json.loads(blob)

    assert set(data) == {"songs", "albumTitle"}
    assert data["albumTitle"] == "Sample Album"
    assert data["songs"] == [s.to_dict() for s in sample_album.songs]


def test_write_snapshot_forces_json_extension(tmp_path, sample_album):
    blob = ProgressStore.export_snapshot(sample_album.songs, sample_album.title)
    written = ProgressStore.write_snapshot(tmp_path / "backup" / "album.txt", blob)

    assert written == tmp_path / "backup" / "album.json"
    assert json.loads(written.read_text(encoding="utf-8"))["albumTitle"] == "Sample Album"


def test_export_then_import_keeps_stored_deadline_default(store, sample_album):
    blob = ProgressStore.export_snapshot(sample_album.songs, sample_album.title)
    store.import_snapshot(blob)

    songs, title, target = store.load()
    assert songs == sample_album.songs
    assert title == sample_album.title
    # Snapshots carry no deadline
    assert target == datetime(2026, 8, 1, tzinfo=timezone.utc)


def test_import_legacy_snapshot_migrates_on_load(store):
    store.import_snapshot(json.dumps(create_legacy_record()).encode("utf-8"))

    # Stored as-is
    assert read_raw(store)["songs"][0]["stages"] == {"Demo": 40, "Mix": 10}

    songs, _, _ = store.load()
    assert [(s.name, s.value) for s in songs[0].stages] == [("Demo", 40), ("Mix", 10)]


@pytest.mark.parametrize("blob", ["{not json", "[1, 2, 3]", "42", b"\xff\xfe\x00", ""])
def test_invalid_import_leaves_record_untouched(store, sample_album, blob):
    store.save(sample_album.songs, sample_album.title, sample_album.target)
    before = store.path.read_bytes()

    with pytest.raises(SnapshotError):
        store.import_snapshot(blob)

    assert store.path.read_bytes() == before
    songs, title, _ = store.load()
    assert songs == sample_album.songs
    assert title == sample_album.title


def test_read_snapshot_file(store, tmp_path, sample_album):
    path = tmp_path / "album_dashboard.json"
    path.write_text(ProgressStore.export_snapshot(sample_album.songs, "From File"), encoding="utf-8")

    store.read_snapshot(path)
    assert store.load()[1] == "From File"


def test_read_missing_snapshot_file(store, tmp_path):
    with pytest.raises(SnapshotError):
        store.read_snapshot(tmp_path / "missing.json")
    assert not store.exists()


def test_snapshot_error_is_value_error():
    assert issubclass(SnapshotError, ValueError)
