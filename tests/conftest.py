import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.persistence import ProgressStore
from core.state import AlbumState
from core.test_data import create_sample_album


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "albumProgress_v3.msgpack")


@pytest.fixture
def sample_album():
    return create_sample_album()


@pytest.fixture
def state(store, sample_album):
    """Album state over the sample album, already saved once."""
    store.save(sample_album.songs, sample_album.title, sample_album.target)
    return AlbumState.load(store)


@pytest.fixture
def default_state(store):
    """Album state with nothing stored (default catalog)."""
    return AlbumState.load(store)
