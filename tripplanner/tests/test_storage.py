"""
Tests for on-device persistence.
"""
from tripplanner.client.storage import LocalStorage, STATE_KEY, load_state, save_state
from tripplanner.schemas.document import DocumentResponse
from tripplanner.schemas.state import StateSnapshot


def test_get_missing_item(tmp_path):
    assert LocalStorage(tmp_path / "nowhere").get_item("anything") is None


def test_set_and_get_item(tmp_path):
    storage = LocalStorage(tmp_path / "store")
    assert storage.set_item("key", '{"a": 1}') is True
    assert storage.get_item("key") == '{"a": 1}'

    storage.remove_item("key")
    assert storage.get_item("key") is None


def test_write_failure_is_reported(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    assert LocalStorage(blocker).set_item("key", "value") is False


def test_load_state_nothing_saved(tmp_path):
    assert load_state(LocalStorage(tmp_path)) is None


def test_load_state_malformed(tmp_path):
    storage = LocalStorage(tmp_path)
    storage.set_item(STATE_KEY, "{not json")
    assert load_state(storage) is None


def test_load_state_fills_missing_collections(tmp_path):
    storage = LocalStorage(tmp_path)
    storage.set_item(STATE_KEY, '{"trips": []}')
    state = load_state(storage)
    assert state.flights == []
    assert state.pinned_places == []


def test_save_state_drops_oversized_documents(tmp_path):
    storage = LocalStorage(tmp_path)
    small = DocumentResponse(id="d1", trip_id="t1", title="Visa", file_url="data:text/plain;base64,aGk=")
    large = DocumentResponse(id="d2", trip_id="t1", title="Scan", type="passport", file_url="x" * 101)
    state = StateSnapshot(documents=[small, large])

    save_state(storage, state, max_file_url_length=100)

    saved = load_state(storage)
    assert [d.file_url for d in saved.documents] == ["data:text/plain;base64,aGk=", ""]
    assert saved.documents[1].title == "Scan"
    assert saved.documents[1].type == "passport"
    # The in-memory state keeps the content
    assert state.documents[1].file_url == "x" * 101


def test_saved_state_uses_camel_case(tmp_path):
    storage = LocalStorage(tmp_path)
    save_state(storage, StateSnapshot())
    raw = storage.get_item(STATE_KEY)
    assert '"shoppingItems"' in raw
    assert '"pinnedPlaces"' in raw
