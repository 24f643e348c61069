import json

from chatterbox.settings import FlagType, JsonSettingsStore


def test_missing_file_is_created_empty(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    store = JsonSettingsStore(path)

    assert store.list("1") == {}
    assert json.loads(path.read_text(encoding="utf-8")) == {"servers": {}}


def test_get_after_set(store):
    store.set("1", "runescape", True)
    assert store.get("1", "runescape") is True


def test_servers_are_isolated(store):
    store.set("1", "context", 5)
    assert store.get("2", "context") is None
    assert store.get("2", "context", 20) == 20
    assert store.list("2") == {}


def test_set_overwrites_regardless_of_type(store):
    store.set("1", "context", 5)
    store.set("1", "context", "five")
    assert store.get("1", "context") == "five"


def test_remove_is_idempotent(store):
    store.set("1", "runescape", True)
    assert store.remove("1", "runescape") is True
    assert store.remove("1", "runescape") is False
    assert store.remove("unknown-server", "runescape") is False


def test_list_reflects_net_changes(store):
    store.set("1", "runescape", True)
    store.set("1", "context", 30)
    store.set("1", "personality", "calm")
    store.remove("1", "context")
    store.set("1", "runescape", False)

    assert store.list("1") == {"runescape": False, "personality": "calm"}


def test_list_returns_a_copy(store):
    store.set("1", "runescape", True)
    store.list("1")["runescape"] = False
    assert store.get("1", "runescape") is True


def test_document_shape_on_disk(store):
    store.set("1", "runescape", True)
    store.set("2", "context", 10)

    document = json.loads(store.path.read_text(encoding="utf-8"))
    assert document == {"servers": {"1": {"runescape": True}, "2": {"context": 10}}}


def test_update_and_community_helpers(store):
    store.update("1", {"runescape": True, "context": 12})
    store.set("2", "context", 3)

    assert store.list("1") == {"runescape": True, "context": 12}
    assert sorted(store.communities()) == ["1", "2"]

    assert store.remove_community("1") is True
    assert store.remove_community("1") is False
    assert store.communities() == ["2"]


def test_expected_type_filters_mismatches(store):
    store.set("1", "runescape", "yes")
    store.set("1", "context", True)

    assert store.get("1", "runescape", False, expected=FlagType.BOOLEAN) is False
    assert store.get("1", "context", expected=FlagType.NUMBER) is None
    assert store.get("1", "context", expected=bool) is True

    store.set("1", "context", 7)
    assert store.get("1", "context", expected=FlagType.NUMBER) == 7
    assert store.get("1", "context", expected=bool) is None


def test_corrupt_file_fails_open(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonSettingsStore(path)

    assert store.list("1") == {}
    assert store.get("1", "runescape", "unset") == "unset"
    assert "Error loading server settings" in caplog.text


def test_document_without_servers_is_normalized(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"other": 1}), encoding="utf-8")
    store = JsonSettingsStore(path)

    store.set("1", "runescape", True)

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["servers"] == {"1": {"runescape": True}}


def test_failed_write_keeps_previous_file(store, monkeypatch, caplog):
    store.set("1", "runescape", True)
    before = store.path.read_text(encoding="utf-8")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("chatterbox.settings.store.os.replace", broken_replace)

    store.set("1", "runescape", False)  # does not raise

    assert store.path.read_text(encoding="utf-8") == before
    assert store.get("1", "runescape") is True
    assert "Error saving server settings" in caplog.text
    assert not list(store.path.parent.glob("*.tmp"))


def test_unreadable_file_is_not_overwritten_by_a_change(store, caplog):
    store.set("1", "runescape", True)
    store.set("2", "context", 10)
    truncated = store.path.read_text(encoding="utf-8")[:-3]
    store.path.write_text(truncated, encoding="utf-8")

    store.set("3", "runescape", True)  # does not raise
    assert store.remove("1", "runescape") is False
    assert store.remove_community("2") is False

    assert store.path.read_text(encoding="utf-8") == truncated
    assert "change not saved" in caplog.text


def test_malformed_server_record_is_reset(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"servers": {"1": "oops", "2": {"context": 4}}}), encoding="utf-8")
    store = JsonSettingsStore(path)

    assert store.list("1") == {}
    store.set("1", "runescape", True)

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["servers"] == {"1": {"runescape": True}, "2": {"context": 4}}
