import json
import logging

from history_store import HistoryEntry, HistoryStore


def test_add_keeps_order_and_recent_is_newest_first():
    store = HistoryStore()
    store.add("1+1", "2")
    store.add("2*3", "6")
    assert store.entries() == [HistoryEntry("1+1", "2"), HistoryEntry("2*3", "6")]
    assert [e.expression for e in store.recent()] == ["2*3", "1+1"]


def test_limit_drops_oldest():
    store = HistoryStore(limit=3)
    for i in range(5):
        store.add(f"{i}+0", str(i))
    assert [e.result for e in store.entries()] == ["2", "3", "4"]
    assert len(store) == 3


def test_default_limit():
    assert HistoryStore().limit == 200


def test_save_and_load_roundtrip(tmp_path):
    path = tmp_path / "history.json"
    store = HistoryStore(path)
    store.add("50%", "0.5")
    store.add("200+10%", "200.1")

    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"expr": "50%", "result": "0.5"},
        {"expr": "200+10%", "result": "200.1"},
    ]

    reloaded = HistoryStore(path)
    assert reloaded.load() == store.entries()


def test_load_truncates_to_limit(tmp_path):
    path = tmp_path / "history.json"
    data = [{"expr": f"{i}", "result": f"{i}"} for i in range(10)]
    path.write_text(json.dumps(data), encoding="utf-8")

    store = HistoryStore(path, limit=4)
    assert [e.result for e in store.load()] == ["6", "7", "8", "9"]


def test_load_missing_file(tmp_path):
    assert HistoryStore(tmp_path / "missing.json").load() == []


def test_load_corrupt_file_is_empty_and_logged(tmp_path, caplog):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="history_store"):
        assert HistoryStore(path).load() == []
    assert "No se pudo leer el historial" in caplog.text


def test_load_rejects_wrong_schema(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps([{"expr": "1", "result": 1}]), encoding="utf-8")
    assert HistoryStore(path).load() == []

    path.write_text(json.dumps({"expr": "1"}), encoding="utf-8")
    assert HistoryStore(path).load() == []


def test_clear_persists(tmp_path):
    path = tmp_path / "history.json"
    store = HistoryStore(path)
    store.add("1+1", "2")
    store.clear()
    assert store.entries() == []
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_save_failure_keeps_memory(tmp_path, caplog):
    store = HistoryStore(tmp_path / "missing_dir" / "history.json")
    with caplog.at_level(logging.WARNING, logger="history_store"):
        store.add("1+1", "2")
    assert store.entries() == [HistoryEntry("1+1", "2")]
    assert "No se pudo guardar el historial" in caplog.text
