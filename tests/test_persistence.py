import json
from pathlib import Path

import pytest

from taskdice.state import CorruptStoreError, Persistence, Store, StoreIOError, Task, Topic


def test_load_missing_creates_empty_store(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "store.json"

    store = Persistence.load_store(path)

    assert store.topics == {}
    assert json.loads(path.read_text()) == {"topics": {}}


def test_load_missing_then_save_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "store.json"

    Persistence.save_store(Persistence.load_store(path), path)

    assert Persistence.load_store(path) == Store()


def test_save_writes_full_document(tmp_path: Path) -> None:
    path = tmp_path / "data" / "store.json"
    store = Store(topics={"work": Topic.from_task(Task("ship", "v1"))})

    Persistence.save_store(store, path)

    assert json.loads(path.read_text()) == {
        "topics": {
            "work": {
                "tasks": [{"task_name": "ship", "task_description": "v1", "link": None}],
            }
        }
    }
    # No temp files left behind
    assert [p.name for p in path.parent.iterdir()] == ["store.json"]


def test_save_truncates_previous_content(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"topics": {"a": {"tasks": []}, "b": {"tasks": []}}}))

    Persistence.save_store(Store(topics={"a": Topic()}), path)

    assert json.loads(path.read_text()) == {"topics": {"a": {"tasks": []}}}


def test_load_accepts_missing_optional_fields(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"topics": {"home": {"tasks": [{"task_name": "dishes"}]}}}))

    store = Persistence.load_store(path)

    assert store.topics["home"].tasks["dishes"] == Task("dishes")


def test_load_duplicate_names_keeps_last(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                "topics": {
                    "home": {
                        "tasks": [
                            {"task_name": "dishes", "task_description": "old"},
                            {"task_name": "dishes", "task_description": "new"},
                        ]
                    }
                }
            }
        )
    )

    store = Persistence.load_store(path)

    assert len(store.topics["home"]) == 1
    assert store.topics["home"].tasks["dishes"].description == "new"


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[]",
        '{"topic_hashmap": {}}',
        '{"topics": {"work": []}}',
        '{"topics": {"work": {"tasks": [{"task_description": "x"}]}}}',
        '{"topics": {"work": {"tasks": [{"task_name": "x", "link": 3}]}}}',
        pytest.param("[" * 200000 + "]" * 200000, id="deeply-nested"),
    ],
)
def test_load_corrupt_document(tmp_path: Path, content: str) -> None:
    path = tmp_path / "store.json"
    path.write_text(content)

    with pytest.raises(CorruptStoreError):
        Persistence.load_store(path)


def test_load_unreadable_location(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.mkdir()

    with pytest.raises(StoreIOError):
        Persistence.load_store(path)


def test_save_into_unwritable_location(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")

    with pytest.raises(StoreIOError):
        Persistence.save_store(Store(), blocker / "store.json")
