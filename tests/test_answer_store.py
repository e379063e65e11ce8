from __future__ import annotations

import pytest

from openform.models.question import FileReference, QuestionDefinition, QuestionType
from openform.player.store import AnswerShapeError, AnswerStore


def _store() -> AnswerStore:
    return AnswerStore(
        [
            QuestionDefinition(id="name", type=QuestionType.SHORT_TEXT),
            QuestionDefinition(id="age", type=QuestionType.NUMBER),
            QuestionDefinition(id="tags", type=QuestionType.CHECKBOXES, options=["a", "b"]),
            QuestionDefinition(id="stars", type=QuestionType.RATING),
            QuestionDefinition(id="cv", type=QuestionType.FILE_UPLOAD),
        ]
    )


def test_missing_key_is_distinct_from_empty_string() -> None:
    store = _store()
    assert "name" not in store
    store.set("name", "")
    assert "name" in store
    assert store.get("name") == ""


def test_unknown_question_rejected() -> None:
    with pytest.raises(AnswerShapeError, match="Unknown question"):
        _store().set("ghost", "boo")


@pytest.mark.parametrize(
    "question_id,value",
    [
        ("name", 3),
        ("age", True),
        ("age", "forty"),
        ("tags", "a"),
        ("tags", ["a", 1]),
        ("stars", 4.5),
        ("stars", True),
        ("cv", "https://cdn/cv.pdf"),
    ],
)
def test_wrong_shape_rejected(question_id: str, value) -> None:
    with pytest.raises(AnswerShapeError):
        _store().set(question_id, value)


def test_number_accepts_int_float_and_empty() -> None:
    store = _store()
    for value in (3, 2.5, ""):
        store.set("age", value)
        assert store.get("age") == value


def test_lists_are_copied_in_and_out() -> None:
    store = _store()
    selection = ["a"]
    store.set("tags", selection)
    selection.append("b")
    assert store.get("tags") == ["a"]

    out = store.get("tags")
    out.append("b")
    assert store.get("tags") == ["a"]

    snapshot = store.snapshot()
    snapshot["tags"].append("b")
    assert store.get("tags") == ["a"]


def test_clear_and_iteration() -> None:
    store = _store()
    store.set("name", "Ada")
    store.set("stars", 5)
    store.set("cv", FileReference(name="cv.pdf", url="https://cdn/cv.pdf"))
    assert len(store) == 3
    assert list(store) == ["name", "stars", "cv"]

    store.clear("stars")
    store.clear("stars")
    assert "stars" not in store
    assert store.snapshot() == {
        "name": "Ada",
        "cv": FileReference(name="cv.pdf", url="https://cdn/cv.pdf"),
    }
