"""Tests for the note service layer (owner scoping, ordering, partial updates, search)."""
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any

import pytest
from bson import ObjectId

from app.core.errors import NotFound, ValidationError
from app.repositories import note_repo
from app.services import note_service

OWNER = "64b7f0c2a1b2c3d4e5f60001"
OTHER = "64b7f0c2a1b2c3d4e5f60002"


@pytest.fixture
def ticking_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    """Cada escritura ocurre un minuto después de la anterior."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = count()
    monkeypatch.setattr(note_repo, "_now_utc", lambda: base + timedelta(minutes=next(ticks)))


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _ids(notes: list[dict[str, Any]]) -> list[str]:
    return [str(n["_id"]) for n in notes]


def test__create__defaults(db: Any) -> None:
    note = note_service.create(OWNER, title=" Gym ", content="6am")

    assert note["title"] == "Gym"
    assert note["tags"] == []
    assert note["is_pinned"] is False
    assert note["user_id"] == OWNER
    assert note["created_at"] == note["updated_at"]


@pytest.mark.parametrize(
    ("title", "content"),
    [("", "body"), ("   ", "body"), ("title", ""), (None, "body")],
)
def test__create__requires_title_and_content(db: Any, title: Any, content: Any) -> None:
    with pytest.raises(ValidationError):
        note_service.create(OWNER, title=title, content=content)

    assert db["note"].count_documents({}) == 0


def test__create__drops_blank_tags_keeping_order(db: Any) -> None:
    note = note_service.create(OWNER, title="t", content="c", tags=["b", " ", "a", "b"])

    assert note["tags"] == ["b", "a", "b"]


def test__update__only_tags_clears_tags_and_keeps_text(db: Any) -> None:
    note = note_service.create(OWNER, title="Gym", content="6am", tags=["health"])

    updated = note_service.update(OWNER, str(note["_id"]), {"tags": []})

    assert updated["tags"] == []
    assert updated["title"] == "Gym"
    assert updated["content"] == "6am"


def test__update__changes_only_supplied_fields(db: Any, ticking_clock: None) -> None:
    note = note_service.create(OWNER, title="Gym", content="6am", tags=["health"])

    updated = note_service.update(OWNER, str(note["_id"]), {"content": "7am", "is_pinned": True})

    assert updated["title"] == "Gym"
    assert updated["content"] == "7am"
    assert updated["tags"] == ["health"]
    assert updated["is_pinned"] is True
    assert _utc(updated["updated_at"]) > _utc(note["updated_at"])


def test__update__empty_changes_rejected(db: Any) -> None:
    note = note_service.create(OWNER, title="Gym", content="6am")

    with pytest.raises(ValidationError):
        note_service.update(OWNER, str(note["_id"]), {})


def test__update__explicit_empty_title_rejected(db: Any) -> None:
    note = note_service.create(OWNER, title="Gym", content="6am")

    with pytest.raises(ValidationError):
        note_service.update(OWNER, str(note["_id"]), {"title": ""})


def test__update__null_tags_rejected_and_tags_kept(db: Any) -> None:
    note = note_service.create(OWNER, title="Gym", content="6am", tags=["health"])

    with pytest.raises(ValidationError):
        note_service.update(OWNER, str(note["_id"]), {"tags": None})

    assert note_service.get(OWNER, str(note["_id"]))["tags"] == ["health"]


@pytest.mark.parametrize("note_id", ["64b7f0c2a1b2c3d4e5f6ffff", "not-an-object-id"])
def test__update__missing_note_is_not_found(db: Any, note_id: str) -> None:
    with pytest.raises(NotFound):
        note_service.update(OWNER, note_id, {"title": "x"})


def test__set_pinned__rejects_non_boolean_and_leaves_note_unchanged(db: Any) -> None:
    note = note_service.create(OWNER, title="Gym", content="6am")

    for value in ("yes", 1, None, "true"):
        with pytest.raises(ValidationError):
            note_service.set_pinned(OWNER, str(note["_id"]), value)

    assert db["note"].find_one({"_id": note["_id"]})["is_pinned"] is False


def test__list_all__pinned_first_then_most_recent(db: Any, ticking_clock: None) -> None:
    """isPinned=[true, false, true] with T1<T2<T3 -> [T3, T1, T2]."""
    n1 = note_service.create(OWNER, title="one", content="c")
    n2 = note_service.create(OWNER, title="two", content="c")
    n3 = note_service.create(OWNER, title="three", content="c")
    # Fijar también actualiza updated_at; se fijan en orden para conservar T1<T3
    note_service.set_pinned(OWNER, str(n1["_id"]), True)
    note_service.update(OWNER, str(n2["_id"]), {"content": "touched"})
    note_service.set_pinned(OWNER, str(n3["_id"]), True)

    notes = note_service.list_all(OWNER)

    assert _ids(notes) == [str(n3["_id"]), str(n1["_id"]), str(n2["_id"])]
    assert note_service.list_all(OWNER) == notes


def test__list_all__only_owner_notes(db: Any) -> None:
    note_service.create(OWNER, title="mine", content="c")
    note_service.create(OTHER, title="theirs", content="c")

    assert [n["title"] for n in note_service.list_all(OWNER)] == ["mine"]


def test__other_owner_cannot_get_update_pin_or_delete(db: Any) -> None:
    note = note_service.create(OWNER, title="secret", content="c")
    note_id = str(note["_id"])

    with pytest.raises(NotFound):
        note_service.get(OTHER, note_id)
    with pytest.raises(NotFound):
        note_service.update(OTHER, note_id, {"title": "hacked"})
    with pytest.raises(NotFound):
        note_service.set_pinned(OTHER, note_id, True)
    with pytest.raises(NotFound):
        note_service.delete(OTHER, note_id)

    assert note_service.get(OWNER, note_id)["title"] == "secret"


def test__delete__then_gone(db: Any) -> None:
    note = note_service.create(OWNER, title="t", content="c")

    note_service.delete(OWNER, str(note["_id"]))

    with pytest.raises(NotFound):
        note_service.delete(OWNER, str(note["_id"]))
    assert note_service.list_all(OWNER) == []


def test__search__case_insensitive_on_title_content_and_tags(db: Any) -> None:
    by_title = note_service.create(OWNER, title="Grocery LIST", content="milk")
    by_content = note_service.create(OWNER, title="todo", content="update the list")
    by_tag = note_service.create(OWNER, title="misc", content="nothing", tags=["Listing"])
    note_service.create(OWNER, title="other", content="unrelated")
    note_service.create(OTHER, title="list of theirs", content="c")

    found = note_service.search(OWNER, "list")

    assert set(_ids(found)) == {str(by_title["_id"]), str(by_content["_id"]), str(by_tag["_id"])}


def test__search__regex_metacharacters_are_literal(db: Any) -> None:
    literal = note_service.create(OWNER, title="weird a.*b( title", content="c")
    note_service.create(OWNER, title="axxxb(", content="would match a pattern")
    note_service.create(OWNER, title="ab", content="c")

    found = note_service.search(OWNER, "a.*b(")

    assert _ids(found) == [str(literal["_id"])]


@pytest.mark.parametrize("query", ["", "   ", None])
def test__search__blank_query_rejected(db: Any, query: Any) -> None:
    with pytest.raises(ValidationError):
        note_service.search(OWNER, query)


def test__get__invalid_object_id_is_not_found(db: Any) -> None:
    assert not ObjectId.is_valid("zzz")
    with pytest.raises(NotFound):
        note_service.get(OWNER, "zzz")
