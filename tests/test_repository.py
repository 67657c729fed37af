"""
Unit tests for InMemoryCrudRepository.
"""

from dataclasses import dataclass, replace
from threading import Thread

import pytest

from showcase.core.repository import InMemoryCrudRepository


@dataclass(frozen=True)
class Item:
    name: str
    id: str | None = None


@pytest.fixture
def repo() -> InMemoryCrudRepository[Item]:
    return InMemoryCrudRepository(id_getter=lambda i: i.id, id_setter=lambda i, new_id: replace(i, id=new_id))


class TestSave:
    """Tests for save() and save_all()."""

    def test_assigns_id_when_missing(self, repo) -> None:
        saved = repo.save(Item("a"))
        assert saved.id
        assert repo.find_by_id(saved.id) == saved

    def test_assigned_ids_are_unique(self, repo) -> None:
        ids = {repo.save(Item(str(n))).id for n in range(50)}
        assert len(ids) == 50
        assert repo.count() == 50

    def test_keeps_existing_id(self, repo) -> None:
        saved = repo.save(Item("a", id="fixed"))
        assert saved.id == "fixed"
        assert repo.exists_by_id("fixed")

    def test_resave_overwrites_without_growing(self, repo) -> None:
        first = repo.save(Item("a"))
        repo.save(replace(first, name="b"))
        assert repo.count() == 1
        assert repo.find_by_id(first.id).name == "b"

    def test_mutating_setter(self) -> None:
        class Box:
            def __init__(self) -> None:
                self.id = None

        def stamp(box: Box, new_id: str) -> Box:
            box.id = new_id
            return box

        repo = InMemoryCrudRepository(id_getter=lambda b: b.id, id_setter=stamp)
        box = Box()
        assert repo.save(box) is box
        assert box.id is not None

    def test_save_all_preserves_order(self, repo) -> None:
        saved = repo.save_all([Item("a"), Item("b", id="b-id"), Item("c")])
        assert [s.name for s in saved] == ["a", "b", "c"]
        assert saved[1].id == "b-id"
        assert all(s.id for s in saved)


class TestFind:
    """Tests for the read operations."""

    def test_missing_id_returns_none(self, repo) -> None:
        assert repo.find_by_id("nope") is None
        assert not repo.exists_by_id("nope")

    def test_find_all_returns_snapshot(self, repo) -> None:
        repo.save_all([Item("a"), Item("b")])
        snapshot = repo.find_all()
        repo.save(Item("c"))
        assert len(snapshot) == 2
        assert len(repo.find_all()) == 3

    def test_find_all_by_id_skips_missing(self, repo) -> None:
        a = repo.save(Item("a"))
        b = repo.save(Item("b"))
        found = repo.find_all_by_id([b.id, "missing", a.id])
        assert found == [b, a]
        assert len(found) <= 3

    def test_empty_repository(self, repo) -> None:
        assert repo.count() == 0
        assert repo.find_all() == []
        assert repo.find_all_by_id(["x"]) == []


class TestDelete:
    """Tests for the delete operations."""

    def test_delete_by_id(self, repo) -> None:
        a = repo.save(Item("a"))
        repo.delete_by_id(a.id)
        assert repo.find_by_id(a.id) is None
        assert not repo.exists_by_id(a.id)

    def test_delete_missing_id_is_noop(self, repo) -> None:
        repo.save(Item("a"))
        repo.delete_by_id("missing")
        assert repo.count() == 1

    def test_delete_entity_without_id_is_noop(self, repo) -> None:
        repo.save(Item("a"))
        repo.delete(Item("unsaved"))
        assert repo.count() == 1

    def test_delete_entity_and_bulk(self, repo) -> None:
        a, b, c, d = repo.save_all([Item("a"), Item("b"), Item("c"), Item("d")])
        repo.delete(a)
        repo.delete_all_by_id([b.id])
        repo.delete_all([c])
        assert repo.find_all() == [d]

    def test_delete_all_clears(self, repo) -> None:
        repo.save_all([Item("a"), Item("b")])
        repo.delete_all()
        assert repo.count() == 0
        assert repo.find_all() == []


def test_concurrent_saves_are_all_stored(repo) -> None:
    def worker(n: int) -> None:
        for i in range(100):
            repo.save(Item(f"{n}-{i}"))

    threads = [Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert repo.count() == 800
