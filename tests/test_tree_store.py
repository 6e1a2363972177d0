import asyncio
import os

import pytest

from bintree.similarity import TreeSimilarityChecker
from storage.tree_store import TreeStore


def test_missing_tree_opens_empty(tmp_path) -> None:
    store = TreeStore(str(tmp_path))
    tree = asyncio.run(store.open("fresh"))
    assert tree.root is None
    assert not asyncio.run(store.exists("other"))


def test_insert_remove_and_fsync(tmp_path) -> None:
    async def run():
        store = TreeStore(str(tmp_path))
        assert await store.insert("a", [5, 3, 8, 3]) == 3
        assert await store.remove("a", [3, 42]) == 1
        await store.fsync()
        return store

    store = asyncio.run(run())
    assert os.path.exists(tmp_path / "a.json")
    assert store.dirty == set()

    reopened = TreeStore(str(tmp_path))
    tree = asyncio.run(reopened.open("a"))
    assert list(tree) == [5, 8]
    assert tree.size() == 2
    assert TreeSimilarityChecker().compare_trees(tree, store.trees["a"])


def test_names_include_unloaded_trees(tmp_path) -> None:
    async def run():
        first = TreeStore(str(tmp_path))
        await first.insert("left", [1])
        await first.fsync()
        second = TreeStore(str(tmp_path))
        await second.insert("right", [2])
        return await second.names(), await second.exists("left")

    names, exists = asyncio.run(run())
    assert names == ["left", "right"]
    assert exists


def test_changes_since(tmp_path) -> None:
    async def run():
        store = TreeStore(str(tmp_path))
        await store.insert("a", [1])
        await store.insert("b", [1])
        changed, now = await store.changes_since(0)
        later, _ = await store.changes_since(now + 1)
        return changed, later

    changed, later = asyncio.run(run())
    assert sorted(changed) == ["a", "b"]
    assert later == []


@pytest.mark.parametrize("name", ["../escape", "a/b", "", "name.json"])
def test_invalid_names(tmp_path, name) -> None:
    store = TreeStore(str(tmp_path))
    with pytest.raises(ValueError):
        asyncio.run(store.open(name))


def test_failed_batch_leaves_tree_unchanged(tmp_path) -> None:
    async def run():
        store = TreeStore(str(tmp_path))
        await store.insert("mixed", [2])
        await store.fsync()
        with pytest.raises(TypeError):
            await store.insert("mixed", [1, "x"])
        return store

    store = asyncio.run(run())
    assert "mixed" not in store.dirty
    assert list(store.trees["mixed"]) == [2]
    assert store.trees["mixed"].size() == 1


def test_failed_batch_on_new_name_creates_nothing(tmp_path) -> None:
    store = TreeStore(str(tmp_path))
    with pytest.raises(TypeError):
        asyncio.run(store.insert("mixed", [1, "x"]))
    assert store.dirty == set()
    assert not asyncio.run(store.exists("mixed"))


def test_reading_unknown_tree_does_not_create_it(tmp_path) -> None:
    async def run():
        store = TreeStore(str(tmp_path))
        tree = await store.open("missing")
        return store, tree, await store.exists("missing"), await store.names()

    store, tree, exists, names = asyncio.run(run())
    assert tree.size() == 0
    assert not exists
    assert names == []
    assert store.trees == {}


def test_remove_from_unknown_tree_writes_nothing(tmp_path) -> None:
    async def run():
        store = TreeStore(str(tmp_path))
        removed = await store.remove("missing", [1])
        await store.fsync()
        return removed, await store.changes_since(0)

    removed, (changed, _) = asyncio.run(run())
    assert removed == 0
    assert changed == []
    assert not os.path.exists(tmp_path / "missing.json")


def test_insert_copies_before_writing(tmp_path) -> None:
    async def run():
        store = TreeStore(str(tmp_path))
        await store.insert("a", [2, 1])
        before = await store.open("a")
        await store.insert("a", [3])
        return before, await store.open("a")

    before, after = asyncio.run(run())
    assert list(before) == [1, 2]
    assert list(after) == [1, 2, 3]
