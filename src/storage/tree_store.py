import asyncio
import datetime
import logging
import os
import re
from typing import Any, Iterable, Set

from sortedcontainers import SortedSet
from bintree.codec import dumps, loads
from bintree.search_tree import BinarySearchTree

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

class TreeStore:
    """
    Named binary search trees, each persisted as <path>/<name>.json.
    Trees are loaded lazily and written back on fsync.
    """
    trees: dict[str, BinarySearchTree]
    path: str
    dirty: Set[str]
    timed_ops: SortedSet
    times: dict[str, int]
    lock: asyncio.Lock

    def __init__(self, path: str):
        self.trees = {}
        self.path = path
        self.dirty = set()
        self.timed_ops = SortedSet()
        self.times = {}
        self.lock = asyncio.Lock()

    def _fname(self, name: str) -> str:
        if not NAME_PATTERN.fullmatch(name):
            raise ValueError(f"Invalid tree name: {name!r}")
        return os.path.join(self.path, name + ".json")

    def _touch(self, name: str):
        if name in self.times:
            self.timed_ops.remove((self.times[name], name))
        now_secs = int(datetime.datetime.now().timestamp())
        self.timed_ops.add((now_secs, name))
        self.times[name] = now_secs
        self.dirty.add(name)

    async def _open(self, name: str) -> BinarySearchTree:
        # Trees missing on disk are not cached until something is written to them
        if name in self.trees:
            return self.trees[name]
        fname = self._fname(name)
        try:
            with open(fname, "r") as f:
                tree = BinarySearchTree(loads(f.read()))
        except FileNotFoundError:
            return BinarySearchTree() # Not written yet
        self.trees[name] = tree
        return tree

    async def open(self, name: str) -> BinarySearchTree:
        async with self.lock:
            return await self._open(name)

    async def exists(self, name: str) -> bool:
        async with self.lock:
            return name in self.trees or os.path.exists(self._fname(name))

    async def names(self) -> list[str]:
        async with self.lock:
            found = set(self.trees)
            if os.path.isdir(self.path):
                for entry in os.listdir(self.path):
                    stem, ext = os.path.splitext(entry)
                    if ext == ".json" and NAME_PATTERN.fullmatch(stem):
                        found.add(stem)
            return sorted(found)

    async def insert(self, name: str, values: Iterable[Any]) -> int:
        async with self.lock:
            # Work on a copy so a batch with incomparable values changes nothing
            tree = (await self._open(name)).copy()
            added = sum(1 for value in values if tree.insert(value))
            self.trees[name] = tree
            self._touch(name)
            logger.debug(f"Inserted {added} values into {name}")
            return added

    async def remove(self, name: str, values: Iterable[Any]) -> int:
        async with self.lock:
            if name not in self.trees and not os.path.exists(self._fname(name)):
                return 0
            tree = (await self._open(name)).copy()
            removed = sum(1 for value in values if tree.remove(value))
            self.trees[name] = tree
            self._touch(name)
            logger.debug(f"Removed {removed} values from {name}")
            return removed

    async def changes_since(self, time: int) -> tuple[list[str], int]:
        async with self.lock:
            now_secs = int(datetime.datetime.now().timestamp())
            return [name for (_, name) in self.timed_ops.irange((time, ""))], now_secs

    async def fsync(self):
        async with self.lock:
            os.makedirs(self.path, exist_ok=True)
            for name in self.dirty:
                with open(self._fname(name), "w") as f:
                    f.write(dumps(self.trees[name].root))
                    f.flush()
            if self.dirty:
                logger.info(f"Wrote {len(self.dirty)} trees to {self.path}")
            self.dirty.clear()
