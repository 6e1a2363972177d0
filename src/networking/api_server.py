from typing import Union
import logging

from fastapi import APIRouter, HTTPException

from bintree.codec import decode_dict, encode_dict
from bintree.search_tree import BinarySearchTree
from bintree.similarity import TreeSimilarityChecker
from storage.tree_store import TreeStore

logger = logging.getLogger(__name__)

Value = Union[int, float, str]

class APIHandler:
    store: TreeStore
    checker: TreeSimilarityChecker
    replica: int

    def __init__(self, store: TreeStore, checker: TreeSimilarityChecker, replica: int):
        self.router = APIRouter()
        self.store = store
        self.checker = checker
        self.replica = replica
        self.router.add_api_route("/healthcheck", self.healthcheck, methods=["GET"])
        self.router.add_api_route("/trees", self.list_trees, methods=["GET"])
        self.router.add_api_route("/trees/{name}", self.get_tree, methods=["GET"])
        self.router.add_api_route("/trees/{name}/size", self.get_size, methods=["GET"])
        self.router.add_api_route("/trees/{name}/insert", self.insert, methods=["POST"])
        self.router.add_api_route("/trees/{name}/remove", self.remove, methods=["POST"])
        self.router.add_api_route("/compare", self.compare, methods=["POST"])
        self.router.add_api_route("/compare_record/{name}", self.compare_record, methods=["POST"])
        self.router.add_api_route("/changes_since/{time}", self.changes_since, methods=["GET"])

    async def open(self, name: str) -> BinarySearchTree:
        try:
            return await self.store.open(name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    async def open_existing(self, name: str) -> BinarySearchTree:
        try:
            found = await self.store.exists(name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not found:
            raise HTTPException(status_code=404, detail=f"Tree {name} not found")
        return await self.store.open(name)

    def result(self, tree_a: BinarySearchTree, tree_b: BinarySearchTree) -> dict:
        return {
            "similar": self.checker.compare_trees(tree_a, tree_b),
            "differences": self.checker.find_differences(tree_a.root, tree_b.root),
        }

    async def healthcheck(self) -> str:
        return str(self.replica)

    async def list_trees(self) -> list[str]:
        return await self.store.names()

    async def get_tree(self, name: str) -> dict:
        tree = await self.open(name)
        async with self.store.lock:
            return encode_dict(tree.root)

    async def get_size(self, name: str) -> int:
        tree = await self.open(name)
        return tree.size()

    async def insert(self, name: str, values: list[Value]) -> int:
        try:
            return await self.store.insert(name, values)
        except (TypeError, ValueError) as e:
            raise HTTPException(status_code=400, detail=str(e))

    async def remove(self, name: str, values: list[Value]) -> int:
        try:
            return await self.store.remove(name, values)
        except (TypeError, ValueError) as e:
            raise HTTPException(status_code=400, detail=str(e))

    async def compare(self, pair: dict[str, str]) -> dict:
        if "left" not in pair or "right" not in pair:
            raise HTTPException(status_code=400, detail="left and right required")
        tree_a = await self.open_existing(pair["left"])
        tree_b = await self.open_existing(pair["right"])
        async with self.store.lock:
            result = self.result(tree_a, tree_b)
        logger.info(f"Compared {pair['left']} with {pair['right']}: {result['similar']}")
        return result

    async def changes_since(self, time: int) -> dict:
        names, now = await self.store.changes_since(time)
        return {"names": names, "now": now}

    async def compare_record(self, name: str, record: dict) -> dict:
        # Compares a tree sent by a client against a stored one
        try:
            other = BinarySearchTree(decode_dict(record))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        tree = await self.open_existing(name)
        async with self.store.lock:
            result = self.result(tree, other)
        logger.info(f"Compared {name} with a submitted tree: {result['similar']}")
        return result
