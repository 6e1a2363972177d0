"""
Main entry point for the tree similarity service.
"""
import os
from random import randint
import sys
import asyncio
import argparse
import logging
from dataclasses import field
import fastapi
from serde import serde
from serde.json import from_json, to_json
import uvicorn

from bintree.similarity import TreeSimilarityChecker
from networking.api_server import APIHandler
from networking.peer import Peer
from storage.tree_store import TreeStore

logger = logging.getLogger(__name__)

@serde
class Config:
    replica: int = 0
    peers: list[str] = field(default_factory=list)
    basepath: str = "trees"
    host: str = "0.0.0.0"
    port: int = 8000
    iterative: bool = True
    size_check: bool = False
    log_level: str = "INFO"

def load_config(fname: str) -> Config:
    try:
        with open(fname, "r") as f:
            config = from_json(Config, f.read())
    except FileNotFoundError:
        config = Config()
    if config.replica == 0:
        config.replica = randint(1, 2**31 - 1)
    with open(fname, "w") as f:
        f.write(to_json(config))
    return config

def fsync_loop(store: TreeStore, done: list[bool], interval: float = 10):
    async def inner():
        while True:
            await store.fsync()
            if done[0]:
                return
            await asyncio.sleep(interval)
    return inner

def peer_loop(peer: Peer, store: TreeStore, done: list[bool], interval: float = 60):
    async def inner():
        while not done[0]:
            try:
                await peer.healthcheck()
                for name in await store.names():
                    tree = await store.open(name)
                    if not await peer.compare_remote(name, tree.root):
                        logger.warning(f"Tree {name} differs on peer {peer.host}:{peer.port}")
            except Exception as e:
                logger.error(f"Peer {peer.host}:{peer.port} failed: {e}")
            await asyncio.sleep(interval)
    return inner

async def main() -> None:
    parser = argparse.ArgumentParser(description="Binary tree similarity service")
    parser.add_argument("config", help="path to the JSON config file")
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(level=config.log_level)
    # Recursive comparison is only bounded by this
    sys.setrecursionlimit(10**6)

    os.makedirs(config.basepath, exist_ok=True)
    store = TreeStore(config.basepath)
    checker = TreeSimilarityChecker(iterative=config.iterative, size_check=config.size_check)

    app = fastapi.FastAPI()
    handler = APIHandler(store, checker, config.replica)
    app.include_router(handler.router)
    uconfig = uvicorn.Config(app=app, host=config.host, port=config.port)
    server = uvicorn.Server(config=uconfig)

    done = [False]

    async def fastapi_main():
        await server.serve()
        logger.info("Finished fastapi. Waiting for the final fsync")
        done[0] = True

    async with asyncio.TaskGroup() as tg:
        tg.create_task(fastapi_main())
        tg.create_task(fsync_loop(store, done)())
        for address in config.peers:
            host, port = address.split(":")
            peer = Peer(host, int(port), checker)
            tg.create_task(peer_loop(peer, store, done)())

if __name__ == "__main__":
    asyncio.run(main())
