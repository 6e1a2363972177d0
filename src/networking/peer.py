from typing import Any, Iterable, Optional
import logging
import httpx

from bintree.codec import decode_dict, encode_dict
from bintree.similarity import TreeSimilarityChecker
from bintree.tree_node import TreeNode

logger = logging.getLogger(__name__)

class Peer:
    """
    Client for another tree service.
    Trees can be compared locally after fetching them, or sent over and compared remotely.
    """
    host: str
    port: int
    checker: TreeSimilarityChecker
    transport: Optional[httpx.AsyncBaseTransport]

    def __init__(self, host: str, port: int, checker: Optional[TreeSimilarityChecker] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.host = host
        self.port = port
        self.checker = checker if checker is not None else TreeSimilarityChecker()
        self.transport = transport

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    @property
    def base_url(self) -> str:
        return f'http://{self.host}:{self.port}'

    async def healthcheck(self) -> str:
        async with self.client() as client:
            response = await client.get(f'{self.base_url}/healthcheck')
            response.raise_for_status()
            return response.json()

    async def fetch_tree(self, name: str) -> Optional[TreeNode]:
        async with self.client() as client:
            response = await client.get(f'{self.base_url}/trees/{name}')
            response.raise_for_status()
            return decode_dict(response.json())

    async def push_values(self, name: str, values: Iterable[Any]) -> int:
        async with self.client() as client:
            response = await client.post(f'{self.base_url}/trees/{name}/insert', json=list(values))
            response.raise_for_status()
            return response.json()

    async def compare_remote(self, name: str, local: Optional[TreeNode]) -> bool:
        """Fetch the peer's copy of a tree and compare it with a local one."""
        remote = await self.fetch_tree(name)
        similar = self.checker.are_similar(local, remote)
        logger.info(f"Tree {name} on {self.host}:{self.port} similar to local: {similar}")
        return similar

    async def compare_on_remote(self, name: str, local: Optional[TreeNode]) -> dict:
        """Send a local tree to the peer and let it do the comparison."""
        async with self.client() as client:
            response = await client.post(f'{self.base_url}/compare_record/{name}', json=encode_dict(local))
            response.raise_for_status()
            return response.json()
