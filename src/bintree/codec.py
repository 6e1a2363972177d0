"""
Flat serialization of binary trees.
A tree is stored as a table of nodes whose children are indices into the table,
so nested trees of any depth serialize without recursion.
"""
from typing import Optional, Union
from serde import SerdeError, from_dict, serde, to_dict
from serde.json import from_json, to_json

from .tree_node import TreeNode

TreeValue = Union[int, float, str]


@serde
class NodeRecord:
    value: TreeValue
    left: Optional[int]
    right: Optional[int]


@serde
class TreeRecord:
    root: Optional[int] # None for the empty tree
    nodes: list[NodeRecord]


def encode(root: Optional[TreeNode]) -> TreeRecord:
    """Flatten a tree into a preorder node table."""
    record = TreeRecord(None, [])
    if root is None:
        return record
    # (node, index of parent record, is left child)
    stack: list[tuple[TreeNode, Optional[int], bool]] = [(root, None, False)]
    while stack:
        node, parent, is_left = stack.pop()
        index = len(record.nodes)
        record.nodes.append(NodeRecord(node.value, None, None))
        if parent is None:
            record.root = index
        elif is_left:
            record.nodes[parent].left = index
        else:
            record.nodes[parent].right = index
        if node.right is not None:
            stack.append((node.right, index, False))
        if node.left is not None:
            stack.append((node.left, index, True))
    return record


def decode(record: TreeRecord) -> Optional[TreeNode]:
    """
    Rebuild a tree from its node table.

    Raises:
        ValueError: if a child index points outside the table or a node has two parents
    """
    if record.root is None:
        return None
    nodes = [TreeNode(r.value) for r in record.nodes]
    seen: set[int] = set()

    def resolve(index: Optional[int]) -> Optional[TreeNode]:
        if index is None:
            return None
        if index < 0 or index >= len(nodes):
            raise ValueError(f"Node index {index} out of range")
        if index in seen:
            raise ValueError(f"Node {index} is referenced more than once")
        seen.add(index)
        return nodes[index]

    root = resolve(record.root)
    for i, r in enumerate(record.nodes):
        nodes[i].left = resolve(r.left)
        nodes[i].right = resolve(r.right)
    return root


def dumps(root: Optional[TreeNode]) -> str:
    return to_json(encode(root))


def encode_dict(root: Optional[TreeNode]) -> dict:
    return to_dict(encode(root))


def decode_dict(data: dict) -> Optional[TreeNode]:
    try:
        record = from_dict(TreeRecord, data)
    except SerdeError as e:
        raise ValueError(f"Malformed tree record: {e}") from e
    return decode(record)


def loads(text: str) -> Optional[TreeNode]:
    try:
        record = from_json(TreeRecord, text)
    except SerdeError as e:
        raise ValueError(f"Malformed tree record: {e}") from e
    return decode(record)
