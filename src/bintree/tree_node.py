"""
Implementation of a node in a binary tree.
"""
from typing import Any, Optional
from dataclasses import dataclass

@dataclass(eq=False)
class TreeNode:
    """
    A node in a binary tree.
    Each node carries a value and owns its optional left and right children.
    An empty tree is represented by None.
    """
    value: Any
    left: Optional['TreeNode'] = None
    right: Optional['TreeNode'] = None


def tree_size(node: Optional[TreeNode]) -> int:
    """Count the nodes reachable from node."""
    count = 0
    stack = [node] if node is not None else []
    while stack:
        current = stack.pop()
        count += 1
        if current.left is not None:
            stack.append(current.left)
        if current.right is not None:
            stack.append(current.right)
    return count


def tree_height(node: Optional[TreeNode]) -> int:
    """Number of levels below and including node; 0 for the empty tree."""
    height = 0
    level = [node] if node is not None else []
    while level:
        height += 1
        next_level = []
        for current in level:
            if current.left is not None:
                next_level.append(current.left)
            if current.right is not None:
                next_level.append(current.right)
        level = next_level
    return height
