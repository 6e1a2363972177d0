"""
Binary search tree used to build the trees that get compared.
"""
from typing import Any, Iterable, Iterator, Optional

from .tree_node import TreeNode, tree_height, tree_size

class BinarySearchTree:
    """
    An unbalanced binary search tree without duplicates.
    Inserting already sorted values produces a degenerate chain, so every walk
    below is iterative rather than recursive.
    """
    root: Optional[TreeNode]
    count: int

    def __init__(self, root: Optional[TreeNode] = None):
        self.root = root
        self.count = tree_size(root)

    @classmethod
    def from_values(cls, values: Iterable[Any]) -> 'BinarySearchTree':
        tree = cls()
        for value in values:
            tree.insert(value)
        return tree

    def copy(self) -> 'BinarySearchTree':
        """A tree with the same shape and values that shares no nodes with this one."""
        tree = BinarySearchTree()
        if self.root is None:
            return tree
        tree.root = TreeNode(self.root.value)
        stack = [(self.root, tree.root)]
        while stack:
            source, target = stack.pop()
            if source.left is not None:
                target.left = TreeNode(source.left.value)
                stack.append((source.left, target.left))
            if source.right is not None:
                target.right = TreeNode(source.right.value)
                stack.append((source.right, target.right))
        tree.count = self.count
        return tree

    def insert(self, value: Any) -> bool:
        """
        Insert a value.

        Args:
            value: Value to insert; must be orderable against the values already present

        Returns:
            True if the value was added, False if it was already present
        """
        if self.root is None:
            self.root = TreeNode(value)
            self.count += 1
            return True
        node = self.root
        while True:
            if value == node.value:
                return False
            if value < node.value:
                if node.left is None:
                    node.left = TreeNode(value)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = TreeNode(value)
                    break
                node = node.right
        self.count += 1
        return True

    def remove(self, value: Any) -> bool:
        """
        Remove a value.

        Args:
            value: Value to remove

        Returns:
            True if the value was present and removed, False otherwise
        """
        parent: Optional[TreeNode] = None
        node = self.root
        while node is not None and node.value != value:
            parent = node
            node = node.left if value < node.value else node.right
        if node is None:
            return False

        if node.left is not None and node.right is not None:
            # Two children: pull up the in-order successor and unlink it instead
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            node.value = successor.value
            parent, node = successor_parent, successor

        child = node.left if node.left is not None else node.right
        if parent is None:
            self.root = child
        elif parent.left is node:
            parent.left = child
        else:
            parent.right = child
        self.count -= 1
        return True

    def contains(self, value: Any) -> bool:
        node = self.root
        while node is not None:
            if value == node.value:
                return True
            node = node.left if value < node.value else node.right
        return False

    def size(self) -> int:
        return self.count

    def height(self) -> int:
        return tree_height(self.root)

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Any]:
        # In-order walk
        stack: list[TreeNode] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.value
            node = node.right
