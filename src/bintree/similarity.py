"""
Structural similarity of binary trees.

Two trees are similar when both are empty, or when both have equal root values
and their left subtrees are similar and their right subtrees are similar.
Values are compared with ==, so a tree holding NaN is not similar to itself.
"""
from typing import Optional
import logging

from .search_tree import BinarySearchTree
from .tree_node import TreeNode, tree_size

logger = logging.getLogger(__name__)


def are_similar(tree_a: Optional[TreeNode], tree_b: Optional[TreeNode]) -> bool:
    """Recursive check; depth is bounded by the interpreter recursion limit."""
    if tree_a is None and tree_b is None:
        return True
    if tree_a is None or tree_b is None:
        return False
    return (tree_a.value == tree_b.value
            and are_similar(tree_a.left, tree_b.left)
            and are_similar(tree_a.right, tree_b.right))


def are_similar_iterative(tree_a: Optional[TreeNode], tree_b: Optional[TreeNode]) -> bool:
    """Same result as are_similar, walking node pairs with an explicit stack."""
    stack = [(tree_a, tree_b)]
    while stack:
        node_a, node_b = stack.pop()
        if node_a is None and node_b is None:
            continue
        if node_a is None or node_b is None:
            return False
        if node_a.value != node_b.value:
            return False
        stack.append((node_a.right, node_b.right))
        stack.append((node_a.left, node_b.left))
    return True


class TreeSimilarityChecker:
    """
    Compares trees with a configurable strategy.
    The size pre-check only rejects early; it never changes a result.
    """
    iterative: bool
    size_check: bool

    def __init__(self, iterative: bool = True, size_check: bool = False):
        self.iterative = iterative
        self.size_check = size_check

    def are_similar(self, tree_a: Optional[TreeNode], tree_b: Optional[TreeNode]) -> bool:
        if self.size_check and tree_size(tree_a) != tree_size(tree_b):
            logger.debug("Trees differ in size, skipping traversal")
            return False
        return self._compare(tree_a, tree_b)

    def compare_trees(self, tree_a: BinarySearchTree, tree_b: BinarySearchTree) -> bool:
        """
        Compare two managed trees, using their stored sizes for the pre-check.

        Args:
            tree_a: First tree
            tree_b: Second tree

        Returns:
            True if the trees have the same shape and the same values in every position
        """
        if self.size_check and tree_a.size() != tree_b.size():
            logger.debug(f"Trees differ in size ({tree_a.size()} != {tree_b.size()})")
            return False
        return self._compare(tree_a.root, tree_b.root)

    def _compare(self, tree_a: Optional[TreeNode], tree_b: Optional[TreeNode]) -> bool:
        if self.iterative:
            result = are_similar_iterative(tree_a, tree_b)
        else:
            result = are_similar(tree_a, tree_b)
        logger.debug(f"Comparison finished (iterative={self.iterative}): {result}")
        return result

    def find_differences(self, tree_a: Optional[TreeNode], tree_b: Optional[TreeNode]) -> list[str]:
        """
        Find the positions where two trees diverge.

        Args:
            tree_a: First tree
            tree_b: Second tree

        Returns:
            Paths from the root in preorder, as strings of 'L' and 'R' steps ("" is the root).
            A value mismatch is reported and its children are still compared; where only
            one side has a node the position is reported and nothing below it is.
        """
        differences: list[str] = []
        stack = [("", tree_a, tree_b)]
        while stack:
            path, node_a, node_b = stack.pop()
            if node_a is None and node_b is None:
                continue
            if node_a is None or node_b is None:
                differences.append(path)
                continue
            if node_a.value != node_b.value:
                differences.append(path)
            stack.append((path + "R", node_a.right, node_b.right))
            stack.append((path + "L", node_a.left, node_b.left))
        return differences
