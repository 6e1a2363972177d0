"""
Binary tree similarity.
This module provides the tree node type, a binary search tree used to build trees,
the structural similarity check and the flat serialization used for persistence.
"""

from .tree_node import TreeNode, tree_size, tree_height
from .search_tree import BinarySearchTree
from .similarity import TreeSimilarityChecker, are_similar, are_similar_iterative
from .codec import NodeRecord, TreeRecord, encode, decode, encode_dict, decode_dict, dumps, loads

__all__ = [
    'TreeNode',
    'tree_size',
    'tree_height',
    'BinarySearchTree',
    'TreeSimilarityChecker',
    'are_similar',
    'are_similar_iterative',
    'NodeRecord',
    'TreeRecord',
    'encode',
    'decode',
    'encode_dict',
    'decode_dict',
    'dumps',
    'loads',
]
