"""
Persistent storage of named trees.
"""

from .tree_store import TreeStore

__all__ = ['TreeStore']
