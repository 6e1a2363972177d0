"""
Networking implementation for the tree service.
This module exposes stored trees over HTTP and compares trees held by other replicas.
"""

from .api_server import APIHandler
from .peer import Peer

__all__ = ['APIHandler', 'Peer']
