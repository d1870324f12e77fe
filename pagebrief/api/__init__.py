"""
HTTP API for PageBrief.
"""

from .server import create_app

__all__ = ['create_app']
