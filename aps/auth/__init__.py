"""Caller identity and privilege elevation for aps.

Provides:
- CallerContext: who is running aps and how to elevate
"""

from .context import CallerContext

__all__ = ['CallerContext']
