"""Core primitives shared by the resources and runtime layers.

Lives below both packages so neither has to import the other for
synchronization.

Python 3.13+.
"""

from .rwlock import RWLock

__all__ = ["RWLock"]
