"""Workout Tracker API package.

Invariants:
    - Package root only carries the version; importing it has no side effects
"""

__version__ = "1.0.0"
