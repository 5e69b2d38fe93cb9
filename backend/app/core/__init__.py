"""Core Layer: domain types, error taxonomy, validation and session rules.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or models/
    - Functions are pure and synchronous
"""
