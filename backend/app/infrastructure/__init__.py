"""Infrastructure Layer: database sessions, logging, external service clients.

Invariants:
    - All external calls wrapped with retry/timeout/error mapping
"""
