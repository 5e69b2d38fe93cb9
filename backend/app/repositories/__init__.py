"""Repository Layer: thin data-access classes, one per aggregate.

Invariants:
    - Repositories flush, never commit: the calling service owns the transaction
    - Reads return ORM instances or None; they never raise NotFoundError
"""
