"""Services Layer: one class per use-case group, plus the AI plan generator.

Invariants:
    - Services own the transaction: they commit, repositories only flush
    - Services raise typed AppError subclasses, never HTTPException
"""
