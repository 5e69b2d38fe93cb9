"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Handlers validate (Pydantic), call one service method, return the result
    - No try/except in handlers: errors go to the global handlers
"""
