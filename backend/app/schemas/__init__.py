"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, params, responses)
    - JSON field names are camelCase via CamelModel; Python attributes are snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every API schema: camelCase aliases, ORM attribute loading."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
