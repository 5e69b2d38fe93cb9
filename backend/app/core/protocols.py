"""Boundary Protocols: contracts between services and external collaborators.

Invariants:
    - Services depend on PlanGenerator, never on the Anthropic SDK directly
    - generate() receives exactly the training-profile fields of POST /workout/ai
    - Implementations raise ExternalServiceError on any failure

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol


class PlanGenerator(Protocol):
    """Produces a raw workout plan (name + exercises) from a training profile."""
    async def generate(
        self,
        *,
        objective: str,
        training_time: str,
        experience_level: str,
        frequency: str,
        duration: str,
        location: str,
        equipments: list[str],
        has_physical_limitations: bool,
        limitation_description: str | None,
        preferred_training_style: str,
        nutrition: str,
        sleep_quality: str,
    ) -> dict: ...
