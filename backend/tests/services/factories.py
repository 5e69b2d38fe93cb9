"""Test doubles and request-body builders shared by service and route tests."""

SAMPLE_PLAN = {
    "name": "Upper body strength",
    "exercises": [
        {
            "name": "Push-up",
            "series": "4",
            "repetitions": "12",
            "weight": "bodyweight",
            "restTime": "60s",
            "videoUrl": "https://videos.example.com/push-up",
            "instructions": "Keep the core tight",
        },
        {
            "name": "Dumbbell row",
            "sets": 3,
            "reps": "10",
            "weight": "20kg",
            "rest": "90s",
            "instructions": "Pull the elbow back",
        },
    ],
}

AI_PROFILE = {
    "objective": "hypertrophy",
    "training_time": "45 minutes",
    "experience_level": "intermediate",
    "frequency": "4x per week",
    "duration": "8 weeks",
    "location": "home",
    "equipments": ["dumbbells"],
    "has_physical_limitations": False,
    "limitation_description": None,
    "preferred_training_style": "circuit",
    "nutrition": "balanced",
    "sleep_quality": "good",
}


class FakePlanGenerator:
    """PlanGenerator double: returns `plan` or raises `error`."""

    def __init__(self, plan: dict | None = None):
        self.plan = plan if plan is not None else SAMPLE_PLAN
        self.error: Exception | None = None
        self.calls: list[dict] = []

    async def generate(self, **profile) -> dict:
        self.calls.append(profile)
        if self.error is not None:
            raise self.error
        return self.plan


def exercise_body(name: str = "Squat", **overrides) -> dict:
    body = {
        "name": name,
        "series": "4",
        "repetitions": "10",
        "weight": "80kg",
        "restTime": "90s",
        "videoUrl": "https://videos.example.com/squat",
        "instructions": "Keep your back straight",
    }
    body.update(overrides)
    return body


def workout_body(
    user_id: str = "user-1", name: str = "Leg Day", **overrides,
) -> dict:
    body = {
        "name": name,
        "visibility": "PUBLIC",
        "userId": user_id,
        "exercises": [exercise_body()],
    }
    body.update(overrides)
    return body


def ai_request_body(user_id: str = "user-1", **overrides) -> dict:
    body = {
        "userId": user_id,
        "objective": "hypertrophy",
        "trainingTime": "45 minutes",
        "experienceLevel": "intermediate",
        "frequency": "4x per week",
        "duration": "8 weeks",
        "location": "home",
        "equipments": ["dumbbells"],
        "hasPhysicalLimitations": False,
        "preferredTrainingStyle": "circuit",
        "nutrition": "balanced",
        "sleepQuality": "good",
    }
    body.update(overrides)
    return body
