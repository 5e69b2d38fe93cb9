"""Validation Messages: client-facing text for each (field path, error type) pair.

Invariants:
    - Keys of FIELD_MESSAGES are path patterns in camelCase ("exercises.*.restTime")
    - Keys of the inner dicts are Pydantic error types
    - TYPE_MESSAGES templates take {field} plus the error's ctx values
"""

FIELD_MESSAGES: dict[str, dict[str, str]] = {
    # Workout
    "name": {
        "missing": "Name is required",
        "string_type": "Name must be a string",
        "string_too_short": "Name must be at least 3 characters",
        "string_too_long": "Name must be at most 255 characters",
    },
    "userId": {
        "missing": "User ID is required",
        "string_type": "User ID must be a string",
        "string_too_short": "User ID cannot be empty",
    },
    "visibility": {
        "enum": "Visibility must be PUBLIC or PRIVATE",
    },
    "exercises": {
        "missing": "The exercise list is required",
        "list_type": "exercises must be a list of exercises",
        "too_short": "The exercise list cannot be empty",
    },
    # Exercise
    "exercises.*.name": {
        "missing": "Exercise name is required",
        "string_too_short": "Exercise name must be at least 3 characters",
    },
    "exercises.*.series": {
        "missing": "Number of series is required",
        "string_type": "Number of series must be a string",
        "string_pattern_mismatch": "Number of series must be a whole number",
    },
    "exercises.*.repetitions": {
        "missing": "Number of repetitions is required",
    },
    "exercises.*.weight": {
        "missing": "Weight is required",
    },
    "exercises.*.restTime": {
        "missing": "Rest time is required",
    },
    "exercises.*.videoUrl": {
        "missing": "Video URL is required",
        "url_invalid": "Video URL must be a valid URL",
    },
    "exercises.*.instructions": {
        "missing": "Instructions are required",
        "string_too_short": "Instructions must be at least 3 characters",
    },
    # Sessions
    "workoutId": {
        "missing": "Workout ID is required",
        "uuid_parsing": "Workout ID must be a valid UUID",
    },
    "completed": {
        "missing": "Completion flag is required",
        "bool_parsing": "completed must be true or false",
        "bool_type": "completed must be true or false",
    },
    "series": {
        "string_pattern_mismatch": "Number of series must be a whole number",
    },
}

TYPE_MESSAGES: dict[str, str] = {
    "missing": "{field} is required",
    "string_type": "{field} must be a string",
    "bool_type": "{field} must be true or false",
    "bool_parsing": "{field} must be true or false",
    "float_parsing": "{field} must be a number",
    "float_type": "{field} must be a number",
    "list_type": "{field} must be a list",
    "uuid_parsing": "{field} must be a valid UUID",
    "uuid_type": "{field} must be a valid UUID",
    "string_too_short": "{field} must be at least {min_length} characters",
    "string_too_long": "{field} must be at most {max_length} characters",
    "greater_than": "{field} must be greater than {gt}",
    "enum": "{field} must be one of: {expected}",
    "url_invalid": "{field} must be a valid URL",
}
