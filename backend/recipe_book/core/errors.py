# recipe_book/core/errors.py
# Error taxonomy shared by services and routers.
# Routers map these onto HTTP status codes (see STATUS_BY_CODE).

from __future__ import annotations
from typing import Dict, List, Optional


class RecipeBookError(Exception):
    """Base class. ``code`` is the machine-readable name returned to clients."""

    code = "UnexpectedFailure"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.code
        super().__init__(self.message)

    def to_detail(self) -> Dict[str, str]:
        return {"error": self.code, "message": self.message}


# --- validation (always recoverable, 400) -----------------------------------

class RecipeValidationError(RecipeBookError):
    code = "ValidationError"


class MissingFields(RecipeValidationError):
    code = "MissingFields"

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__("Missing required fields: " + ", ".join(self.fields))


class InvalidCuisine(RecipeValidationError):
    code = "InvalidCuisine"

    def __init__(self, cuisine: str):
        self.cuisine = cuisine
        super().__init__(f"Cuisine not found: {cuisine}")


class InvalidTags(RecipeValidationError):
    code = "InvalidTags"

    def __init__(self, requested: List[str], resolved: List[str]):
        self.requested = list(requested)
        self.resolved = list(resolved)
        super().__init__(
            f"One or more tags is invalid (requested {len(self.requested)}, "
            f"found {len(self.resolved)})"
        )


# --- lookups ------------------------------------------------------------------

class InvalidIdentifier(RecipeBookError):
    code = "InvalidIdentifier"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid recipe ID format: {value!r}")


class NotFound(RecipeBookError):
    code = "NotFound"


# --- AI backend ---------------------------------------------------------------

class MalformedAIOutput(RecipeBookError):
    code = "MalformedAIOutput"

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class AINotReady(RecipeBookError):
    # backend not configured (SDK missing / no API key)
    code = "AINotReady"


STATUS_BY_CODE: Dict[str, int] = {
    "ValidationError": 400,
    "MissingFields": 400,
    "InvalidCuisine": 400,
    "InvalidTags": 400,
    "InvalidIdentifier": 400,
    "NotFound": 404,
    "MalformedAIOutput": 500,
    "AINotReady": 503,
    "UnexpectedFailure": 500,
}


def status_for(err: RecipeBookError) -> int:
    return STATUS_BY_CODE.get(err.code, 500)
