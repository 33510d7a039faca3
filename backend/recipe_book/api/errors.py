# recipe_book/api/errors.py
# RecipeBookError -> HTTPException, shared by the routers.
from fastapi import HTTPException

from recipe_book.core.errors import RecipeBookError, status_for


def http_error(err: RecipeBookError) -> HTTPException:
    return HTTPException(status_code=status_for(err), detail=err.to_detail())


def not_found(message: str = "recipe not found.") -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "NotFound", "message": message})
