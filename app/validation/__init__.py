from .page import DEFAULT_LIMIT, PageVariables, get_page_variables
from .patch import Operation, PatchParseError, parse_patches, validate_patches
from .recipe import ValidationMode, recipe_id_from_title, validate_recipe

__all__ = [
    "DEFAULT_LIMIT",
    "PageVariables",
    "get_page_variables",
    "Operation",
    "PatchParseError",
    "parse_patches",
    "validate_patches",
    "ValidationMode",
    "recipe_id_from_title",
    "validate_recipe",
]
