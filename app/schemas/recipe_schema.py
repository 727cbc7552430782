"""Response schema sent to Gemini to constrain generated recipes.

Uses the OpenAPI subset accepted by ``generationConfig.responseSchema``,
which spells types in upper case.
"""

from typing import Any

RECIPE_INGREDIENT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING"},
        "quantity": {"type": "STRING"},
        "unit": {"type": "STRING"},
    },
    "required": ["name", "quantity"],
}

RECIPE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "yield": {"type": "STRING"},
        "prepTime": {"type": "STRING"},
        "cookTime": {"type": "STRING"},
        "ingredients": {"type": "ARRAY", "items": RECIPE_INGREDIENT_SCHEMA},
        "instructions": {"type": "ARRAY", "items": {"type": "STRING"}},
        "dish_type": {"type": "STRING"},
    },
    "required": ["title", "ingredients", "instructions"],
}

RECIPE_IDEAS_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": RECIPE_SCHEMA,
    "description": "An array containing 3 distinct Mediterranean recipes.",
}
