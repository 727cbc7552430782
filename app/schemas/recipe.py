from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter


class RecipeIdeasRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ingredients: StrictStr


class RecipeIngredient(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    quantity: str
    unit: str | None = None


class Recipe(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str
    description: str | None = None
    yield_: str | None = Field(default=None, alias="yield")
    prep_time: str | None = Field(default=None, alias="prepTime")
    cook_time: str | None = Field(default=None, alias="cookTime")
    ingredients: list[RecipeIngredient]
    instructions: list[str]
    dish_type: str | None = None


RECIPE_IDEAS_COUNT = 3

RecipeIdeas = TypeAdapter(
    Annotated[list[Recipe], Field(min_length=RECIPE_IDEAS_COUNT, max_length=RECIPE_IDEAS_COUNT)]
)
