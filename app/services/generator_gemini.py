import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from app.core.config import DEFAULT_GEMINI_API_BASE_URL, DEFAULT_GEMINI_MODEL
from app.core.errors import (
    EmptyUpstreamResult,
    InternalError,
    MalformedUpstreamResult,
    RecipeGenerationError,
    UpstreamError,
)
from app.schemas.recipe import RECIPE_IDEAS_COUNT, RecipeIdeas
from app.schemas.recipe_schema import RECIPE_IDEAS_SCHEMA

logger = logging.getLogger(__name__)

gemini_generation_counters = {
    "success": 0,
    "failure": 0,
}

SYSTEM_PROMPT = (
    "You are a world-class Mediterranean chef. "
    f"Generate an array of {RECIPE_IDEAS_COUNT} complete recipes in the requested JSON structure. "
    "Include quantities, specific steps, and make sure the dishes strongly fit "
    "the Mediterranean diet principles."
)

_LEADING_FENCE = re.compile(r"^\s*```(json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```\s*\Z", re.IGNORECASE)
_MAX_LOGGED_ERROR_BODY = 2000


def build_user_prompt(ingredients: str) -> str:
    return (
        f"Create {RECIPE_IDEAS_COUNT} distinct recipes for Mediterranean dishes "
        f"using primarily these ingredients: {ingredients}. "
        "Focus on variety (one salad, one cooked dish, one dip/side)."
    )


def build_generation_payload(ingredients: str) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": build_user_prompt(ingredients)}]}],
        "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RECIPE_IDEAS_SCHEMA,
        },
    }


def extract_output_text(result: Any) -> str:
    """Return the text of the first part of the first candidate."""
    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None

    if not isinstance(text, str) or not text:
        raise EmptyUpstreamResult("Gemini response did not include candidate text")
    return text


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence wrapped around model output.

    The opening fence may be tagged ``json``. Only fences sitting at the very
    start or end of the text are removed.
    """
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


class GeminiRecipeGenerator:
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        base_url: str = DEFAULT_GEMINI_API_BASE_URL,
        timeout_seconds: float | None = None,
        validate_output: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._validate_output = validate_output
        self._transport = transport

    @property
    def endpoint_url(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    async def generate(self, ingredients: str) -> str:
        """Ask Gemini for recipe ideas and return the cleaned JSON text."""
        try:
            payload = build_generation_payload(ingredients)
            response = await self._post(payload)
            if not response.is_success:
                self._log_upstream_error(response)
                raise UpstreamError(response.status_code)

            output_text = strip_code_fences(extract_output_text(response.json()))
            if self._validate_output:
                self._check_recipe_ideas(output_text)
        except RecipeGenerationError as exc:
            gemini_generation_counters["failure"] += 1
            logger.warning(
                "gemini_recipe_generation",
                extra={
                    "outcome": "failure",
                    "error_class": exc.error_class,
                    "status_code": exc.status_code,
                    **self._request_shape_fields(ingredients),
                },
            )
            raise
        except Exception as exc:
            gemini_generation_counters["failure"] += 1
            logger.exception(
                "gemini_recipe_generation",
                extra={
                    "outcome": "failure",
                    "error_class": exc.__class__.__name__,
                    "status_code": InternalError.status_code,
                    **self._request_shape_fields(ingredients),
                },
            )
            raise InternalError() from exc

        gemini_generation_counters["success"] += 1
        logger.info(
            "gemini_recipe_generation",
            extra={
                "outcome": "success",
                "output_length": len(output_text),
                **self._request_shape_fields(ingredients),
            },
        )
        return output_text

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        client_kwargs: dict[str, Any] = {"transport": self._transport}
        if self._timeout_seconds is not None:
            client_kwargs["timeout"] = self._timeout_seconds

        async with httpx.AsyncClient(**client_kwargs) as client:
            return await client.post(
                self.endpoint_url,
                params={"key": self._api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )

    @staticmethod
    def _log_upstream_error(response: httpx.Response) -> None:
        logger.warning(
            "gemini_api_error",
            extra={
                "status_code": response.status_code,
                "upstream_body": response.text[:_MAX_LOGGED_ERROR_BODY],
            },
        )

    @staticmethod
    def _check_recipe_ideas(output_text: str) -> None:
        try:
            RecipeIdeas.validate_json(output_text)
        except ValidationError as exc:
            raise MalformedUpstreamResult(
                f"Gemini output failed recipe validation with {exc.error_count()} errors"
            ) from exc

    def _request_shape_fields(self, ingredients: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "ingredients_length": len(ingredients),
        }
