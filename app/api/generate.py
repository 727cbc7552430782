import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.routing import APIRoute
from pydantic import ValidationError
from starlette.routing import Match
from starlette.types import Receive, Scope, Send

from app.core.config import Settings, get_settings
from app.core.errors import (
    InvalidInput,
    InvalidJson,
    MethodNotAllowed,
    RecipeGenerationError,
)
from app.schemas.recipe import RecipeIdeasRequest
from app.services.generator_factory import get_generator, get_upstream_transport


class AnyMethodRoute(APIRoute):
    """Route that hands every HTTP method to its endpoint.

    The endpoint answers unsupported methods itself.
    """

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            return Match.FULL, child_scope
        return match, child_scope

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)


router = APIRouter(route_class=AnyMethodRoute)
logger = logging.getLogger(__name__)

generate_api_counters = {
    "success": 0,
    "failure": 0,
}

ACCEPTED_METHOD = "POST"


def _require_method(request: Request) -> None:
    if request.method != ACCEPTED_METHOD:
        raise MethodNotAllowed()


def _parse_ingredients(body: bytes) -> str:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise InvalidJson() from exc

    try:
        return RecipeIdeasRequest.model_validate(data).ingredients
    except ValidationError as exc:
        raise InvalidInput() from exc


def _error_response(exc: RecipeGenerationError) -> Response:
    if isinstance(exc, MethodNotAllowed):
        return PlainTextResponse(
            exc.message, status_code=exc.status_code, headers={"Allow": ACCEPTED_METHOD}
        )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@router.api_route("/generate-recipe", methods=[ACCEPTED_METHOD])
async def generate_recipe(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_upstream_transport),
) -> Response:
    try:
        generator = get_generator(settings, transport=transport)
        _require_method(request)
        ingredients = _parse_ingredients(await request.body())
        recipes_json = await generator.generate(ingredients)
    except RecipeGenerationError as exc:
        generate_api_counters["failure"] += 1
        logger.warning(
            "api_recipe_generation",
            extra={
                "outcome": "failure",
                "error_class": exc.error_class,
                "status_code": exc.status_code,
                "method": request.method,
            },
        )
        return _error_response(exc)

    generate_api_counters["success"] += 1
    logger.info(
        "api_recipe_generation",
        extra={
            "outcome": "success",
            "status_code": 200,
            "method": request.method,
        },
    )
    return Response(content=recipes_json, media_type="application/json")
