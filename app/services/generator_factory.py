import httpx

from app.core.config import Settings, get_settings
from app.core.errors import ConfigurationError
from app.services.generator_gemini import GeminiRecipeGenerator

generator_factory_counters = {
    "missing_api_key": 0,
}


def get_upstream_transport() -> httpx.AsyncBaseTransport | None:
    return None


def get_generator(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GeminiRecipeGenerator:
    config = settings or get_settings()

    if not config.gemini_api_key:
        generator_factory_counters["missing_api_key"] += 1
        raise ConfigurationError("GEMINI_API_KEY not set.")

    return GeminiRecipeGenerator(
        api_key=config.gemini_api_key,
        model=config.gemini_model,
        base_url=config.gemini_api_base_url,
        timeout_seconds=config.gemini_timeout_seconds,
        validate_output=config.validate_output,
        transport=transport,
    )
