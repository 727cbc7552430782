import httpx
import pytest

from app.core.config import Settings, get_settings
from app.core.errors import ConfigurationError
from app.services.generator_factory import generator_factory_counters, get_generator
from app.services.generator_gemini import GeminiRecipeGenerator


def test_generator_factory_builds_gemini_generator_from_settings() -> None:
    settings = Settings(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_api_base_url="http://gemini.local/v1beta",
    )

    generator = get_generator(settings)

    assert isinstance(generator, GeminiRecipeGenerator)
    assert generator.endpoint_url == "http://gemini.local/v1beta/models/gemini-test:generateContent"


def test_generator_factory_reads_environment_by_default(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-env")
    get_settings.cache_clear()

    generator = get_generator()

    assert generator.endpoint_url.endswith("/models/gemini-env:generateContent")


def test_generator_factory_passes_transport_through() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))

    generator = get_generator(Settings(gemini_api_key="test-key"), transport=transport)

    assert generator._transport is transport


def test_generator_factory_raises_configuration_error_without_api_key() -> None:
    generator_factory_counters["missing_api_key"] = 0

    with pytest.raises(ConfigurationError) as exc_info:
        get_generator(Settings(gemini_api_key=None))

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Server configuration error: GEMINI_API_KEY not set."
    assert generator_factory_counters["missing_api_key"] == 1
