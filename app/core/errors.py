"""Failures of a recipe generation request.

Each error carries the HTTP status it maps to and the message that is safe
to show the caller. Details meant for operators go to the logs instead.
"""


class RecipeGenerationError(RuntimeError):
    error_class = "internal"
    status_code = 500
    message = "Internal server error during recipe generation."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class ConfigurationError(RecipeGenerationError):
    error_class = "configuration"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.message = f"Server configuration error: {detail}"


class MethodNotAllowed(RecipeGenerationError):
    error_class = "method_not_allowed"
    status_code = 405
    message = "Method Not Allowed"


class InvalidJson(RecipeGenerationError):
    error_class = "invalid_json"
    status_code = 400
    message = "Invalid JSON body."


class InvalidInput(RecipeGenerationError):
    error_class = "invalid_input"
    status_code = 400
    message = "Missing or invalid 'ingredients' in request body."


class UpstreamError(RecipeGenerationError):
    error_class = "upstream_error"
    message = "Gemini API failed to generate content."

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Gemini API responded with status {status_code}")
        self.status_code = status_code


class EmptyUpstreamResult(RecipeGenerationError):
    error_class = "empty_result"
    message = "Gemini returned no structured content."


class MalformedUpstreamResult(RecipeGenerationError):
    error_class = "invalid_model_output"
    status_code = 502
    message = "Gemini returned malformed content."


class InternalError(RecipeGenerationError):
    pass
