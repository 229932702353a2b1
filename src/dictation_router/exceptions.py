"""Exception hierarchy for dictation-router."""


class DictationRouterError(Exception):
    """Base exception for all dictation-router errors."""


class ValidationError(DictationRouterError):
    """Raised when text or a template is empty or malformed at a call boundary."""


class ConfigurationError(DictationRouterError):
    """Raised when the LLM path is invoked without a configured API credential."""


class CategorizerError(DictationRouterError):
    """Base for failures of the LLM-assisted categorization call."""


class TransportError(CategorizerError):
    """Network failure reaching the chat-completion endpoint (connection, timeout)."""


class ApiError(CategorizerError):
    """The chat-completion endpoint answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(CategorizerError):
    """LLM response was not valid JSON or did not match the expected shape."""

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


class TemplateNotFoundError(DictationRouterError):
    """Raised when a template id does not resolve to a known template."""
