"""Exceptions raised around AI provider calls.

Each exception carries the HTTP status code the router should answer with.
"""


class AIProviderError(Exception):
    """Base exception for AI provider errors."""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ProviderNotAvailableError(AIProviderError):
    """Raised when no AI provider is configured."""
    def __init__(self, message: str = "No active AI provider available"):
        super().__init__(message, status_code=503)


class ProviderCallError(AIProviderError):
    """Raised when an AI provider call fails."""
    def __init__(self, message: str, provider_name: str):
        self.provider_name = provider_name
        super().__init__(f"Provider {provider_name} error: {message}", status_code=500)
