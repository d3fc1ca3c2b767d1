"""
Exception types raised by the Movie Q&A Bot.
"""


class MovieBotError(Exception):
	"""Base class for all bot errors."""


class EmptyQueryError(MovieBotError, ValueError):
	"""Raised when a question is empty or whitespace only."""

	def __init__(self, message: str = "Query cannot be empty"):
		super().__init__(message)


class CatalogUnavailableError(MovieBotError):
	"""Raised at startup when the movie catalog cannot be loaded."""


class ProviderError(MovieBotError):
	"""Raised by a generation provider on network, auth, timeout or malformed replies."""

	def __init__(self, provider: str, message: str):
		self.provider = provider  # which backend failed
		super().__init__(f"[{provider}] {message}")
