"""
Text-generation providers.

Two backends share one contract, `generate(prompt) -> str`:
- OllamaProvider: a local model served by Ollama
- GeminiProvider: Google's Gemini API

Exactly one provider (or none) is active, chosen once from Settings by build_provider().
`generate` raises ProviderError on any failure; `try_generate` returns a GenerationResult instead.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests  # HTTP client for both backends

from loguru import logger  # console logging

from .config import Settings
from .exceptions import ProviderError
from .models import GenerationResult


class GenerationProvider(ABC):
	"""Base class for a prompt-in, text-out backend."""

	name = "base"

	def __init__(self, temperature: float = 0.3, top_p: float = 0.9, max_tokens: int = 1000,
				 timeout: Optional[float] = None):
		self.temperature = temperature
		self.top_p = top_p
		self.max_tokens = max_tokens
		self.timeout = timeout  # None waits indefinitely

	@abstractmethod
	def generate(self, prompt: str) -> str:
		"""Generated text for `prompt`; raises ProviderError on any failure."""

	def try_generate(self, prompt: str) -> GenerationResult:
		"""Single attempt, no retry; failures become a GenerationResult error."""
		try:
			return GenerationResult.success(self.generate(prompt))
		except ProviderError as e:
			logger.error(f"[LLM] {self.name} generation failed: {e}")
			return GenerationResult.failure(str(e))

	def check_connection(self) -> bool:
		"""Startup connectivity check; logs the outcome and never raises."""
		result = self.try_generate("Test connection")
		if result.ok:
			logger.info(f"[LLM] {self.name} connected successfully")
		else:
			logger.warning(f"[LLM] {self.name} not available: {result.error}")
		return result.ok

	def _post_json(self, url: str, payload: Dict[str, Any], params: Optional[Dict[str, str]] = None) -> Any:
		try:
			resp = requests.post(url, json=payload, params=params, timeout=self.timeout)
			resp.raise_for_status()
			return resp.json()
		except requests.RequestException as e:
			raise ProviderError(self.name, f"Request failed: {e}") from e
		except ValueError as e:
			raise ProviderError(self.name, f"Invalid JSON in response: {e}") from e


class OllamaProvider(GenerationProvider):
	"""Local model served by Ollama's /api/generate endpoint."""

	name = "ollama"

	def __init__(self, url: str, model: str, **kwargs):
		super().__init__(**kwargs)
		self.url = url.rstrip("/")
		self.model = model

	def generate(self, prompt: str) -> str:
		payload = {
			"model": self.model,
			"prompt": prompt,
			"stream": False,
			"options": {
				"temperature": self.temperature,
				"top_p": self.top_p,
				"num_predict": self.max_tokens,
			},
		}
		logger.debug(f"[LLM] Ollama request | model={self.model} | prompt_chars={len(prompt)}")
		data = self._post_json(f"{self.url}/api/generate", payload)
		text = data.get("response") if isinstance(data, dict) else None
		if not isinstance(text, str) or not text.strip():
			raise ProviderError(self.name, "Response did not contain generated text")
		return text


class GeminiProvider(GenerationProvider):
	"""Google Gemini generateContent endpoint."""

	name = "gemini"

	def __init__(self, api_key: Optional[str], model: str,
				 base_url: str = "https://generativelanguage.googleapis.com/v1beta", **kwargs):
		super().__init__(**kwargs)
		self.api_key = api_key
		self.model = model
		self.base_url = base_url.rstrip("/")

	def generate(self, prompt: str) -> str:
		if not self.api_key:
			raise ProviderError(self.name, "GEMINI_API_KEY is not configured")

		payload = {
			"contents": [{"parts": [{"text": prompt}]}],
			"generationConfig": {
				"temperature": self.temperature,
				"topP": self.top_p,
				"maxOutputTokens": self.max_tokens,
			},
		}
		logger.debug(f"[LLM] Gemini request | model={self.model} | prompt_chars={len(prompt)}")
		data = self._post_json(
			f"{self.base_url}/models/{self.model}:generateContent",
			payload,
			params={"key": self.api_key},
		)
		try:
			text = data["candidates"][0]["content"]["parts"][0]["text"]
		except (KeyError, IndexError, TypeError) as e:
			raise ProviderError(self.name, f"Unexpected response shape: {e}") from e
		if not isinstance(text, str) or not text.strip():
			raise ProviderError(self.name, "Response did not contain generated text")
		return text

	def check_connection(self) -> bool:
		# Only checks the key; a test call would spend quota
		if not self.api_key:
			logger.warning("[LLM] Gemini API key not configured; answers will use templates")
			return False
		logger.info(f"[LLM] Gemini API configured (model {self.model})")
		return True


def build_provider(settings: Settings) -> Optional[GenerationProvider]:
	"""The single provider selected by settings.llm_provider, or None when disabled."""
	common = dict(
		temperature=settings.llm_temperature,
		top_p=settings.llm_top_p,
		max_tokens=settings.llm_max_tokens,
		timeout=settings.llm_timeout_seconds,
	)
	if settings.llm_provider == "ollama":
		return OllamaProvider(url=settings.ollama_url, model=settings.ollama_model, **common)
	if settings.llm_provider == "gemini":
		return GeminiProvider(
			api_key=settings.gemini_api_key,
			model=settings.gemini_model,
			base_url=settings.gemini_base_url,
			**common,
		)
	logger.info("[LLM] Generation disabled; using template responses only")
	return None
