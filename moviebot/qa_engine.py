"""
Question-answering engine.
Ties query interpretation, retrieval, and response composition into one call.
"""

from typing import Optional  # type annotations

from loguru import logger  # console logging

from .catalog_index import CatalogIndex  # read-only movie index
from .exceptions import EmptyQueryError  # input validation
from .llm_providers import GenerationProvider  # active backend, if any
from .models import QueryAnswer  # response payload
from .query_parser import QueryParser  # title + category extraction
from .response_composer import ResponseComposer  # prompt / template answers
from .retriever import Retriever  # exact + fuzzy lookup


class MovieQAEngine:
	"""
	High-level API: question in, QueryAnswer out.
	The catalog is shared read-only across calls; nothing else outlives a call.
	"""

	def __init__(self, catalog: CatalogIndex, provider: Optional[GenerationProvider] = None):
		self.catalog = catalog  # immutable index
		self.provider = provider  # None means templates only
		self.parser = QueryParser()  # stateless
		self.retriever = Retriever(catalog, self.parser)
		self.composer = ResponseComposer(provider)
		logger.info(f"[Engine] Ready with {len(catalog)} movies | provider={self.provider_name}")

	@property
	def provider_name(self) -> str:
		return self.provider.name if self.provider is not None else "none"

	@property
	def llm_enabled(self) -> bool:
		return self.provider is not None

	def check_provider(self) -> bool:
		"""Log whether the provider looks usable; never fails startup."""
		if self.provider is None:
			return False
		return self.provider.check_connection()

	def answer(self, query: Optional[str]) -> QueryAnswer:
		"""Validate, classify, retrieve, and compose an answer for one question."""
		if not query or not query.strip():  # rejected before any catalog access
			raise EmptyQueryError("Query is required")

		logger.info(f"[Engine] Received query: '{query}'")
		query_type = self.parser.determine_query_type(query)
		matches = self.retriever.search(query)
		logger.debug(
			f"[Engine] type={query_type.value} | matches={len(matches)} | "
			f"top={[(m.record.title, round(m.score, 3)) for m in matches[:3]]}"
		)

		composed = self.composer.compose_response(query, matches, query_type)
		logger.info(f"[Engine] Answered with {len(matches)} matches | generated={composed.llm_used}")
		return QueryAnswer(
			query=query,
			query_type=query_type,
			response=composed.text,
			matches=len(matches),
			llm_used=self.llm_enabled,
		)
