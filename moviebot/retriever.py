"""
Retrieval module.
Finds the catalog entries a question refers to: exact title first, then fuzzy title, then fuzzy full query.
"""

from typing import List, Optional  # type annotations

from loguru import logger  # console logging

from .catalog_index import CatalogIndex  # exact and fuzzy lookups
from .models import RetrievalMatch  # (record, score) pairs
from .query_parser import QueryParser  # title extraction


class Retriever:
	"""
	Ranks catalog entries for a question.
	A weak fuzzy hit on the extracted title (score above ESCALATION_SCORE) triggers
	a second fuzzy pass with the whole question, which wins only if strictly better.
	"""

	MAX_RESULTS = 5  # cap for fuzzy results
	ESCALATION_SCORE = 0.4  # best fuzzy score above this retries with the full query

	def __init__(self, catalog: CatalogIndex, parser: Optional[QueryParser] = None):
		self.catalog = catalog  # read-only index
		self.parser = parser or QueryParser()  # title extraction

	def search(self, query: str) -> List[RetrievalMatch]:
		"""Up to MAX_RESULTS matches ordered by ascending score (all exact hits when present)."""
		title = self.parser.extract_title(query)
		logger.debug(f"[Retriever] Extracted title: '{title}'")

		# 1) Exact title equality is fully disambiguating: return every hit, uncapped
		exact = self.catalog.exact_matches(title)
		if exact:
			logger.debug(f"[Retriever] Found {len(exact)} exact matches")
			return exact

		# 2) Fuzzy pass on the extracted title
		results = self.catalog.fuzzy_search(title)

		# 3) Weak or missing results: try the raw question and keep it only if strictly better
		if not results or results[0].score > self.ESCALATION_SCORE:
			full_query_results = self.catalog.fuzzy_search(query)
			if full_query_results and (not results or full_query_results[0].score < results[0].score):
				logger.debug(
					f"[Retriever] Full-query pass wins | best={full_query_results[0].score:.3f} "
					f"vs title pass={results[0].score if results else None}"
				)
				return full_query_results[:self.MAX_RESULTS]

		logger.debug(f"[Retriever] Returning {min(len(results), self.MAX_RESULTS)} of {len(results)} fuzzy matches")
		return results[:self.MAX_RESULTS]
