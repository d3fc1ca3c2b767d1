"""
Catalog index module.
Holds the immutable movie catalog and answers exact and fuzzy title lookups.
"""

import sys  # float epsilon for zero-distance fields
from typing import Iterable, List, Sequence, Tuple  # type annotations

from rapidfuzz import fuzz, utils  # fuzzy string scoring

from loguru import logger  # console logging

from .models import MovieRecord, RetrievalMatch  # data classes


class CatalogIndex:
	"""
	Read-only view over the catalog with a weighted two-field fuzzy matcher.

	Each field gets a distance in [0, 1] (0 = identical) from rapidfuzz's
	location-agnostic partial ratio. A record matches when any field is within
	the threshold; its score is the weighted product of the matching fields'
	distances, so lower is better and a perfect hit scores (almost) zero.
	"""

	FIELD_WEIGHTS: Tuple[Tuple[str, float], ...] = (('title', 0.7), ('searchable_text', 0.3))
	THRESHOLD = 0.3  # max per-field distance that counts as a match
	MIN_MATCH_LENGTH = 2  # shorter patterns never match
	_EPSILON = sys.float_info.epsilon  # stands in for a zero distance in the product

	def __init__(
		self,
		movies: Iterable[MovieRecord],
		field_weights: Sequence[Tuple[str, float]] = FIELD_WEIGHTS,
		threshold: float = THRESHOLD,
		min_match_length: int = MIN_MATCH_LENGTH,
	):
		self._movies: Tuple[MovieRecord, ...] = tuple(movies)  # frozen order
		total = sum(weight for _, weight in field_weights) or 1.0
		self._field_names = tuple(name for name, _ in field_weights)
		self._weights = tuple(weight / total for _, weight in field_weights)  # normalized to sum 1
		self.threshold = threshold
		self.min_match_length = min_match_length

		# Pre-process field text once so lookups only process the pattern
		self._field_text = tuple(
			tuple(utils.default_process(getattr(movie, name)) for name in self._field_names)
			for movie in self._movies
		)
		logger.debug(f"[Catalog] Index ready with {len(self._movies)} movies over fields {self._field_names}")

	def __len__(self) -> int:
		return len(self._movies)

	@property
	def movies(self) -> Tuple[MovieRecord, ...]:
		return self._movies

	def exact_matches(self, title: str) -> List[RetrievalMatch]:
		"""All records whose title equals `title` ignoring case, each scored 0.0."""
		needle = title.strip().lower()
		return [RetrievalMatch(record=m, score=0.0) for m in self._movies if m.title.lower() == needle]

	def fuzzy_search(self, text: str) -> List[RetrievalMatch]:
		"""All records within the threshold, ordered by ascending score then catalog order."""
		pattern = utils.default_process(text)
		if len(pattern) < self.min_match_length:
			logger.debug(f"[Catalog] Pattern '{text}' shorter than {self.min_match_length} chars; no fuzzy matches")
			return []

		scored = []  # (score, position, movie)
		for position, (movie, fields) in enumerate(zip(self._movies, self._field_text)):
			score = 1.0
			matched = False
			for value, weight in zip(fields, self._weights):
				distance = self._distance(pattern, value)
				if distance > self.threshold:
					continue
				matched = True
				score *= max(distance, self._EPSILON) ** weight
			if matched:
				scored.append((score, position, movie))

		scored.sort(key=lambda item: (item[0], item[1]))
		logger.debug(f"[Catalog] Fuzzy '{pattern}' -> {len(scored)} matches")
		return [RetrievalMatch(record=movie, score=score) for score, _, movie in scored]

	def _distance(self, pattern: str, value: str) -> float:
		if not value:
			return 1.0
		cutoff = (1.0 - self.threshold) * 100
		# Search the pattern anywhere inside longer text; compare whole strings otherwise
		if len(pattern) <= len(value):
			similarity = fuzz.partial_ratio(pattern, value, score_cutoff=cutoff)
		else:
			similarity = fuzz.ratio(pattern, value, score_cutoff=cutoff)
		return 1.0 - similarity / 100.0
