"""
Query interpretation module.
Pulls the implied movie title and the asked-about attribute out of a free-text question.
"""

import re  # regex for quoted titles and question patterns
from typing import List, Optional, Pattern, Tuple  # type annotations

from loguru import logger  # console logging

from .models import QueryCategory  # closed category enum


class QueryParser:
	"""
	Turns a question like "who is the director of The Godfather?" into
	a title guess ("The Godfather") and a category (director).
	Both operations are pure; the parser holds no per-query state.
	"""

	# Quoted title: matching quote pair, not an apostrophe inside a word
	RE_QUOTED = re.compile(r"(?<!\w)([\"'])(.+?)\1(?!\w)")

	# Question shapes tried in order; group 1 is the title
	TITLE_PATTERNS: Tuple[Pattern, ...] = (
		re.compile(r"(?:director|writer|cast|actors?|rating|budget|runtime|gross|earnings?)\s+of\s+(.+?)(?:\?|$)", re.I),
		re.compile(r"who\s+(?:is|are|was|were)\s+(?:the\s+)?(?:director|writer|cast|actors?|stars?)\s+(?:of|in)\s+(.+?)(?:\?|$)", re.I),
		re.compile(r"what\s+(?:is|was)\s+(?:the\s+)?(?:rating|budget|runtime|gross|earnings?)\s+(?:of|for)\s+(.+?)(?:\?|$)", re.I),
		re.compile(r"when\s+(?:was|did)\s+(.+?)\s+(?:released?|come\s+out)(?:\?|$)", re.I),
		re.compile(r"how\s+long\s+(?:is|was)\s+(.+?)(?:\?|$)", re.I),
		re.compile(r"tell\s+me\s+about\s+(.+?)(?:\?|$)", re.I),
	)

	# Trailing "the movie" / "film" noise after a captured title
	RE_TRAILING_NOUN = re.compile(r"\b(?:the\s+movie|the\s+film|movie|film)$", re.I)

	# Words that never belong to a title in the fallback path
	STOP_WORDS = frozenset({
		'what', 'is', 'the', 'who', 'when', 'where', 'how', 'of', 'a', 'an', 'and', 'or', 'but',
		'in', 'on', 'at', 'to', 'for', 'with', 'by', 'was', 'were', 'are',
		'director', 'writer', 'cast', 'actor', 'actress', 'rating', 'budget', 'runtime',
		'gross', 'earnings', 'released', 'release', 'date',
		'directed', 'starred', 'starring', 'wrote', 'written', 'did', 'does', 'which',
	})

	RE_WORD = re.compile(r"\w+|\?+")  # words, plus runs of question marks
	RE_ONLY_QUESTION_MARKS = re.compile(r"^\?+$")

	# Category rules, highest priority first; first keyword hit wins
	CATEGORY_RULES: Tuple[Tuple[QueryCategory, Tuple[str, ...]], ...] = (
		(QueryCategory.DIRECTOR, ('director', 'directed')),
		(QueryCategory.WRITER, ('writer', 'screenplay', 'script')),
		(QueryCategory.CAST, ('cast', 'actor', 'actress', 'star')),
		(QueryCategory.RATING, ('rating', 'score')),
		(QueryCategory.RELEASE_DATE, ('release', 'year', 'date')),
		(QueryCategory.COUNTRY, ('country', 'origin')),
		(QueryCategory.LANGUAGES, ('language',)),
		(QueryCategory.BUDGET, ('budget', 'cost')),
		(QueryCategory.GROSS, ('gross', 'earning', 'revenue')),
		(QueryCategory.RUNTIME, ('runtime', 'duration', 'length')),
	)

	def extract_title(self, query: str) -> str:
		"""
		Best guess at the movie title mentioned in `query`.

		Order: quoted text, then the question patterns, then the query with
		stop words removed. Falls back to the query itself, so the result is
		never empty for a non-empty query.
		"""
		quoted = self._extract_quoted(query)
		if quoted:
			logger.debug(f"[Parser] Quoted title: '{quoted}'")
			return quoted

		from_pattern = self._extract_by_pattern(query)
		if from_pattern:
			return from_pattern

		return self._extract_by_stop_words(query)

	def determine_query_type(self, query: str) -> QueryCategory:
		"""Category of the first rule with a keyword in the lowercased query."""
		q = query.lower()
		for category, keywords in self.CATEGORY_RULES:
			if any(keyword in q for keyword in keywords):
				logger.debug(f"[Parser] Query type: {category.value}")
				return category
		return QueryCategory.GENERAL

	def _extract_quoted(self, query: str) -> Optional[str]:
		m = self.RE_QUOTED.search(query)
		if not m:
			return None
		return m.group(2).strip() or None

	def _extract_by_pattern(self, query: str) -> Optional[str]:
		for index, pattern in enumerate(self.TITLE_PATTERNS):
			m = pattern.search(query)
			if not m or not m.group(1):
				continue
			title = m.group(1).strip()
			title = self.RE_TRAILING_NOUN.sub('', title).strip()
			if title:
				logger.debug(f"[Parser] Pattern {index} matched title: '{title}'")
				return title
		return None

	def _extract_by_stop_words(self, query: str) -> str:
		tokens: List[str] = self.RE_WORD.findall(query)
		kept = [
			t for t in tokens
			if t.lower() not in self.STOP_WORDS
			and len(t) > 1
			and not self.RE_ONLY_QUESTION_MARKS.match(t)
		]
		title = ' '.join(kept).strip()
		logger.debug(f"[Parser] Stop-word fallback: tokens={tokens} -> '{title or query}'")
		return title or query
