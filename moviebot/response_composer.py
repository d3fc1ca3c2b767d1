"""
Response composition module.
Builds the provider prompt from retrieved movies, and falls back to fixed templates
when the provider is missing or fails.
"""

from typing import Callable, Dict, Optional, Sequence  # type annotations

from loguru import logger  # console logging

from .llm_providers import GenerationProvider  # prompt-in, text-out backend
from .models import ComposedResponse, GenerationResult, MovieRecord, QueryCategory, RetrievalMatch


NO_MATCH_FALLBACK = (
	"I couldn't find any movies matching your query. "
	"Please check the spelling or try a different movie title."
)
APPROXIMATE_MATCH_NOTE = "\n\n(Note: This might not be an exact match. Please verify the movie title.)"

NO_MATCH_PROMPT = """The user asked: "{query}"

No movies were found matching this query in the IMDB dataset. Please provide a comprehensive, helpful response that:

1. Acknowledges that no exact matches were found in the database
2. Suggests they might check the spelling of the movie title
3. Mention that movies might be known by different titles (original vs. international)
4. Suggest they can try searching with partial titles or alternative names
5. Encourage them to ask about other movies in the database
6. If the query seems to be about a specific genre, director, or topic, provide some general insights
7. Make the response friendly, encouraging, and detailed (3-4 sentences)

Keep the response conversational and helpful."""

MATCH_PROMPT = """You are a knowledgeable movie information assistant with expertise in cinema history. A user asked: "{query}"

Here are the relevant movies from the IMDB database:
{movies}
Please provide a comprehensive, engaging response that:
1. Directly answers the user's question using the movie data above
2. Uses the movie with the best match score (lowest number) as the primary answer
3. Provides rich context and background information about the movie, director, or topic
4. Include interesting details about the production, cast, or cultural impact when relevant
5. If asking about a specific person (director, actor), mention their other notable works if you know them
6. For ratings or box office questions, provide context about what makes those numbers significant
7. If the match score is > {approximate_score}, mention that this might not be exactly what they were looking for
8. Format movie titles in quotes like "The Godfather"
9. Make the response conversational, informative, and engaging
10. Aim for 3-5 sentences minimum to provide comprehensive information

Response:"""

MOVIE_BLOCK = """
Movie {index}: "{m.title}"
- Director: {director}
- Writer: {writer}
- Cast: {cast}
- Rating: {rating}
- Metascore: {metascore}
- Release Date: {release_date}
- Country: {country}
- Languages: {languages}
- Budget: {budget}
- Worldwide Gross: {gross}
- Runtime: {runtime}
- Match Score: {score:.3f} (lower is better)
"""


def _rating_answer(m: MovieRecord) -> str:
	text = f'"{m.title}" has an average rating of {m.rating or "not available"}'
	if m.metascore:
		text += f" and a Metascore of {m.metascore}"
	return text + "."


def _general_answer(m: MovieRecord) -> str:
	return (
		f'Here\'s information about "{m.title}":\n'
		f"- Director: {m.director or 'Not available'}\n"
		f"- Rating: {m.rating or 'Not available'}\n"
		f"- Release Date: {m.release_date or 'Not available'}\n"
		f"- Cast: {m.cast or 'Not available'}"
	)


# One deterministic answer per category; GENERAL is the default
TEMPLATES: Dict[QueryCategory, Callable[[MovieRecord], str]] = {
	QueryCategory.DIRECTOR: lambda m: f'The director of "{m.title}" is {m.director or "not available"}.',
	QueryCategory.WRITER: lambda m: f'The writer(s) of "{m.title}" are {m.writer or "not available"}.',
	QueryCategory.CAST: lambda m: f'The main cast of "{m.title}" includes: {m.cast or "not available"}.',
	QueryCategory.RATING: _rating_answer,
	QueryCategory.RELEASE_DATE: lambda m: f'"{m.title}" was released on {m.release_date or "date not available"}.',
	QueryCategory.COUNTRY: lambda m: f'"{m.title}" is from {m.country or "country not available"}.',
	QueryCategory.LANGUAGES: lambda m: f'"{m.title}" is available in {m.languages or "languages not available"}.',
	QueryCategory.BUDGET: lambda m: f'The budget of "{m.title}" was {m.budget or "not available"}.',
	QueryCategory.GROSS: lambda m: f'"{m.title}" grossed {m.gross or "earnings not available"} worldwide.',
	QueryCategory.RUNTIME: lambda m: f'The runtime of "{m.title}" is {m.runtime or "not available"}.',
	QueryCategory.GENERAL: _general_answer,
}


class ResponseComposer:
	"""
	Turns retrieval output into the final answer text.
	Provider failures never escape: they select the template path instead.
	"""

	CONTEXT_SIZE = 3  # candidates shown to the provider
	APPROXIMATE_SCORE = 0.2  # best score above this gets the "might not be exact" note

	def __init__(self, provider: Optional[GenerationProvider] = None):
		self.provider = provider  # None disables generation

	def compose(self, query: str, matches: Sequence[RetrievalMatch], category: QueryCategory) -> str:
		return self.compose_response(query, matches, category).text

	def compose_response(
		self,
		query: str,
		matches: Sequence[RetrievalMatch],
		category: QueryCategory,
	) -> ComposedResponse:
		"""Answer text plus whether the provider wrote it."""
		if not matches:
			result = self._generate(self.build_no_match_prompt(query))
			if result.ok:
				return ComposedResponse(text=result.text, llm_used=True)
			logger.warning("[Composer] No matches and no generated text; using fixed apology")
			return ComposedResponse(text=NO_MATCH_FALLBACK, llm_used=False)

		result = self._generate(self.build_match_prompt(query, matches))
		if result.ok:
			return ComposedResponse(text=result.text, llm_used=True)
		logger.warning(f"[Composer] Falling back to '{category.value}' template: {result.error}")
		return ComposedResponse(text=self.template_response(matches, category), llm_used=False)

	def build_no_match_prompt(self, query: str) -> str:
		return NO_MATCH_PROMPT.format(query=query)

	def build_match_prompt(self, query: str, matches: Sequence[RetrievalMatch]) -> str:
		blocks = []
		for index, match in enumerate(matches[:self.CONTEXT_SIZE], 1):
			m = match.record
			blocks.append(MOVIE_BLOCK.format(
				index=index,
				m=m,
				director=m.director or 'Not available',
				writer=m.writer or 'Not available',
				cast=m.cast or 'Not available',
				rating=m.rating or 'Not available',
				metascore=m.metascore or 'Not available',
				release_date=m.release_date or 'Not available',
				country=m.country or 'Not available',
				languages=m.languages or 'Not available',
				budget=m.budget or 'Not available',
				gross=m.gross or 'Not available',
				runtime=m.runtime or 'Not available',
				score=match.score,
			))
		return MATCH_PROMPT.format(query=query, movies='\n'.join(blocks), approximate_score=self.APPROXIMATE_SCORE)

	def template_response(self, matches: Sequence[RetrievalMatch], category: QueryCategory) -> str:
		"""Deterministic answer from the best match; requires at least one match."""
		best = matches[0]
		template = TEMPLATES.get(category, _general_answer)
		text = template(best.record)
		if best.score > self.APPROXIMATE_SCORE:
			text += APPROXIMATE_MATCH_NOTE
		return text

	def _generate(self, prompt: str) -> GenerationResult:
		if self.provider is None:
			return GenerationResult.failure("no provider configured")
		try:
			return self.provider.try_generate(prompt)
		except Exception as e:  # a misbehaving provider must not break the answer
			logger.exception(f"[Composer] Provider raised unexpectedly: {e}")
			return GenerationResult.failure(str(e))
