"""
Data models for the Movie Q&A Bot.
Defines the core data structures passed between the interpreter, retriever and composer.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Enum gives us a closed set of query categories
from enum import Enum  # closed classification
# Import typing helpers for precise and self-documenting types
from typing import Optional  # optional values


@dataclass(frozen=True)
class MovieRecord:
	"""
	Represents a single movie row from the catalog.
	All fields are kept as the raw text from the dataset; missing values are empty strings.
	"""
	title: str  # movie title as written in the dataset
	director: str = ''  # director name(s)
	writer: str = ''  # writer name(s)
	cast: str = ''  # comma-separated main cast
	rating: str = ''  # average user rating
	metascore: str = ''  # critic metascore
	release_date: str = ''  # release date text
	country: str = ''  # country of origin
	languages: str = ''  # spoken languages
	budget: str = ''  # production budget
	gross: str = ''  # worldwide gross
	runtime: str = ''  # runtime text
	searchable_text: str = field(init=False, repr=False, compare=False)  # derived lookup text

	def __post_init__(self):
		# Derived once at load time; frozen dataclass needs object.__setattr__
		parts = [self.title, self.director, self.writer, self.cast, self.country, self.languages]
		object.__setattr__(self, 'searchable_text', ' '.join(parts).lower())


@dataclass(frozen=True)
class RetrievalMatch:
	record: MovieRecord  # matched movie
	score: float  # 0.0 = exact, higher = weaker match


class QueryCategory(str, Enum):
	"""Which movie attribute a question is asking about."""
	DIRECTOR = 'director'
	WRITER = 'writer'
	CAST = 'cast'
	RATING = 'rating'
	RELEASE_DATE = 'releaseDate'
	COUNTRY = 'country'
	LANGUAGES = 'languages'
	BUDGET = 'budget'
	GROSS = 'gross'
	RUNTIME = 'runtime'
	GENERAL = 'general'


@dataclass(frozen=True)
class GenerationResult:
	"""
	Outcome of one generation call: either text (ok) or an error reason.
	Lets callers branch on failure instead of catching exceptions.
	"""
	text: Optional[str] = None  # generated text on success
	error: Optional[str] = None  # failure reason otherwise

	@property
	def ok(self) -> bool:
		return self.error is None and bool(self.text and self.text.strip())

	@classmethod
	def success(cls, text: str) -> 'GenerationResult':
		return cls(text=text)

	@classmethod
	def failure(cls, reason: str) -> 'GenerationResult':
		return cls(error=reason)


@dataclass(frozen=True)
class ComposedResponse:
	text: str  # final answer shown to the user
	llm_used: bool  # True when the provider produced the text


@dataclass(frozen=True)
class QueryAnswer:
	"""Everything the API returns for one question."""
	query: str  # the original question
	query_type: QueryCategory  # detected category
	response: str  # final answer text
	matches: int  # number of retrieved matches
	llm_used: bool  # whether a generation provider is configured
