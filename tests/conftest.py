"""
Shared fixtures: a small in-memory catalog and stub generation providers.
"""

import pytest

from moviebot.catalog_index import CatalogIndex
from moviebot.exceptions import ProviderError
from moviebot.llm_providers import GenerationProvider
from moviebot.models import MovieRecord


class StubProvider(GenerationProvider):
	"""Provider that returns a canned reply or raises ProviderError; records prompts."""

	name = "stub"

	def __init__(self, reply=None, fail=False):
		super().__init__()
		self.reply = reply
		self.fail = fail
		self.prompts = []

	def generate(self, prompt: str) -> str:
		self.prompts.append(prompt)
		if self.fail:
			raise ProviderError(self.name, "connection refused")
		return self.reply


GODFATHER = MovieRecord(
	title="The Godfather",
	director="Francis Ford Coppola",
	writer="Mario Puzo, Francis Ford Coppola",
	cast="Marlon Brando, Al Pacino, James Caan",
	rating="9.2",
	metascore="100",
	release_date="March 24, 1972",
	country="United States",
	languages="English, Italian, Latin",
	budget="$6,000,000",
	gross="$250,341,816",
	runtime="2h 55m",
)


@pytest.fixture
def movies():
	return [
		GODFATHER,
		MovieRecord(title="The Godfather Part II", director="Francis Ford Coppola", cast="Al Pacino, Robert De Niro"),
		MovieRecord(title="Inception", director="Christopher Nolan", cast="Leonardo DiCaprio", runtime="2h 28m"),
		MovieRecord(title="Interstellar", director="Christopher Nolan", cast="Matthew McConaughey"),
		MovieRecord(title="Titanic", director="James Cameron", cast="Leonardo DiCaprio, Kate Winslet"),
		MovieRecord(title="Parasite", director="Bong Joon Ho", country="South Korea", languages="Korean"),
	]


@pytest.fixture
def catalog(movies):
	return CatalogIndex(movies)


@pytest.fixture
def failing_provider():
	return StubProvider(fail=True)
