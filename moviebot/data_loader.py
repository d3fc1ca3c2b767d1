"""
Data loading module.
Reads the IMDB-style movie CSV into immutable MovieRecord objects and builds the catalog index.
"""

# Standard libs for CSV parsing, typing, and paths
import csv  # read CSV rows as dicts
from typing import List, Dict  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our data classes and the index they feed
from .models import MovieRecord  # structured movie record
from .catalog_index import CatalogIndex  # fuzzy lookup structure
from .exceptions import CatalogUnavailableError  # fatal startup error

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading and cleaning of movie rows.
	"""

	# Dataset column -> MovieRecord field
	COLUMN_MAP = {
		'Title': 'title',
		'Average Rating': 'rating',
		'Director': 'director',
		'Writer': 'writer',
		'Metascore': 'metascore',
		'Cast': 'cast',
		'Release Date': 'release_date',
		'Country of Origin': 'country',
		'Languages': 'languages',
		'Budget': 'budget',
		'Worldwide Gross': 'gross',
		'Runtime': 'runtime',
	}

	def load_movies_from_csv(self, filepath: str) -> List[MovieRecord]:
		"""
		Load movies from a CSV file with a header row.
		Returns a list of MovieRecord objects in file order.
		"""
		movies = []  # accumulator for parsed records
		filepath = Path(filepath)  # normalize path

		# A missing dataset means we cannot serve anything
		if not filepath.exists():
			raise CatalogUnavailableError(f"Movie data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action

		try:
			with open(filepath, 'r', encoding='utf-8-sig', newline='') as f:
				reader = csv.DictReader(f)
				for line_num, row in enumerate(reader, 2):  # header is line 1
					movie = self._parse_movie_row(row)
					if not movie.title:
						logger.warning(f"[DataLoader] Skipping row without a title at line {line_num}")
						continue
					movies.append(movie)
		except (OSError, UnicodeDecodeError, csv.Error) as e:
			raise CatalogUnavailableError(f"Could not read movie data from {filepath}: {e}") from e

		if not movies:
			raise CatalogUnavailableError(f"No movies found in {filepath}")

		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def _parse_movie_row(self, row: Dict) -> MovieRecord:
		"""
		Convert a raw CSV row into a MovieRecord.
		Missing columns and empty cells both become empty strings.
		"""
		values = {
			field: self._clean(row.get(column))
			for column, field in self.COLUMN_MAP.items()
		}
		return MovieRecord(**values)

	def _clean(self, value) -> str:
		# None (short row) or empty -> ''
		if not value:
			return ''
		return str(value).strip()


def build_catalog(filepath: str) -> CatalogIndex:
	"""Load the CSV and wrap it in a ready-to-query CatalogIndex."""
	movies = DataLoader().load_movies_from_csv(filepath)
	return CatalogIndex(movies)
