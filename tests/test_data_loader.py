"""
Tests for catalog loading: CSV parsing, empty-field defaults, and fatal startup errors.
"""

import pytest

from moviebot.data_loader import DataLoader, build_catalog
from moviebot.exceptions import CatalogUnavailableError

HEADER = ("Title,Average Rating,Director,Writer,Metascore,Cast,Release Date,"
		  "Country of Origin,Languages,Budget,Worldwide Gross,Runtime\n")


def write_csv(tmp_path, body, header=HEADER):
	path = tmp_path / "movies.csv"
	path.write_text(header + body, encoding="utf-8")
	return path


def test_data_loading(tmp_path):
	path = write_csv(tmp_path, (
		'The Godfather,9.2,Francis Ford Coppola,"Mario Puzo, Francis Ford Coppola",100,'
		'"Marlon Brando, Al Pacino",1972-03-24,United States,"English, Italian",$6000000,$250341816,2h 55m\n'
		'Inception,8.8,Christopher Nolan,Christopher Nolan,,Leonardo DiCaprio,2010-07-16,,,,,2h 28m\n'
	))

	movies = DataLoader().load_movies_from_csv(str(path))

	assert [m.title for m in movies] == ["The Godfather", "Inception"]
	godfather = movies[0]
	assert godfather.director == "Francis Ford Coppola"
	assert godfather.cast == "Marlon Brando, Al Pacino"
	assert godfather.release_date == "1972-03-24"
	assert godfather.gross == "$250341816"
	# Empty cells become empty strings, never None
	assert movies[1].metascore == ""
	assert movies[1].country == ""


def test_searchable_text_is_lowercase_concatenation(tmp_path):
	path = write_csv(tmp_path, 'Parasite,8.5,Bong Joon Ho,Han Jin-won,96,Song Kang-ho,,South Korea,Korean,,,\n')

	movie = DataLoader().load_movies_from_csv(str(path))[0]

	assert movie.searchable_text == "parasite bong joon ho han jin-won song kang-ho south korea korean"


def test_missing_columns_default_to_empty(tmp_path):
	path = write_csv(tmp_path, "Heat,8.3\n", header="Title,Average Rating\n")

	movie = DataLoader().load_movies_from_csv(str(path))[0]

	assert movie.title == "Heat"
	assert movie.rating == "8.3"
	assert movie.director == ""
	assert movie.runtime == ""


def test_rows_without_title_are_skipped(tmp_path):
	path = write_csv(tmp_path, ",7.0,Nobody,,,,,,,,,\nAlien,8.5,Ridley Scott,,,,,,,,,\n")

	movies = DataLoader().load_movies_from_csv(str(path))

	assert [m.title for m in movies] == ["Alien"]


def test_missing_file_is_fatal(tmp_path):
	with pytest.raises(CatalogUnavailableError):
		DataLoader().load_movies_from_csv(str(tmp_path / "nope.csv"))


def test_empty_catalog_is_fatal(tmp_path):
	path = write_csv(tmp_path, "")

	with pytest.raises(CatalogUnavailableError):
		build_catalog(str(path))


def test_build_catalog_returns_index(tmp_path):
	path = write_csv(tmp_path, "Alien,8.5,Ridley Scott,,,,,,,,,\nAliens,8.4,James Cameron,,,,,,,,,\n")

	catalog = build_catalog(str(path))

	assert len(catalog) == 2
	assert catalog.exact_matches("ALIENS")[0].record.director == "James Cameron"
