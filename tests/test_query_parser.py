"""
Unit tests for QueryParser: title extraction order and category priority.
"""

import pytest

from moviebot.models import QueryCategory
from moviebot.query_parser import QueryParser


@pytest.fixture
def parser():
	return QueryParser()


def test_quoted_title_wins_over_patterns(parser):
	assert parser.extract_title('who is the director of "Inception" anyway?') == "Inception"
	assert parser.extract_title("tell me about 'The Matrix'") == "The Matrix"
	assert parser.extract_title('rating of "  Heat  "') == "Heat"


def test_apostrophe_is_not_a_quote(parser):
	assert parser.extract_title("what is the rating of Schindler's List?") == "Schindler's List"


@pytest.mark.parametrize("query, expected", [
	("director of The Godfather?", "The Godfather"),
	("Who is the director of Pulp Fiction?", "Pulp Fiction"),
	("who were the stars in Titanic", "Titanic"),
	("What was the budget for Avatar?", "Avatar"),
	("When was Inception released?", "Inception"),
	("when did Jaws come out", "Jaws"),
	("How long is The Irishman?", "The Irishman"),
	("Tell me about Parasite", "Parasite"),
	("cast of Heat", "Heat"),
	("what is the gross of Titanic", "Titanic"),
])
def test_question_patterns(parser, query, expected):
	assert parser.extract_title(query) == expected


def test_trailing_movie_noun_is_stripped(parser):
	assert parser.extract_title("tell me about Alien the movie") == "Alien"
	assert parser.extract_title("how long is the Dune film?") == "the Dune"
	assert parser.extract_title("runtime of Heat movie") == "Heat"


def test_stop_word_fallback(parser):
	assert parser.extract_title("Who directed Inception?") == "Inception"
	assert parser.extract_title("Interstellar release date") == "Interstellar"


def test_fallback_returns_original_query_when_nothing_left(parser):
	assert parser.extract_title("who is the director?") == "who is the director?"
	assert parser.extract_title("a ?") == "a ?"


@pytest.mark.parametrize("query, expected", [
	("Who is the director of Heat?", QueryCategory.DIRECTOR),
	("who wrote the screenplay for Fargo", QueryCategory.WRITER),
	("which actress was in Titanic", QueryCategory.CAST),
	("what's the score for Up", QueryCategory.RATING),
	("what year did Alien come out", QueryCategory.RELEASE_DATE),
	("country of origin of Amelie", QueryCategory.COUNTRY),
	("what language is Roma in", QueryCategory.LANGUAGES),
	("how much did Avatar cost", QueryCategory.BUDGET),
	("box office revenue of Titanic", QueryCategory.GROSS),
	("what is the duration of Heat", QueryCategory.RUNTIME),
	("tell me about Heat", QueryCategory.GENERAL),
])
def test_query_types(parser, query, expected):
	assert parser.determine_query_type(query) == expected


def test_earliest_rule_wins(parser):
	assert parser.determine_query_type("Who directed and starred in it") == QueryCategory.DIRECTOR
	# 'cast' outranks 'rating'
	assert parser.determine_query_type("cast and rating of Heat") == QueryCategory.CAST


def test_category_values_are_wire_tags():
	assert QueryCategory.RELEASE_DATE.value == "releaseDate"
	assert QueryCategory("general") is QueryCategory.GENERAL


def test_question_mark_runs_are_dropped(parser):
	assert parser.extract_title("Interstellar ???") == "Interstellar"
