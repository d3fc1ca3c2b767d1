"""
Answer one movie question from the command line.

This script:
1) Loads the catalog CSV named in settings (MOVIES_CSV_PATH)
2) Selects the configured generation provider (LLM_PROVIDER)
3) Prints the answer and how it was produced

Usage:
    python -m scripts.ask "Who is the director of The Godfather?"
    python -m scripts.ask --no-llm "how long is Inception"
"""

import argparse  # command-line arguments
import sys  # exit codes

from loguru import logger  # console logging

from moviebot.config import configure_logging, get_settings  # env-based settings
from moviebot.data_loader import build_catalog  # CSV -> CatalogIndex
from moviebot.exceptions import CatalogUnavailableError, EmptyQueryError
from moviebot.llm_providers import build_provider  # active provider
from moviebot.qa_engine import MovieQAEngine  # core pipeline


def main(argv=None) -> int:
	parser = argparse.ArgumentParser(description="Ask the movie bot a question.")
	parser.add_argument("question", nargs="+", help="natural-language question")
	parser.add_argument("--csv", help="catalog CSV path (overrides MOVIES_CSV_PATH)")
	parser.add_argument("--no-llm", action="store_true", help="answer with templates only")
	parser.add_argument("--log-level", default=None, help="loguru level, e.g. DEBUG")
	args = parser.parse_args(argv)

	settings = get_settings()
	configure_logging(args.log_level or settings.log_level)

	try:
		catalog = build_catalog(args.csv or settings.movies_csv_path)
	except CatalogUnavailableError as e:
		logger.error(f"[Ask] {e}")
		return 1

	provider = None if args.no_llm else build_provider(settings)
	engine = MovieQAEngine(catalog, provider)

	try:
		answer = engine.answer(" ".join(args.question))
	except EmptyQueryError:
		logger.error("[Ask] Please provide a question about movies.")
		return 2

	print(answer.response)
	print(f"\n[type={answer.query_type.value} matches={answer.matches} llm_used={answer.llm_used}]")
	return 0


if __name__ == '__main__':
	sys.exit(main())
