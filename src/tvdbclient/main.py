"""Interactive command shell for the TVDB API."""
import argparse
import logging
import os
import sys
from typing import Iterator, Optional

from dotenv import load_dotenv

from tvdbclient.config import DEFAULT_CONFIG_DIR, Config
from tvdbclient.endpoints import SEASON_TYPES
from tvdbclient.errors import TVDBError
from tvdbclient.tvdb import TVDB

logger = logging.getLogger(__name__)

COMMANDS = ("search", "series", "episodes", "episode", "seasons", "movie", "quit")


class TVDBShell:
    """Reads commands line by line and prints the results."""

    def __init__(self, tvdb: TVDB, lines: Iterator[str]):
        self.tvdb = tvdb
        self.lines = lines
        self.handlers = {
            "search": self.handle_search,
            "series": self.handle_series,
            "episodes": self.handle_episodes,
            "episode": self.handle_episode,
            "seasons": self.handle_seasons,
            "movie": self.handle_movie,
        }

    def run(self):
        print("TVDB CLI")
        print(f"Available commands: {', '.join(COMMANDS)}")
        while True:
            command = self._prompt("Enter command: ")
            if command is None or command.lower() == "quit":
                return
            handler = self.handlers.get(command.lower())
            if handler is None:
                print("Unknown command")
                continue
            try:
                handler()
            except TVDBError as e:
                print(f"Error: {e}")

    def _prompt(self, text: str) -> Optional[str]:
        print(text, end="", flush=True)
        line = next(self.lines, None)
        if line is None:
            return None
        return line.strip()

    def _prompt_int(self, text: str) -> Optional[int]:
        value = self._prompt(text)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            print("Invalid number. Please enter a numeric value.")
            return None

    def handle_search(self):
        query = self._prompt("Enter search query: ")
        if not query:
            return
        results = self.tvdb.search(query)
        print(f"Found {len(results)} results:")
        for result in results:
            print(f"- {result.name} ({result.type}): {result.overview}")

    def handle_series(self):
        series_id = self._prompt_int("Enter series ID: ")
        if series_id is None:
            return
        series = self.tvdb.get_series_by_id(series_id)
        print(f"Series: {series.name}")
        print(f"First Aired: {series.first_aired}")
        if series.last_updated:
            print(f"Last Updated: {series.last_updated:%Y-%m-%d %H:%M:%S}")
        print(f"Overview: {series.overview}")
        if series.aliases:
            print("Aliases:")
            for alias in series.aliases:
                print(f"  - {alias.name} ({alias.language})")

    def handle_episodes(self):
        series_id = self._prompt_int("Enter series ID: ")
        if series_id is None:
            return
        page = self._prompt_int("Enter page number: ")
        if page is None:
            return
        season_type = self._prompt(f"Enter season type ({', '.join(SEASON_TYPES)}): ") or "default"
        if season_type not in SEASON_TYPES:
            print(f"Unknown season type: {season_type}")
            return

        result = self.tvdb.get_series_episodes(series_id, season_type, page)
        if not result.episodes:
            print("No episodes found for this criteria.")
            return

        print(f"Retrieved {len(result.episodes)} of {result.total_items} episodes "
              f"(page size {result.page_size}):")
        for episode in result.episodes:
            print(f"S{episode.aired_season:02d}E{episode.aired_episode_number:02d}: "
                  f"{episode.name} (ID: {episode.id})")

    def handle_episode(self):
        episode_id = self._prompt_int("Enter episode ID: ")
        if episode_id is None:
            return
        episode = self.tvdb.get_episode_by_id(episode_id)
        print(f"Episode: {episode.name}")
        if episode.aired_date:
            print(f"Aired Date: {episode.aired_date:%Y-%m-%d}")
        if episode.last_updated:
            print(f"Last Updated: {episode.last_updated:%Y-%m-%d %H:%M:%S}")
        print(f"Overview: {episode.overview}")

    def handle_seasons(self):
        series_id = self._prompt_int("Enter series ID: ")
        if series_id is None:
            return
        for season in self.tvdb.get_series_seasons(series_id):
            print(f"Season {season.number}: {season.name} (Episodes: {season.episode_count})")

    def handle_movie(self):
        movie_id = self._prompt_int("Enter movie ID: ")
        if movie_id is None:
            return
        movie = self.tvdb.get_movie_by_id(movie_id)
        released = f"{movie.release_date:%Y-%m-%d}" if movie.release_date else "unknown"
        print(f"Movie: {movie.name}")
        print(f"Released: {released}")
        print(f"Overview: {movie.overview}")


def main():
    parser = argparse.ArgumentParser(description="TVDB CLI - Query series, episodes and movies on TheTVDB")
    parser.add_argument("--api-key", help="TVDB API key (can also be set via TVDB_API_KEY env variable)")
    parser.add_argument("--config-dir", default=DEFAULT_CONFIG_DIR, help="Configuration directory")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Load environment variables from .env file in both current directory and config directory
    load_dotenv()
    config_env_path = os.path.join(os.path.expanduser(args.config_dir), '.env')
    if os.path.exists(config_env_path):
        load_dotenv(config_env_path)

    api_key = args.api_key or os.getenv('TVDB_API_KEY')
    if not api_key:
        parser.error("TVDB API key is required. Provide it via --api-key or set TVDB_API_KEY environment variable")

    config = Config(args.config_dir)
    try:
        tvdb = TVDB(api_key, config)
    except TVDBError as e:
        logger.error(f"Error creating client: {e}")
        sys.exit(1)

    with tvdb:
        try:
            TVDBShell(tvdb, iter(sys.stdin)).run()
        except KeyboardInterrupt:
            print()


if __name__ == "__main__":
    main()
