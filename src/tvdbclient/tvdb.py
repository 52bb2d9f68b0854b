"""High level TVDB API client."""
import logging
from typing import List, Optional

from tvdbclient import endpoints
from tvdbclient.auth import CredentialStore
from tvdbclient.client import Client
from tvdbclient.config import Config
from tvdbclient.models import Episode, EpisodePage, Movie, SearchResult, Season, Series
from tvdbclient.transport import Transport

logger = logging.getLogger(__name__)


class TVDB:
    """Logged-in client for the TVDB API.

    Logging in happens on construction, so a successfully built instance
    always holds a token.

    Raises:
        AuthError: if the initial login fails
    """

    def __init__(self, api_key: str, config: Optional[Config] = None, transport: Optional[Transport] = None):
        self.config = config or Config()
        self.transport = transport or self.config.create_transport()
        self.credentials = CredentialStore(api_key, self.transport, self.config.base_url)
        self.client = Client(self.credentials, self.transport)
        self.credentials.login()

    def search(self, query: str) -> List[SearchResult]:
        return endpoints.search(self.client, query)

    def find_series(self, query: str, threshold: int = 50) -> Optional[SearchResult]:
        """Search for a series and return the closest matching result."""
        results = [r for r in self.search(query) if r.type in ("series", "")]
        return endpoints.find_best_match(query, results, threshold)

    def get_series_by_id(self, series_id: int) -> Series:
        return endpoints.get_series_by_id(self.client, series_id)

    def get_series_episodes(self, series_id: int, season_type: str = "default", page: int = 0) -> EpisodePage:
        return endpoints.get_series_episodes(self.client, series_id, season_type, page)

    def get_episode_by_id(self, episode_id: int) -> Episode:
        return endpoints.get_episode_by_id(self.client, episode_id)

    def get_series_seasons(self, series_id: int) -> List[Season]:
        return endpoints.get_series_seasons(self.client, series_id)

    def get_movie_by_id(self, movie_id: int) -> Movie:
        return endpoints.get_movie_by_id(self.client, movie_id)

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
