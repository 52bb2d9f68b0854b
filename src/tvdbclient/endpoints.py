"""Endpoint functions for series, episodes, seasons, movies and search."""
import logging
from typing import List, Optional
from urllib.parse import quote_plus

from fuzzywuzzy import fuzz

from tvdbclient.client import Client
from tvdbclient.models import (
    Episode,
    EpisodePage,
    Movie,
    SearchResult,
    Season,
    Series,
    SeriesEpisodesResponse,
)

logger = logging.getLogger(__name__)

SEASON_TYPES = ("default", "official", "dvd", "absolute", "alternate", "regional")


def get_series_by_id(client: Client, series_id: int) -> Series:
    return client.get_json(f"/series/{series_id}", Series)


def get_series_episodes(client: Client, series_id: int, season_type: str = "default", page: int = 0) -> EpisodePage:
    """Fetch one page of episodes of a series.

    Args:
        client: Authenticated client
        series_id: TVDB series ID
        season_type: Episode ordering, one of SEASON_TYPES
        page: Zero based page number

    Returns:
        The episodes together with the total item count and page size
        reported by the server
    """
    if season_type not in SEASON_TYPES:
        raise ValueError(f"Unknown season type: {season_type!r}")
    path = f"/series/{series_id}/episodes/{season_type}?page={page}"
    response = client.get_json(path, SeriesEpisodesResponse, envelope=False)
    return EpisodePage(
        episodes=response.data.episodes,
        total_items=response.links.total_items,
        page_size=response.links.page_size
    )


def get_episode_by_id(client: Client, episode_id: int) -> Episode:
    return client.get_json(f"/episodes/{episode_id}", Episode)


def get_series_seasons(client: Client, series_id: int) -> List[Season]:
    return client.get_json(f"/series/{series_id}/seasons", List[Season])


def get_movie_by_id(client: Client, movie_id: int) -> Movie:
    return client.get_json(f"/movies/{movie_id}", Movie)


def search(client: Client, query: str) -> List[SearchResult]:
    """Search series, movies and people by name."""
    return client.get_json(f"/search?query={quote_plus(query)}", List[SearchResult])


def find_best_match(query: str, results: List[SearchResult], threshold: int = 50) -> Optional[SearchResult]:
    """Find the search result whose name or alias is closest to the query.

    Returns None when no result scores at least ``threshold``.
    """
    best_match = None
    highest_ratio = 0

    for result in results:
        names = [name for name in [result.name, *result.aliases] if name]
        if not names:
            continue
        current_ratio = max(fuzz.ratio(query.lower(), name.lower()) for name in names)
        if current_ratio > highest_ratio:
            highest_ratio = current_ratio
            best_match = result

    if highest_ratio < threshold:
        logger.debug(f"No search result for '{query}' scored above {threshold}")
        return None

    logger.debug(f"Best match for '{query}': {best_match.name} ({highest_ratio})")
    return best_match
