"""Records returned by the TVDB API and their JSON mapping."""
import dataclasses
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Union, get_args, get_origin, get_type_hints

from tvdbclient.errors import DecodeError

# Timestamps are sent as "2023-05-15 14:30:00"
API_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
API_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def wire(key: str, **kwargs) -> Any:
    """Declare a field whose JSON key is not the camelCase of its name."""
    return field(metadata={"json": key}, **kwargs)


@dataclass
class Alias:
    language: str = ""
    name: str = ""


@dataclass
class Status:
    """Status of a series or movie."""
    id: int = 0
    name: str = ""


@dataclass
class Series:
    """A TV series."""
    id: int = 0
    name: str = ""
    slug: str = ""
    image: str = ""
    first_aired: str = ""
    last_aired: str = ""
    next_aired: str = ""
    status: Status = field(default_factory=Status)
    overview: str = ""
    network: str = ""
    runtime: int = 0
    language: str = ""
    genre: List[str] = field(default_factory=list)
    last_updated: Optional[datetime] = None
    average_rating: float = 0.0
    original_country: str = ""
    original_language: str = ""
    content_rating: str = ""
    imdb_id: str = ""
    zap2it_id: str = ""
    aliases: List[Alias] = field(default_factory=list)
    name_translations: List[str] = field(default_factory=list)
    overview_translations: List[str] = field(default_factory=list)


@dataclass
class Season:
    id: int = 0
    series_id: int = 0
    number: int = 0
    name: str = ""
    episode_count: int = 0
    overview: str = ""
    image: str = ""
    network_id: int = 0
    last_updated: Optional[datetime] = None
    name_translations: List[str] = field(default_factory=list)
    overview_translations: List[str] = field(default_factory=list)


@dataclass
class Episode:
    """A single TV episode."""
    id: int = 0
    series_id: int = 0
    name: str = ""
    aired_season: int = 0
    aired_episode_number: int = 0
    aired_date: Optional[datetime] = None
    runtime: int = 0
    overview: str = ""
    image: str = ""
    imdb_id: str = ""
    last_updated: Optional[datetime] = None
    name_translations: List[str] = field(default_factory=list)
    overview_translations: List[str] = field(default_factory=list)


@dataclass
class Movie:
    id: int = 0
    name: str = ""
    slug: str = ""
    image: str = ""
    release_date: Optional[datetime] = None
    status: Status = field(default_factory=Status)
    overview: str = ""
    runtime: int = 0
    language: str = ""
    genre: List[str] = field(default_factory=list)
    last_updated: Optional[datetime] = None
    average_rating: float = 0.0
    original_country: str = ""
    original_language: str = ""
    content_rating: str = ""
    imdb_id: str = ""
    aliases: List[Alias] = field(default_factory=list)
    name_translations: List[str] = field(default_factory=list)
    overview_translations: List[str] = field(default_factory=list)


@dataclass
class Person:
    """An actor, director or other person credited on a series or movie."""
    id: int = 0
    name: str = ""
    image: str = ""
    birth_date: Optional[datetime] = None
    death_date: Optional[datetime] = None
    gender: int = 0
    last_updated: Optional[datetime] = None


@dataclass
class SearchResult:
    object_id: str = wire("objectID", default="")
    type: str = ""
    name: str = ""
    image: str = wire("image_url", default="")
    overview: str = ""
    aliases: List[str] = field(default_factory=list)
    year: str = ""


@dataclass
class Links:
    """Pagination block of list endpoints."""
    prev: Optional[str] = None
    self_link: Optional[str] = wire("self", default=None)
    next: Optional[str] = None
    total_items: int = wire("total_items", default=0)
    page_size: int = wire("page_size", default=0)


@dataclass
class SeriesEpisodes:
    series: Series = field(default_factory=Series)
    episodes: List[Episode] = field(default_factory=list)


@dataclass
class SeriesEpisodesResponse:
    """Full body of the series episodes endpoint, envelope included."""
    status: str = ""
    data: SeriesEpisodes = field(default_factory=SeriesEpisodes)
    links: Links = field(default_factory=Links)


@dataclass
class EpisodePage:
    episodes: List[Episode]
    total_items: int
    page_size: int


def _camel(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(part.capitalize() for part in rest)


def wire_name(f: dataclasses.Field) -> str:
    """Return the JSON key of a record field."""
    return f.metadata.get("json") or _camel(f.name)


def parse_api_date(value: str) -> datetime:
    """Parse a timestamp in the API's "YYYY-MM-DD HH:MM:SS" format.

    Raises:
        DecodeError: if the string does not match the format exactly
    """
    if not API_DATE_PATTERN.fullmatch(value):
        raise DecodeError(f"invalid date {value!r}: expected YYYY-MM-DD HH:MM:SS")
    try:
        return datetime.strptime(value, API_DATE_FORMAT)
    except ValueError as e:
        raise DecodeError(f"invalid date {value!r}: {e}") from e


def decode(shape: Any, value: Any, where: str = "$") -> Any:
    """Build ``shape`` from decoded JSON.

    ``shape`` may be a record class, ``List[...]``, ``Optional[...]``,
    ``dict``, ``Any`` or a JSON scalar type. Keys the record does not know
    are ignored and missing or null keys keep the field default; any other
    mismatch raises ``DecodeError`` naming the offending location.
    """
    if shape is Any:
        return value

    origin = get_origin(shape)
    if origin is Union:
        if value is None:
            return None
        inner = [arg for arg in get_args(shape) if arg is not type(None)]
        return decode(inner[0], value, where)

    if origin is list or shape is list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected array, got {type(value).__name__}")
        args = get_args(shape)
        item = args[0] if args else Any
        return [decode(item, v, f"{where}[{i}]") for i, v in enumerate(value)]

    if origin is dict or shape is dict:
        if not isinstance(value, dict):
            raise DecodeError(f"{where}: expected object, got {type(value).__name__}")
        args = get_args(shape)
        item = args[1] if args else Any
        return {k: decode(item, v, f"{where}.{k}") for k, v in value.items()}

    if dataclasses.is_dataclass(shape):
        if not isinstance(value, dict):
            raise DecodeError(f"{where}: expected object, got {type(value).__name__}")
        hints = get_type_hints(shape)
        kwargs = {}
        for f in dataclasses.fields(shape):
            key = wire_name(f)
            if value.get(key) is None:
                continue
            kwargs[f.name] = decode(hints[f.name], value[key], f"{where}.{key}")
        try:
            return shape(**kwargs)
        except TypeError as e:
            raise DecodeError(f"{where}: {e}") from e

    if shape is datetime:
        if not isinstance(value, str):
            raise DecodeError(f"{where}: expected date string, got {type(value).__name__}")
        try:
            return parse_api_date(value)
        except DecodeError as e:
            raise DecodeError(f"{where}: {e}") from e.__cause__

    if shape is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodeError(f"{where}: expected number, got {type(value).__name__}")
        return float(value)

    if shape is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"{where}: expected integer, got {type(value).__name__}")
        return value

    if shape in (str, bool):
        if not isinstance(value, shape):
            raise DecodeError(f"{where}: expected {shape.__name__}, got {type(value).__name__}")
        return value

    raise DecodeError(f"{where}: unsupported shape {shape!r}")


def encode(value: Any) -> Any:
    """Convert records to JSON-ready values using their wire keys."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {wire_name(f): encode(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, datetime):
        return value.strftime(API_DATE_FORMAT)
    if isinstance(value, (list, tuple)):
        return [encode(v) for v in value]
    if isinstance(value, dict):
        return {k: encode(v) for k, v in value.items()}
    return value
