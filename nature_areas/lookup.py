"""
Lookup of Swedish administrative codes used as NVR search filters

Municipalities (kommuner) have 4-digit codes, e.g. Stockholm -> '0180'.
Counties (län) have letter codes, e.g. Skåne län -> 'M'.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Sequence, TypeVar

from .models import County, Municipality

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
MAX_MUNICIPALITY_RESULTS = 20

# å, ä, ö sort after z in Swedish
_SWEDISH_ORDER = str.maketrans({"å": "{", "ä": "|", "ö": "}", "æ": "|", "ø": "}"})

NamedT = TypeVar("NamedT", Municipality, County)


def swedish_sort_key(name: str) -> str:
    return name.casefold().translate(_SWEDISH_ORDER)


@lru_cache()
def load_municipalities() -> List[Municipality]:
    with open(DATA_DIR / "kommuner.json", "r", encoding="utf-8") as f:
        municipalities = [Municipality(**item) for item in json.load(f)]
    logger.debug(f"Loaded {len(municipalities)} municipalities")
    return municipalities


@lru_cache()
def load_counties() -> List[County]:
    with open(DATA_DIR / "lan.json", "r", encoding="utf-8") as f:
        counties = [County(**item) for item in json.load(f)]
    logger.debug(f"Loaded {len(counties)} counties")
    return counties


def search_and_sort(items: Sequence[NamedT], query: str) -> List[NamedT]:
    """Case-insensitive substring search; exact matches first, then Swedish alphabetical order"""
    needle = query.casefold()
    matches = [item for item in items if needle in item.name.casefold()]
    matches.sort(key=lambda item: (item.name.casefold() != needle, swedish_sort_key(item.name)))
    return matches


def lookup_municipalities(query: str) -> List[Municipality]:
    """All matching municipalities; callers cap the list at MAX_MUNICIPALITY_RESULTS"""
    return search_and_sort(load_municipalities(), query)


def lookup_counties(query: str) -> List[County]:
    return search_and_sort(load_counties(), query)
