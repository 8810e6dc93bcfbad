"""
Catalog Service

Loads the list of valid airport codes. The catalog is read once at startup
and shared, unchanged, by the puzzle selector and the guess evaluator.
"""

import re
from pathlib import Path
from typing import Dict, List

import requests

from ..utils.game_logger import game_logger

CODE_PATTERN = re.compile(r"^[A-Z]{3}$")
LINE_SPLIT = re.compile(r"\r?\n")


class CatalogError(Exception):
    """Base class for catalog problems."""


class CatalogLoadError(CatalogError):
    """The catalog resource could not be read."""


class EmptyCatalogError(CatalogError):
    """The catalog holds no valid code; the game cannot run."""


def parse_catalog(text: str) -> List[str]:
    """
    Turn newline-delimited text into an ordered list of airport codes.

    Each line is trimmed and upper-cased; lines that are not exactly three
    letters afterwards are dropped. Duplicates are kept because the daily
    solution is indexed by position.

    Args:
        text: Raw catalog content

    Returns:
        List[str]: Codes in file order
    """
    codes = []
    for line in LINE_SPLIT.split(text or ""):
        code = line.strip().upper()
        if CODE_PATTERN.match(code):
            codes.append(code)
    return codes


def _read_source(source: str, timeout: int) -> str:
    if source.startswith(("http://", "https://")):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise CatalogLoadError(f"Failed to fetch catalog from {source}: {e}") from e
        return response.text

    try:
        return Path(source).read_text(encoding='utf-8')
    except OSError as e:
        raise CatalogLoadError(f"Catalog file not readable: {source}: {e}") from e


def load_catalog(source: str, timeout: int = 30) -> List[str]:
    """
    Load the catalog once from a local path or an http(s) URL.

    There is no retry: a failed load is a startup error.

    Raises:
        CatalogLoadError: If the resource cannot be read
        EmptyCatalogError: If no line holds a valid code
    """
    catalog = parse_catalog(_read_source(source, timeout))
    duplicates = validate_catalog_integrity(catalog)

    if duplicates:
        game_logger.logger.warning(
            f"Catalog {source} contains {len(duplicates)} duplicated codes: {duplicates[:10]}"
        )
    game_logger.logger.info(f"Loaded {len(catalog)} airport codes from {source}")
    return catalog


def validate_catalog_integrity(catalog: List[str]) -> List[str]:
    """
    Validates the catalog and reports duplicated codes.

    Duplicates are legal (they only make a code come up more often), so they
    are returned rather than raised.

    Returns:
        List[str]: Codes that appear more than once, in first-seen order

    Raises:
        EmptyCatalogError: If the catalog is empty
    """
    if not catalog:
        raise EmptyCatalogError("Airport code catalog is empty; cannot select a daily solution")

    seen = set()
    duplicates = []
    for code in catalog:
        if code in seen and code not in duplicates:
            duplicates.append(code)
        seen.add(code)
    return duplicates


def get_catalog_statistics(catalog: List[str]) -> dict:
    """
    Summarises the catalog for the health endpoint.

    Returns:
        dict: total_codes, unique_codes, duplicate_codes, letter_frequency
            and the five most common letters
    """
    if not catalog:
        return {"error": "Catalog is empty"}

    letter_frequency: Dict[str, int] = {}
    for code in catalog:
        for char in code:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    unique = set(catalog)
    return {
        "total_codes": len(catalog),
        "unique_codes": len(unique),
        "duplicate_codes": len(catalog) - len(unique),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
