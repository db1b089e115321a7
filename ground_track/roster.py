"""
Roster Client

Retrieves orbital element sets from the CelesTrak supplemental GP service,
validates the OMM JSON records and narrows them to one constellation.

The roster is fetched once at startup; any failure here is fatal to the run
and surfaces as RosterError.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests
from pydantic import ValidationError

import config
from ground_track.models import ElementSet

logger = logging.getLogger(__name__)


class RosterError(RuntimeError):
    """Roster retrieval or parsing failed."""


def fetch_records(
    name: str,
    url: str = config.CELESTRAK_SUPPLEMENTAL_URL,
    timeout: float = config.REQUEST_TIMEOUT_SECONDS,
) -> List[Dict[str, Any]]:
    """
    Fetch OMM JSON records whose name matches a CelesTrak NAME query.

    Args:
        name: Value of the NAME query parameter (e.g. "KUIPER")
        url: Supplemental GP endpoint
        timeout: Request timeout in seconds

    Returns:
        Decoded JSON records

    Raises:
        RosterError: On network or HTTP errors, or a body that is not a JSON list
    """
    logger.info(f"Fetching element sets for {name!r} from {url}")
    try:
        response = requests.get(url, params={"NAME": name, "FORMAT": "json"}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RosterError(f"Roster retrieval failed: {e}") from e

    try:
        records = response.json()
    except ValueError as e:
        # CelesTrak answers a query with no match in plain text
        raise RosterError(f"Roster response is not JSON: {response.text[:80]!r}") from e

    if not isinstance(records, list):
        raise RosterError(f"Roster response is not a list of records: {type(records).__name__}")

    logger.info(f"Received {len(records)} element sets")
    return records


def parse_element_sets(records: Iterable[Dict[str, Any]]) -> List[ElementSet]:
    """
    Validate OMM records into element sets.

    Raises:
        RosterError: If any record is missing fields or has invalid values
    """
    element_sets = []
    for index, record in enumerate(records):
        try:
            element_sets.append(ElementSet.model_validate(record))
        except ValidationError as e:
            raise RosterError(f"Invalid element set record #{index}: {e}") from e
    return element_sets


def filter_by_prefix(roster: Iterable[ElementSet], prefix: str) -> List[ElementSet]:
    """Element sets whose name starts with prefix, in their original order."""
    return [element_set for element_set in roster
            if element_set.name is not None and element_set.name.startswith(prefix)]


def load_roster(name: str, prefix: Optional[str] = None, **fetch_kwargs) -> List[ElementSet]:
    """
    Fetch, validate and filter the roster for a constellation.

    Args:
        name: CelesTrak NAME query
        prefix: Name prefix to keep (defaults to name)
        **fetch_kwargs: Passed to fetch_records

    Returns:
        Matching element sets
    """
    prefix = name if prefix is None else prefix
    roster = filter_by_prefix(parse_element_sets(fetch_records(name, **fetch_kwargs)), prefix)
    logger.info(f"Tracking {len(roster)} satellites with prefix {prefix!r}")
    return roster


def display_label(name: Optional[str], prefix: str) -> str:
    """Satellite label without the constellation prefix ("KUIPER-00008" -> "00008")."""
    if not name:
        return "?"
    if prefix and name.startswith(prefix):
        label = name[len(prefix):].lstrip("- ")
        return label or name
    return name
