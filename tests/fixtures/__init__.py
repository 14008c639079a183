"""
Test fixtures package.

Provides recorded API payloads, a scripted transport and helper utilities.
"""

import json
from pathlib import Path
from typing import Any

from .transport import FakeHttpClient, HangingHttpClient, RecordingSleep, make_response


def load_fixture(fixture_name: str) -> Any:
    """
    Load fixture data from api_responses.json.

    Args:
        fixture_name: Name of the fixture to load

    Returns:
        Fixture data (dict, list, etc.)

    Example:
        >>> locations = load_fixture("list_locations")
    """
    fixtures_path = Path(__file__).parent / "api_responses.json"

    with open(fixtures_path) as f:
        all_fixtures = json.load(f)

    if fixture_name not in all_fixtures:
        raise KeyError(f"Fixture '{fixture_name}' not found")

    return all_fixtures[fixture_name]


def fixture_response(fixture_name: str, status_code: int = 200, **kwargs) -> Any:
    """HttpResponse whose body is the named fixture serialized as JSON."""
    return make_response(status_code, json.dumps(load_fixture(fixture_name)), **kwargs)


__all__ = [
    "FakeHttpClient",
    "HangingHttpClient",
    "RecordingSleep",
    "fixture_response",
    "load_fixture",
    "make_response",
]
