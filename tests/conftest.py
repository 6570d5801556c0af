"""Pytest configuration and fixtures."""

import json
from typing import Any, Dict, List, Union

import httpx
import pytest

from pytoa.api.client import Client

TEST_API_KEY = "0123456789abcdef0123456789abcdef"
BASE_URL = "https://theorangealliance.org/api"

Route = Union[Any, httpx.Response]


class FakeAPI:
    """In-memory stand-in for the TOA API, served through httpx.MockTransport."""

    def __init__(self, routes: Dict[str, Route]):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode()
        assert path.startswith("/api"), path
        route = self.routes.get(path[len("/api"):])
        if route is None:
            return httpx.Response(404, json={"_code": 404, "_message": "Not found"})
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, content=json.dumps(route).encode())

    def client(self) -> Client:
        return Client(
            TEST_API_KEY,
            application_name="pytoa-tests",
            base_url=BASE_URL,
            transport=httpx.MockTransport(self.handler),
        )

    def paths(self) -> List[str]:
        return [r.url.raw_path.decode()[len("/api"):] for r in self.requests]


@pytest.fixture
def make_api():
    """Build a FakeAPI from a mapping of request path to JSON body."""

    def _make(routes: Dict[str, Route]) -> FakeAPI:
        return FakeAPI(routes)

    return _make


@pytest.fixture
def team_detail() -> List[Dict[str, Any]]:
    return [
        {
            "team_key": "16405",
            "region_key": "USTX",
            "league_key": None,
            "team_number": 16405,
            "team_name_short": "Foo Bots",
            "team_name_long": "Foo Robotics Club",
            "robot_name": None,
            "last_active": "1920",
            "city": "Houston",
            "state_prov": "TX",
            "zip_code": 77002,
            "country": "USA",
            "rookie_year": 2019,
            "website": "https://foo.example",
            "is_active": True,
        }
    ]


@pytest.fixture
def rankings() -> List[Dict[str, Any]]:
    return [
        {"rank": 1, "wins": 5, "opr": 120.5, "team": {"team_number": 100}},
        {"rank": 2, "wins": 4, "opr": 98.25, "team": {"team_number": 200}},
        {"rank": 3, "wins": 3, "opr": 80.0, "team": {"team_number": 300}},
    ]
