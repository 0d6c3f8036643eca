"""Shared fixtures: canned Steam responses and a recording fetch stub."""

import pytest

ID_64 = "76561198091343023"
ID_64_OTHER = "76561198059316053"
ID_32 = "STEAM_0:1:65538647"
ID_3 = "[U:1:131077295]"
CUSTOM_ID = "dragonbanshee"
CUSTOM_URL = "https://steamcommunity.com/id/" + CUSTOM_ID
PROFILES_URL = "https://steamcommunity.com/profiles/" + ID_64

PROFILE_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    "<profile>"
    f"<steamID64>{ID_64}</steamID64>"
    "<steamID><![CDATA[Rabscuttle]]></steamID>"
    "<onlineState>offline</onlineState>"
    "</profile>"
)
NOT_FOUND_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    "<response><error><![CDATA[The specified profile could not be found.]]></error></response>"
)


class StubFetch:
    """Stands in for http_client.fetch: returns a canned body (or raises) and records every call."""

    def __init__(self, body: str = "", exc: Exception | None = None):
        self.body = body
        self.exc = exc
        self.calls = []

    def __call__(self, url, params=None):
        self.calls.append((url, params))
        if self.exc is not None:
            raise self.exc
        return self.body


@pytest.fixture
def profile_fetch():
    return StubFetch(PROFILE_XML)


@pytest.fixture
def not_found_fetch():
    return StubFetch(NOT_FOUND_XML)
