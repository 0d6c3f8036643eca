"""Tests for vanity and persona name lookups (fetch is always stubbed)."""

import json

import pytest

from conftest import CUSTOM_ID, CUSTOM_URL, ID_64, PROFILES_URL, StubFetch
from steam_client import (
    get_persona_name,
    get_persona_name_api,
    resolve_vanity_url,
    resolve_vanity_url_api,
    resolve_vanity_url_auto,
)
from steam_errors import ResolutionError, TransportError
from steamid import parse


def _api_body(**response):
    return json.dumps({"response": response})


class TestResolveVanityUrl:
    """Profile XML scrape, no key."""

    def test_found(self, profile_fetch):
        assert resolve_vanity_url(CUSTOM_ID, fetch=profile_fetch) == ID_64
        assert profile_fetch.calls == [(CUSTOM_URL, {"xml": "true"})]

    def test_not_found(self, not_found_fetch):
        assert resolve_vanity_url("no-such-profile", fetch=not_found_fetch) is None

    def test_slug_is_quoted(self, not_found_fetch):
        resolve_vanity_url("a b/c", fetch=not_found_fetch)
        assert not_found_fetch.calls[0][0] == "https://steamcommunity.com/id/a%20b%2Fc"

    def test_transport_error_propagates(self):
        fetch = StubFetch(exc=TransportError(CUSTOM_URL, "503 Server Error"))
        with pytest.raises(TransportError):
            resolve_vanity_url(CUSTOM_ID, fetch=fetch)

    @pytest.mark.parametrize("slug", ["", "  ", None])
    def test_empty_slug(self, slug):
        with pytest.raises(ValueError):
            resolve_vanity_url(slug, fetch=StubFetch())


class TestResolveVanityUrlApi:
    """ISteamUser/ResolveVanityURL."""

    def test_success(self):
        fetch = StubFetch(_api_body(success=1, steamid=ID_64))
        assert resolve_vanity_url_api("KEY", CUSTOM_ID, fetch=fetch) == ID_64
        url, params = fetch.calls[0]
        assert url == (
            "http://api.steampowered.com/ISteamUser/ResolveVanityURL/v0001/"
            f"?format=json&key=KEY&vanityurl={CUSTOM_ID}"
        )
        assert params is None

    def test_no_match_raises_with_message(self):
        fetch = StubFetch(_api_body(success=42, message="No match"))
        with pytest.raises(ResolutionError) as exc_info:
            resolve_vanity_url_api("KEY", "nobody", fetch=fetch)
        assert exc_info.value.message == "No match"
        assert exc_info.value.slug == "nobody"

    @pytest.mark.parametrize("body", ["<html>", "{}", '{"response": []}', '{"response": {"steamid": "1"}}'])
    def test_malformed_body(self, body):
        with pytest.raises(ResolutionError):
            resolve_vanity_url_api("KEY", CUSTOM_ID, fetch=StubFetch(body))

    def test_requires_key(self):
        with pytest.raises(ValueError):
            resolve_vanity_url_api("", CUSTOM_ID, fetch=StubFetch())

    def test_transport_error_propagates(self):
        fetch = StubFetch(exc=TransportError("http://api.steampowered.com/", "timed out"))
        with pytest.raises(TransportError):
            resolve_vanity_url_api("KEY", CUSTOM_ID, fetch=fetch)


class TestResolveVanityUrlAuto:

    def test_without_key_scrapes(self, profile_fetch, monkeypatch):
        monkeypatch.setattr("steam_client.STEAM_WEB_API_KEY", "")
        assert resolve_vanity_url_auto(CUSTOM_ID, fetch=profile_fetch) == ID_64
        assert profile_fetch.calls[0][0] == CUSTOM_URL

    def test_configured_key_uses_api(self, monkeypatch):
        monkeypatch.setattr("steam_client.STEAM_WEB_API_KEY", "CONFIGURED")
        fetch = StubFetch(_api_body(success=1, steamid=ID_64))
        assert resolve_vanity_url_auto(CUSTOM_ID, fetch=fetch) == ID_64
        assert "key=CONFIGURED" in fetch.calls[0][0]

    def test_explicit_empty_key_scrapes(self, profile_fetch, monkeypatch):
        monkeypatch.setattr("steam_client.STEAM_WEB_API_KEY", "CONFIGURED")
        assert resolve_vanity_url_auto(CUSTOM_ID, api_key="", fetch=profile_fetch) == ID_64
        assert profile_fetch.calls[0][0] == CUSTOM_URL

    def test_api_no_match_is_none(self):
        fetch = StubFetch(_api_body(success=42, message="No match"))
        assert resolve_vanity_url_auto("nobody", api_key="KEY", fetch=fetch) is None

    def test_api_other_failure_raises(self):
        fetch = StubFetch(_api_body(success=2, message="Invalid request"))
        with pytest.raises(ResolutionError):
            resolve_vanity_url_auto("nobody", api_key="KEY", fetch=fetch)

    def test_parse_through_api(self):
        fetch = StubFetch(_api_body(success=1, steamid=ID_64))
        sid = parse(CUSTOM_URL + "/", resolve=lambda slug: resolve_vanity_url_auto(slug, api_key="KEY", fetch=fetch))
        assert sid == parse(ID_64)


class TestPersonaName:

    def test_from_profile_xml(self, profile_fetch):
        assert get_persona_name(parse(ID_64), fetch=profile_fetch) == "Rabscuttle"
        assert profile_fetch.calls == [(PROFILES_URL, {"xml": "true"})]

    def test_accepts_steamid64_string(self, profile_fetch):
        assert get_persona_name(ID_64, fetch=profile_fetch) == "Rabscuttle"

    def test_missing_profile(self, not_found_fetch):
        assert get_persona_name(ID_64, fetch=not_found_fetch) is None

    def test_none_steamid(self, profile_fetch):
        with pytest.raises(ValueError):
            get_persona_name(None, fetch=profile_fetch)

    def test_transport_error_propagates(self):
        with pytest.raises(TransportError):
            get_persona_name(ID_64, fetch=StubFetch(exc=TransportError(PROFILES_URL)))

    def test_from_api(self):
        fetch = StubFetch(json.dumps({"response": {"players": [{"steamid": ID_64, "personaname": "Rabscuttle"}]}}))
        assert get_persona_name_api("KEY", parse(ID_64), fetch=fetch) == "Rabscuttle"
        assert fetch.calls[0][0].endswith(f"GetPlayerSummaries/v0002/?format=json&key=KEY&steamids={ID_64}")

    def test_api_no_players(self):
        fetch = StubFetch(json.dumps({"response": {"players": []}}))
        assert get_persona_name_api("KEY", ID_64, fetch=fetch) is None

    def test_api_malformed_body(self):
        assert get_persona_name_api("KEY", ID_64, fetch=StubFetch("not json")) is None
