"""Resolve vanity profile names and persona names from steamcommunity.com or the Steam Web API."""

import json
import logging
import re
from urllib.parse import quote

from steamid_config import PROFILE_URL_TEMPLATE, STEAM_WEB_API_KEY, VANITY_URL_TEMPLATE
from http_client import fetch as http_fetch
from steam_api import INTERFACE_STEAM_USER, ApiCall
from steam_errors import ResolutionError

logger = logging.getLogger(__name__)

STEAMID_XML_PATTERN = re.compile(r"<steamID64>(\d+)</steamID64>", re.ASCII)
PERSONA_XML_PATTERN = re.compile(r"<steamID><!\[CDATA\[(.*?)\]\]></steamID>", re.DOTALL)

# ResolveVanityURL "success" values
_RESOLVE_SUCCESS = 1
_RESOLVE_NO_MATCH = 42

_XML_PARAMS = {"xml": "true"}


def resolve_vanity_url(slug: str, fetch=http_fetch) -> str | None:
    """
    Resolve a vanity name by scraping the profile XML page (no API key needed).
    Returns the SteamID64 as a string, or None if the page has no steamID64 (no such profile).
    TransportError from fetch propagates.
    """
    if not slug or not slug.strip():
        raise ValueError("vanity name must not be empty")
    url = VANITY_URL_TEMPLATE.format(slug=quote(slug.strip(), safe=""))
    page = fetch(url, _XML_PARAMS)
    m = STEAMID_XML_PATTERN.search(page)
    if not m:
        logger.debug("No steamID64 in profile page for %r", slug)
        return None
    return m.group(1)


def _vanity_api_response(api_key: str, slug: str, fetch) -> dict:
    call = (
        ApiCall()
        .with_interface(INTERFACE_STEAM_USER)
        .with_method("ResolveVanityURL")
        .with_version("v0001")
        .with_key(api_key)
        .with_param("vanityurl", slug)
    )
    body = call.call(fetch=fetch)
    try:
        response = json.loads(body)["response"]
        int(response["success"])
        return response
    except (ValueError, KeyError, TypeError) as e:
        raise ResolutionError(f"malformed ResolveVanityURL response ({e})", slug) from e


def resolve_vanity_url_api(api_key: str, slug: str, fetch=http_fetch) -> str:
    """
    Resolve a vanity name with ISteamUser/ResolveVanityURL.
    Returns the SteamID64 string when the API reports success; otherwise raises ResolutionError carrying the
    API's message and the slug. TransportError from fetch propagates.
    """
    if not api_key or not api_key.strip():
        raise ValueError("API key must not be empty")
    if not slug or not slug.strip():
        raise ValueError("vanity name must not be empty")
    response = _vanity_api_response(api_key.strip(), slug.strip(), fetch)
    if int(response["success"]) == _RESOLVE_SUCCESS and response.get("steamid"):
        return str(response["steamid"])
    # message only appears when the name did not resolve
    raise ResolutionError(response.get("message") or "vanity name did not resolve", slug)


def resolve_vanity_url_auto(slug: str, api_key: str | None = None, fetch=http_fetch) -> str | None:
    """
    Resolve a vanity name with whichever strategy is available: the Web API when api_key (or the configured
    STEAM_WEB_API_KEY) is set, otherwise the profile XML scrape.
    Returns None when the name does not exist; raises ResolutionError for any other API verdict.
    """
    key = (api_key if api_key is not None else STEAM_WEB_API_KEY or "").strip()
    if not key:
        return resolve_vanity_url(slug, fetch=fetch)
    response = _vanity_api_response(key, slug.strip(), fetch)
    success = int(response["success"])
    if success == _RESOLVE_SUCCESS and response.get("steamid"):
        return str(response["steamid"])
    if success == _RESOLVE_NO_MATCH:
        logger.debug("ResolveVanityURL found no match for %r", slug)
        return None
    raise ResolutionError(response.get("message") or "vanity name did not resolve", slug)


def get_persona_name(steamid, fetch=http_fetch) -> str | None:
    """
    Return the display name for a SteamID (or SteamID64 string) from the profile XML page.
    None if the profile has no name (missing or private-without-name profile). TransportError propagates.
    """
    if steamid is None:
        raise ValueError("steamid must not be None")
    url = PROFILE_URL_TEMPLATE.format(steamid64=str(steamid))
    page = fetch(url, _XML_PARAMS)
    m = PERSONA_XML_PATTERN.search(page)
    return m.group(1) if m else None


def get_persona_name_api(api_key: str, steamid, fetch=http_fetch) -> str | None:
    """
    Return the display name from ISteamUser/GetPlayerSummaries (first player's personaname).
    None when the API lists no players or the body is not the expected shape.
    """
    if not api_key or not api_key.strip():
        raise ValueError("API key must not be empty")
    if steamid is None:
        raise ValueError("steamid must not be None")
    call = (
        ApiCall()
        .with_interface(INTERFACE_STEAM_USER)
        .with_method("GetPlayerSummaries")
        .with_version("v0002")
        .with_key(api_key.strip())
        .with_param("steamids", str(steamid))
    )
    body = call.call(fetch=fetch)
    try:
        players = json.loads(body)["response"]["players"]
        if not players:
            return None
        return players[0]["personaname"]
    except (ValueError, KeyError, TypeError, IndexError):
        logger.debug("Unexpected GetPlayerSummaries body for %s", steamid)
        return None
