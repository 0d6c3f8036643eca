"""
Parse and convert SteamIDs between SteamID64, SteamID32 ("STEAM_X:Y:Z") and Steam3 ("[U:X:Z]") forms.

A SteamID64 packs four fields into one 64-bit integer:

    bits 56-63  universe      (0 = unspecified/legacy, 1 = public)
    bits 52-55  account type  (1 = individual)
    bits 32-51  instance      (1 = desktop)
    bits  0-31  account number

parse() accepts any of the textual forms, a steamcommunity.com profile URL, or a vanity name / custom URL
(resolved over the network as a last resort).
"""

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum

from steamid_config import PROFILE_URL_TEMPLATE, STEAMID64_PREFIX
from steam_client import resolve_vanity_url_auto
from steam_errors import ConsistencyError, ParseError, ResolutionError, TransportError

logger = logging.getLogger(__name__)

ACCOUNT_MASK = 0xFFFFFFFF
INSTANCE_MASK = 0xFFFFF
TYPE_MASK = 0xF

TYPE_INDIVIDUAL = 1
INSTANCE_DESKTOP = 1

STEAMID64_PATTERN = re.compile(r"^\d+$", re.ASCII)
STEAMID32_PATTERN = re.compile(r"^STEAM_([0-5]):([0-1]):(\d+)$", re.ASCII)
STEAM3_PATTERN = re.compile(r"^\[U:([0-5]):(\d+)\]$", re.ASCII)
PROFILE_URL_PATTERN = re.compile(r"^https?://steamcommunity\.com/profiles/(\d+)", re.ASCII)
# Anything after the slug (trailing slash, extra path, query) is ignored
VANITY_URL_PATTERN = re.compile(r"^https?://steamcommunity\.com/id/([\w-]+)(?:[/?#].*)?$", re.ASCII)


class IdFormat(Enum):
    """Which textual form a SteamID was parsed from."""

    STEAMID64 = "steamid64"
    STEAMID32 = "steamid32"
    STEAM3 = "steam3"
    PROFILE_URL = "profile_url"
    VANITY = "vanity"


@dataclass(frozen=True)
class SteamID:
    """
    An individual Steam account identifier. Build instances with parse(); do not fill the fields by hand.
    Equality and hashing only look at universe, account_type, instance and account.
    """

    universe: int
    account_type: int
    instance: int
    account: int
    # Parsed from "STEAM_0:..."; steamid32() reprints the 0 even though universe is normalised to 1
    legacy_universe_zero: bool = field(default=False, compare=False)
    source: IdFormat = field(default=IdFormat.STEAMID64, compare=False, repr=False)

    @property
    def as_64(self) -> int:
        return (self.universe << 56) | (self.account_type << 52) | (self.instance << 32) | self.account

    def steamid64(self) -> str:
        return str(self.as_64)

    def steamid32(self, zero_universe: bool = False) -> str:
        """
        STEAM_X:Y:Z with Y = low bit of the account and Z = account // 2.
        X is 0 when zero_universe is set or the value was parsed from STEAM_0:..., otherwise the universe.
        """
        universe = 0 if (zero_universe or self.legacy_universe_zero) else self.universe
        return f"STEAM_{universe}:{self.account & 1}:{self.account >> 1}"

    def steam3(self) -> str:
        # Individual accounts only
        return f"[U:{self.universe}:{self.account}]"

    @property
    def profile_url(self) -> str:
        return PROFILE_URL_TEMPLATE.format(steamid64=self.steamid64())

    def __str__(self) -> str:
        return self.steamid64()

    def __int__(self) -> int:
        return self.as_64


def _decode_steamid64(m: re.Match) -> SteamID:
    value = int(m.group(m.lastindex or 0))
    if value >> 64:
        raise ParseError("number does not fit in 64 bits", m.string)
    return SteamID(
        universe=value >> 56,
        account_type=(value >> 52) & TYPE_MASK,
        instance=(value >> 32) & INSTANCE_MASK,
        account=value & ACCOUNT_MASK,
        source=IdFormat.STEAMID64,
    )


def _decode_steamid32(m: re.Match) -> SteamID:
    universe = int(m.group(1))
    auth_server = int(m.group(2))
    account = int(m.group(3)) * 2 + auth_server
    legacy_zero = universe == 0
    return SteamID(
        universe=1 if legacy_zero else universe,
        account_type=TYPE_INDIVIDUAL,
        instance=INSTANCE_DESKTOP,
        account=account,
        legacy_universe_zero=legacy_zero,
        source=IdFormat.STEAMID32,
    )


def _decode_steam3(m: re.Match) -> SteamID:
    return SteamID(
        universe=int(m.group(1)),
        account_type=TYPE_INDIVIDUAL,
        instance=INSTANCE_DESKTOP,
        account=int(m.group(2)),
        source=IdFormat.STEAM3,
    )


def _decode_profile_url(m: re.Match) -> SteamID:
    return _with_source(_decode_steamid64(m), IdFormat.PROFILE_URL)


def _with_source(sid: SteamID, source: IdFormat) -> SteamID:
    return replace(sid, source=source)


# Tried in order; first match wins. Anything left over is treated as a vanity name.
_MATCHERS = (
    (IdFormat.STEAMID64, STEAMID64_PATTERN, _decode_steamid64),
    (IdFormat.STEAMID32, STEAMID32_PATTERN, _decode_steamid32),
    (IdFormat.STEAM3, STEAM3_PATTERN, _decode_steam3),
    (IdFormat.PROFILE_URL, PROFILE_URL_PATTERN, _decode_profile_url),
)


def detect_format(text: str) -> IdFormat:
    """Return the IdFormat that parse() would use for text, without resolving anything."""
    text = (text or "").strip()
    for fmt, pattern, _ in _MATCHERS:
        if pattern.match(text):
            return fmt
    return IdFormat.VANITY


def vanity_slug(text: str) -> str:
    """The vanity name in a custom profile URL, or the text itself if it is not such a URL."""
    m = VANITY_URL_PATTERN.match(text)
    return m.group(1) if m else text


def _decode_vanity(text: str, resolve) -> SteamID:
    slug = vanity_slug(text)
    logger.debug("Resolving %r as vanity name %r", text, slug)
    try:
        steamid64 = resolve(slug)
    except ResolutionError as e:
        raise ParseError(e.message, text) from e
    except TransportError as e:
        raise ParseError("unable to resolve vanity URL", text) from e
    if not steamid64:
        raise ParseError("could not determine identifier type", text)
    m = STEAMID64_PATTERN.match(str(steamid64).strip())
    if not m:
        raise ParseError(f"vanity lookup returned a non-numeric id {steamid64!r}", text)
    try:
        decoded = _decode_steamid64(m)
    except ParseError as e:
        raise ParseError(e.message, text) from e
    return _with_source(decoded, IdFormat.VANITY)


def _sanity_check(sid: SteamID, text: str) -> None:
    id64 = sid.steamid64()
    if not id64.startswith(STEAMID64_PREFIX):
        raise ConsistencyError(
            f"Incorrect render of SteamID64 (expected {STEAMID64_PREFIX} at start, got "
            f"{id64[:len(STEAMID64_PREFIX)]}) for input {text!r}"
        )
    # Numeric input decodes whatever it is given; only the prefix check applies to it
    if sid.universe == 0 and sid.source not in (IdFormat.STEAMID32, IdFormat.STEAMID64, IdFormat.PROFILE_URL):
        raise ConsistencyError(f"Universe 0 in a {sid.source.value} SteamID for input {text!r}")


def parse(text: str, resolve=None) -> SteamID:
    """
    Parse a SteamID from any supported form:

        76561198091343023
        STEAM_0:1:65538647
        [U:1:131077295]
        https://steamcommunity.com/profiles/76561198091343023
        https://steamcommunity.com/id/<vanity>  or just <vanity>

    resolve is a callable slug -> SteamID64 string (or None when not found) used for vanity names; it defaults
    to steam_client.resolve_vanity_url_auto, which makes one network request.
    Raises ParseError for unusable input (it carries the stripped input as .text) and ConsistencyError if the
    decoded value breaks the SteamID64 invariants.
    """
    if text is None or not text.strip():
        raise ParseError("input must not be empty", text or "")
    text = text.strip()
    for _, pattern, decode in _MATCHERS:
        m = pattern.match(text)
        if m:
            sid = decode(m)
            break
    else:
        sid = _decode_vanity(text, resolve or resolve_vanity_url_auto)
    _sanity_check(sid, text)
    return sid
