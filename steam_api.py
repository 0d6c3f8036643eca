"""Immutable description of a Steam Web API call (interface/method/version + query params)."""

from dataclasses import dataclass, replace
from enum import Enum

from steamid_config import STEAM_API_BASE_URL_TEMPLATE
from http_client import build_query_string, fetch as http_fetch

INTERFACE_STEAM_NEWS = "ISteamNews"
INTERFACE_STEAM_USER_STATS = "ISteamUserStats"
INTERFACE_STEAM_USER = "ISteamUser"
INTERFACE_TF_ITEMS = "ITFItems_440"


class Format(Enum):
    """Response formats the Web API can return."""

    JSON = "json"
    XML = "xml"
    VDF = "vdf"


@dataclass(frozen=True)
class ApiCall:
    """
    One Web API request. Every with_* method returns a new ApiCall, so a partially filled call
    can be shared and extended freely:

        base = ApiCall().with_interface(INTERFACE_STEAM_USER).with_version("1")
        call = base.with_method("ResolveVanityURL").with_param("vanityurl", "gabelogannewell")
    """

    interface: str = ""
    method: str = ""
    version: str = ""
    key: str = ""
    format: Format = Format.JSON
    params: tuple[tuple[str, str], ...] = ()

    def with_interface(self, interface: str) -> "ApiCall":
        if not interface:
            raise ValueError("interface must not be empty")
        return replace(self, interface=interface)

    def with_method(self, method: str) -> "ApiCall":
        if not method:
            raise ValueError("method must not be empty")
        return replace(self, method=method)

    def with_version(self, version: str) -> "ApiCall":
        """Accepts "2", "v2" or "V0002"; stored lower-case with a leading "v"."""
        if not version:
            raise ValueError("version must not be empty")
        version = version.lower()
        if not version.startswith("v"):
            version = "v" + version
        return replace(self, version=version)

    def with_key(self, key: str) -> "ApiCall":
        if not key:
            raise ValueError("key must not be empty")
        return replace(self, key=key)

    def with_format(self, fmt: Format | None) -> "ApiCall":
        return replace(self, format=fmt or Format.JSON)

    def with_param(self, key: str, value) -> "ApiCall":
        """Set one param. Setting an existing name replaces its value where it already sits."""
        return self.with_params([(key, value)])

    def with_params(self, params) -> "ApiCall":
        """Set params from a mapping or an iterable of (key, value) pairs. New names go last, in order."""
        pairs = params.items() if hasattr(params, "items") else params
        merged = dict(self.params)
        for k, v in pairs:
            merged[str(k)] = str(v)
        return replace(self, params=tuple(merged.items()))

    def url(self) -> str:
        """Full request URL: base path, then format, then key (if any), then params in insertion order."""
        if not (self.interface and self.method and self.version):
            raise ValueError("an interface, method, and version must be specified")
        base = STEAM_API_BASE_URL_TEMPLATE.format(
            interface=self.interface, method=self.method, version=self.version
        )
        query = [("format", self.format.value)]
        if self.key:
            query.append(("key", self.key))
        query.extend(self.params)
        return base + "?" + build_query_string(query)

    def call(self, fetch=http_fetch) -> str:
        """Perform the request and return the raw body. TransportError propagates."""
        return fetch(self.url())

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks
        key = "***" if self.key else ""
        return (
            f"ApiCall(interface={self.interface!r}, method={self.method!r}, version={self.version!r}, "
            f"key={key!r}, format={self.format.name}, params={self.params!r})"
        )
