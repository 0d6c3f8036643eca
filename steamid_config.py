"""Endpoints and default configuration for the Steam identifier tools."""

import os

# --- Steam Community (no key required) ---
STEAM_COMMUNITY_BASE = "https://steamcommunity.com"

# Permanent profile link; use {steamid64} placeholder
PROFILE_URL_TEMPLATE = STEAM_COMMUNITY_BASE + "/profiles/{steamid64}"

# Custom (vanity) profile link; use {slug} placeholder
VANITY_URL_TEMPLATE = STEAM_COMMUNITY_BASE + "/id/{slug}"

# --- Steam Web API ---
# Use {interface}, {method} and {version} placeholders
STEAM_API_BASE_URL_TEMPLATE = "http://api.steampowered.com/{interface}/{method}/{version}/"

# Optional Steam Web API key (get free at https://steamcommunity.com/dev/apikey). If empty, vanity
# resolution scrapes the profile XML page instead of calling ResolveVanityURL.
# Load from config_local.py (gitignored) so the key is never committed; fall back to the environment.
try:
    from config_local import STEAM_WEB_API_KEY
except ImportError:
    STEAM_WEB_API_KEY = os.environ.get("STEAM_WEB_API_KEY", "")

# Seconds before a single request is abandoned
REQUEST_TIMEOUT_SECONDS = 15

# Every individual SteamID64 in the public universe starts with this
STEAMID64_PREFIX = "7656119"

# Log level name used by the command line entry point
LOG_LEVEL = os.environ.get("STEAMID_LOG_LEVEL", "WARNING").upper()
