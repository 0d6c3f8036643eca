"""SteamID converter - command line entry point."""

import argparse
import logging
import sys

from steamid_config import LOG_LEVEL, STEAM_WEB_API_KEY
from steam_client import get_persona_name, get_persona_name_api, resolve_vanity_url_auto
from steam_errors import ParseError, TransportError
from steamid import parse

logger = logging.getLogger(__name__)

EXIT_PARSE_ERROR = 1
EXIT_TRANSPORT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a SteamID between SteamID64, SteamID32 and Steam3 forms.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("steamid", metavar="<steamid64|steamid32|steam3|url|vanity>",
                        help="Any SteamID form, a profile URL, a custom URL or a vanity name.")
    parser.add_argument("--persona", "-p", action="store_true", help="Also look up the profile's display name.")
    parser.add_argument("--key", "-k", default=None,
                        help="Steam Web API key (defaults to STEAM_WEB_API_KEY). Without one, profile pages are scraped.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every request.")
    return parser


def describe(sid, persona_name: str | None = None) -> str:
    """Human-readable block of every form of sid (one "Label: value" per line)."""
    lines = [
        f"SteamID64: {sid.steamid64()}",
        f"SteamID32: {sid.steamid32()}",
        f"Steam3: {sid.steam3()}",
        f"Account ID: {sid.account}",
        f"Universe: {sid.universe}",
        f"Profile URL: {sid.profile_url}",
    ]
    if persona_name is not None:
        lines.append(f"Persona name: {persona_name}")
    return "\n".join(lines)


def run(argv=None, fetch=None) -> int:
    """Parse argv, print the result and return the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
    )
    key = (args.key if args.key is not None else STEAM_WEB_API_KEY or "").strip()
    fetch_kwargs = {"fetch": fetch} if fetch is not None else {}

    def resolve(slug):
        return resolve_vanity_url_auto(slug, api_key=key, **fetch_kwargs)

    try:
        sid = parse(args.steamid, resolve=resolve)
        persona = None
        if args.persona:
            if key:
                persona = get_persona_name_api(key, sid, **fetch_kwargs)
            else:
                persona = get_persona_name(sid, **fetch_kwargs)
            if persona is None:
                persona = "(not found)"
    except ParseError as e:
        if isinstance(e.__cause__, TransportError):
            logger.error("Steam could not be reached: %s", e.__cause__)
            return EXIT_TRANSPORT_ERROR
        print(f"Invalid SteamID: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    except TransportError as e:
        logger.error("Steam could not be reached: %s", e)
        return EXIT_TRANSPORT_ERROR
    print(describe(sid, persona))
    return 0


if __name__ == "__main__":
    sys.exit(run())
