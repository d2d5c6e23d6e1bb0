import argparse
import asyncio
import json
import logging
import sys

from .api import connectivity_report
from .client import Instaview
from .errors import InstaviewError
from .orchestrator import Backend
from .settings import load_scrape_config
from .storage import save_media_csv

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="instaview",
        description="Fetch StoriesIG media metadata for a username, with a local cache.",
    )
    parser.add_argument("username", nargs="?", help="Username to look up")
    parser.add_argument(
        "--backend",
        choices=[b.value for b in Backend],
        default=Backend.BROWSER.value,
        help="Scraping backend used on a cache miss (default: browser)",
    )
    parser.add_argument("--ttl-hours", type=float, default=None, help="Cache TTL in hours (default: from config, 12)")
    parser.add_argument("--cache-only", action="store_true", help="Only read the cache; never hit the network")
    parser.add_argument("--csv", metavar="PATH", help="Also write media rows to this CSV file")
    parser.add_argument("--config", metavar="PATH", help="Path to an instaview.yaml config file")
    parser.add_argument("--report", action="store_true", help="Print the connectivity report and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.report:
        print(json.dumps(connectivity_report(), indent=2))
        return 0

    if not args.username or not args.username.strip():
        parser.error("username is required")

    client = Instaview(config=load_scrape_config(args.config))

    try:
        if args.cache_only:
            data = client.get_cached(args.username, ttl_hours=args.ttl_hours)
        else:
            data = asyncio.run(client.get(args.username, ttl_hours=args.ttl_hours, backend=args.backend))
    except InstaviewError as e:
        print(f"Error {e}", file=sys.stderr)
        return 1

    if not isinstance(data, dict):
        print("Error did not receive data", file=sys.stderr)
        return 1

    print(json.dumps(data, indent=2, ensure_ascii=False))

    if args.csv:
        if save_media_csv(data, args.csv) is None:
            log.warning("No media rows to write to %s", args.csv)

    return 0
