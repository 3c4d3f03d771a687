"""Command line entry point for one-off price searches."""

import argparse
import json
from typing import List, Optional

from priceright.logger_config import get_logger
from priceright.services.price_search.service import PriceSearchService


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compare product prices.")
    parser.add_argument("query", help="Product to search for.")
    parser.add_argument(
        "--platform",
        action="append",
        dest="platforms",
        help="Restrict to a platform, may be repeated.",
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON records.")
    args = parser.parse_args(argv)

    get_logger("price_search")
    service = PriceSearchService()
    if args.platforms:
        records = service.search_specific(args.query, args.platforms)
    else:
        records = service.search_all(args.query)

    if args.json:
        print(json.dumps([record.model_dump(by_alias=True) for record in records], indent=2))
    else:
        print(service.render_summary(args.query, records))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
