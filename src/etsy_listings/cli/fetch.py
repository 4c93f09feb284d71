from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from etsy_listings.models import InvalidStateError, Listing, ShopListingState
from etsy_listings.services import EtsyConfig, EtsyError, make_client
from etsy_listings.utils.jsonify import to_jsonable
from etsy_listings.utils.log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="etsy-listings", description="Fetch Etsy listings as JSON")
    parser.add_argument("--api-key", help="Etsy API key (default: $ETSY_API_KEY)")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--images", action="store_true", help="Include each listing's images")
    sub = parser.add_subparsers(dest="command", required=True)

    p_listing = sub.add_parser("listing", help="Fetch listings by id")
    p_listing.add_argument("ids", nargs="+", type=int)

    p_shop = sub.add_parser("shop", help="Fetch the listings of a shop")
    p_shop.add_argument("shop_id")
    p_shop.add_argument(
        "--state",
        default=ShopListingState.ACTIVE.value,
        help="One of " + ", ".join(s.value for s in ShopListingState),
    )
    p_shop.add_argument("--limit", type=int)
    p_shop.add_argument("--offset", type=int)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    config = EtsyConfig()
    if args.api_key:
        config.api_key = args.api_key

    with make_client(config) as client:
        try:
            if args.command == "listing":
                ids = args.ids[0] if len(args.ids) == 1 else args.ids
                result = Listing.find(ids, client=client)
            else:
                result = Listing.find_all_by_shop_id(
                    args.shop_id, state=args.state, client=client, limit=args.limit, offset=args.offset
                )
            output = to_jsonable(result, include_images=args.images)
        except InvalidStateError as e:
            print(str(e), file=sys.stderr)
            return 2
        except EtsyError as e:
            print(f"Etsy API error: {e}", file=sys.stderr)
            return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
