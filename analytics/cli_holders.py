# analytics/cli_holders.py
import argparse
import json
import sys

from analytics.holders import fetch_top_holders
from common.logging_setup import setup_logging
from common.settings import get_settings


def main(argv=None):
    p = argparse.ArgumentParser(description="Top token holders by owner wallet (Solana RPC)")
    p.add_argument("--mint", default="", help="Token mint address")
    p.add_argument("--limit", default=None, help="Top N holders, clamped to [2, 10]")
    p.add_argument("--rpc", default=None, help="RPC endpoint override (defaults to $SOLANA_RPC_URL or config)")
    args = p.parse_args(argv)

    mint = (args.mint or "").strip()
    if not mint:
        print("Missing --mint", file=sys.stderr)
        sys.exit(1)

    setup_logging()
    try:
        result = fetch_top_holders(mint, limit=args.limit, rpc_url=args.rpc, settings=get_settings())
    except Exception as e:
        print(f"Probe error: {e}", file=sys.stderr)
        sys.exit(2)

    out = result.to_dict()
    print(json.dumps(out, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
