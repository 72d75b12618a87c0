"""
api.holders

Inbound holders query: validate the request, run the aggregation and shape
the JSON body. Framework neutral, returns (status, body).
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, Tuple

from analytics.holders import fetch_top_holders
from common.settings import Settings, get_settings
from ingestion.solana_tokens import is_mint_not_found

logger = logging.getLogger(__name__)

MINT_RE = re.compile(r"^\w{32,44}$", re.ASCII)

MINT_NOT_FOUND_HINT = (
    "The given address is not a token mint on this cluster or RPC. "
    "Ensure the mint exists on the selected network, or try a different RPC."
)


class InvalidQuery(ValueError):
    pass


def validate_mint(mint: Optional[str]) -> str:
    m = (mint or "").strip()
    if not m:
        raise InvalidQuery("Missing `mint` query param")
    if not MINT_RE.match(m):
        raise InvalidQuery("Invalid mint address format")
    return m


def error_body(exc: BaseException) -> Dict[str, Any]:
    message = str(exc) or "Internal error"
    body: Dict[str, Any] = {"error": message}
    if is_mint_not_found(exc):
        body["hint"] = MINT_NOT_FOUND_HINT
    return body


def holders_response(
    mint: Optional[str],
    limit: Any = None,
    rpc: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Tuple[int, Dict[str, Any]]:
    try:
        m = validate_mint(mint)
    except InvalidQuery as e:
        return 400, {"error": str(e)}

    st = settings or get_settings()
    try:
        result = fetch_top_holders(m, limit=limit, rpc_url=rpc, settings=st)
    except Exception as e:
        logger.error("holders query failed for %s: %s", m, e, exc_info=True)
        return 500, error_body(e)
    return 200, result.to_dict()


__all__ = ["MINT_RE", "MINT_NOT_FOUND_HINT", "InvalidQuery", "validate_mint", "error_body", "holders_response"]
