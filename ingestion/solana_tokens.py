# ingestion/solana_tokens.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from ingestion.rpc import RpcError, rpc_call

logger = logging.getLogger(__name__)

# substring the node puts in getTokenLargestAccounts errors when the mint
# is not governed by the program it assumed
MINT_NOT_FOUND = "could not find mint"

MAX_TOKEN_ACCOUNTS = 30
COMMITMENT = "confirmed"


def is_mint_not_found(error: BaseException) -> bool:
    return MINT_NOT_FOUND in str(error or "").lower()


def resolve_program_owner(rpc_url: str, mint: str, commitment: str = COMMITMENT, **rpc_kw) -> Optional[str]:
    """
    Return the program that owns the mint account (SPL Token or Token-2022),
    or None when it cannot be determined. Never raises on RPC failure.
    """
    try:
        info = rpc_call(rpc_url, "getAccountInfo", [mint, {"encoding": "base64", "commitment": commitment}], **rpc_kw)
    except RpcError as e:
        logger.debug("program owner lookup failed for %s: %s", mint, e)
        return None
    value = info.get("value") if isinstance(info, dict) else None
    owner = value.get("owner") if isinstance(value, dict) else None
    return owner or None


def _largest(rpc_url: str, mint: str, program_id: Optional[str], commitment: str, **rpc_kw) -> List[Dict[str, Any]]:
    opts: Dict[str, Any] = {"commitment": commitment}
    if program_id:
        opts = {"programId": program_id, "commitment": commitment}
    res = rpc_call(rpc_url, "getTokenLargestAccounts", [mint, opts], **rpc_kw)
    value = res.get("value") if isinstance(res, dict) else None
    return list(value or [])


def get_largest_accounts(
    rpc_url: str,
    mint: str,
    program_id: Optional[str] = None,
    commitment: str = COMMITMENT,
    **rpc_kw,
) -> List[Dict[str, Any]]:
    """
    Largest token accounts of a mint: [{address, amount, decimals, ...}].

    Without a program id the default token program is assumed. If the node
    answers "could not find mint", the owning program is looked up and the
    query is retried once with it.
    """
    try:
        return _largest(rpc_url, mint, program_id, commitment, **rpc_kw)
    except RpcError as e:
        if program_id or not is_mint_not_found(e):
            raise
        owner = resolve_program_owner(rpc_url, mint, commitment, **rpc_kw)
        if not owner:
            raise
        logger.info("retrying getTokenLargestAccounts for %s with programId=%s", mint, owner)
        return _largest(rpc_url, mint, owner, commitment, **rpc_kw)


def _parsed_owner(acc: Any) -> Optional[str]:
    # base64 encoded or unknown accounts carry a list or no parsed section
    node = acc
    for key in ("data", "parsed", "info"):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if not isinstance(node, dict):
        return None
    owner = node.get("owner")
    return owner if isinstance(owner, str) and owner else None


def get_account_owners(
    rpc_url: str,
    addresses: Sequence[str],
    commitment: str = COMMITMENT,
    **rpc_kw,
) -> Dict[str, str]:
    """
    Map token account address -> owner wallet via getMultipleAccounts (jsonParsed).
    Accounts without a parsed owner are left out.
    """
    addrs = list(addresses)
    if not addrs:
        return {}
    res = rpc_call(
        rpc_url,
        "getMultipleAccounts",
        [addrs, {"encoding": "jsonParsed", "commitment": commitment}],
        **rpc_kw,
    )
    values = res.get("value") if isinstance(res, dict) else None
    owners: Dict[str, str] = {}
    for addr, acc in zip(addrs, values or []):
        owner = _parsed_owner(acc)
        if addr and owner:
            owners[addr] = owner
    dropped = len(addrs) - len(owners)
    if dropped:
        logger.debug("%d of %d token accounts had no parsed owner", dropped, len(addrs))
    return owners


__all__ = [
    "MINT_NOT_FOUND",
    "MAX_TOKEN_ACCOUNTS",
    "is_mint_not_found",
    "resolve_program_owner",
    "get_largest_accounts",
    "get_account_owners",
]
