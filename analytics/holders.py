from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from analytics.amounts import format_ui_amount
from common.settings import Settings, get_settings
from ingestion.solana_tokens import (
    MAX_TOKEN_ACCOUNTS,
    get_account_owners,
    get_largest_accounts,
    resolve_program_owner,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MIN_LIMIT = 2
MAX_LIMIT = 10

AGGREGATION_NOTE = (
    "Owners aggregated from top token accounts via getTokenLargestAccounts; "
    "supports SPL Token and Token-2022 mints."
)


@dataclass(frozen=True)
class TokenAccount:
    address: str
    amount: int
    decimals: int = 0

    @classmethod
    def from_rpc(cls, item: Mapping[str, Any]) -> "TokenAccount":
        return cls(
            address=item["address"],
            amount=int(item["amount"]),
            decimals=int(item.get("decimals") or 0),
        )


@dataclass(frozen=True)
class Holder:
    owner: str
    amount_raw: int
    decimals: int

    @property
    def ui_amount(self) -> str:
        return format_ui_amount(self.amount_raw, self.decimals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "amountRaw": str(self.amount_raw),
            "decimals": self.decimals,
            "uiAmount": self.ui_amount,
        }


@dataclass(frozen=True)
class HoldersResult:
    mint: str
    limit: int
    holders: List[Holder] = field(default_factory=list)
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    rpc_url: str = ""
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "mint": self.mint,
            "limit": self.limit,
            "holders": [h.to_dict() for h in self.holders],
            "fetchedAt": _iso(self.fetched_at),
            "rpcUrl": self.rpc_url,
        }
        if self.note:
            out["note"] = self.note
        return out


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def clamp_limit(limit: Any = None, default: int = DEFAULT_LIMIT, lo: int = MIN_LIMIT, hi: int = MAX_LIMIT) -> int:
    """
    Clamp a requested holder count into [lo, hi]; missing or unparsable values use the default.
    """
    if limit is None or limit == "":
        n = default
    else:
        try:
            n = int(float(limit))
        except (TypeError, ValueError, OverflowError):
            n = default
    return min(max(n, lo), hi)


def aggregate_by_owner(accounts: Iterable[TokenAccount], owners: Mapping[str, str]) -> Dict[str, int]:
    """
    Sum raw amounts per owner wallet. Accounts whose owner did not resolve are skipped.
    Keys keep first-seen order.
    """
    totals: Dict[str, int] = {}
    for acc in accounts:
        owner = owners.get(acc.address)
        if not owner:
            continue
        totals[owner] = totals.get(owner, 0) + acc.amount
    return totals


def rank_holders(totals: Mapping[str, int], limit: int, decimals: int) -> List[Holder]:
    # sorted() is stable: equal totals stay in first-seen order
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [Holder(owner, amount, decimals) for owner, amount in ranked[: int(limit)]]


def fetch_top_holders(
    mint: str,
    limit: Any = None,
    rpc_url: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> HoldersResult:
    """
    Top holders of a mint, aggregated by owner wallet.

    Program owner (best effort) -> getTokenLargestAccounts -> getMultipleAccounts
    -> aggregate -> rank. Errors from the largest-accounts or owner lookups
    propagate; nothing partial is returned.
    """
    st = settings or get_settings()
    hc = st.holders
    n = clamp_limit(limit, hc.default_limit, hc.min_limit, hc.max_limit)
    url = (rpc_url or "").strip() or st.rpc.url
    rpc_kw = {"commitment": st.rpc.commitment, "timeout": st.rpc.timeout}

    program_id = None
    if hc.eager_program_lookup:
        program_id = resolve_program_owner(url, mint, **rpc_kw)

    largest = [TokenAccount.from_rpc(x) for x in get_largest_accounts(url, mint, program_id, **rpc_kw)]
    if not largest:
        logger.info("no token accounts returned for %s", mint)
        return HoldersResult(mint=mint, limit=n, holders=[], rpc_url=url)

    decimals = largest[0].decimals
    window = largest[: min(hc.max_accounts, MAX_TOKEN_ACCOUNTS)]
    owners = get_account_owners(url, [a.address for a in window], **rpc_kw)

    totals = aggregate_by_owner(largest, owners)
    holders = rank_holders(totals, n, decimals)
    logger.info("%s: %d accounts, %d owners, returning %d", mint, len(largest), len(totals), len(holders))
    return HoldersResult(
        mint=mint,
        limit=n,
        holders=holders,
        rpc_url=url,
        note=AGGREGATION_NOTE,
    )


__all__ = [
    "TokenAccount",
    "Holder",
    "HoldersResult",
    "clamp_limit",
    "aggregate_by_owner",
    "rank_holders",
    "fetch_top_holders",
    "AGGREGATION_NOTE",
]
