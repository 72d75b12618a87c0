# dashboard/streamlit_app.py

from __future__ import annotations

import os
from typing import Any, Dict

import pandas as pd
import streamlit as st

from analytics.amounts import format_ui_amount_fixed, shorten
from api.holders import holders_response
from common.settings import get_settings


# ============================================================
# pure helpers only below this line
# nothing here should touch the network at import time
# ============================================================

HOLDER_COLUMNS = ["rank", "owner_short", "owner", "amount", "amount_raw"]


def holders_frame(body: Dict[str, Any], places: int = 2) -> pd.DataFrame:
    rows = []
    for i, h in enumerate(body.get("holders") or [], 1):
        rows.append((
            i,
            shorten(h["owner"]),
            h["owner"],
            format_ui_amount_fixed(h["amountRaw"], int(h.get("decimals") or 0), places),
            h["amountRaw"],
        ))
    return pd.DataFrame(rows, columns=HOLDER_COLUMNS)


def render_app() -> None:
    settings = get_settings()
    st.set_page_config(page_title="Top Holders", layout="wide")
    st.title("Top Token Holders")
    st.caption("Largest token accounts aggregated by owner wallet")

    with st.sidebar:
        st.header("Query")
        mint = st.text_input("Token mint", value="")
        limit = st.slider(
            "Top N",
            min_value=settings.holders.min_limit,
            max_value=settings.holders.max_limit,
            value=settings.holders.default_limit,
        )
        rpc = st.text_input("RPC endpoint", value="", placeholder=settings.rpc.url)
        run = st.button("Fetch holders")

    if not run:
        st.info("Paste a mint address and press Fetch holders.")
        st.stop()

    with st.spinner("Querying RPC"):
        status, body = holders_response(mint, limit, rpc or None, settings)

    if status != 200:
        st.error(body.get("error", "Request failed"))
        if body.get("hint"):
            st.caption(body["hint"])
        st.stop()

    df = holders_frame(body)
    c1, c2, c3 = st.columns(3)
    c1.metric("Holders", len(df))
    c2.metric("Limit", body["limit"])
    c3.metric("Fetched", body["fetchedAt"])
    st.caption(f"RPC {body['rpcUrl']}")

    if df.empty:
        st.info("No holders returned for this mint.")
        st.stop()

    st.dataframe(df[["rank", "owner", "amount", "amount_raw"]], use_container_width=True, hide_index=True)
    if body.get("note"):
        st.caption(body["note"])
    st.download_button(
        "Download CSV",
        data=df.to_csv(index=False),
        file_name=f"holders_{body['mint'][:8]}.csv",
        mime="text/csv",
    )


# ============================================================
# import safety for tests and ci
# set HOLDERS_DASHBOARD_TEST_MODE=1 so imports never execute the app
# ============================================================

if os.getenv("HOLDERS_DASHBOARD_TEST_MODE") != "1":
    render_app()
