from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from coinlist import (
    Asset,
    CalculatorEdit,
    CoinCatalog,
    CoinDetailSession,
    CoinlistConfig,
    CoinlistError,
    MarketDataRepository,
    MessageLevel,
    ServiceMessage,
    SessionStatus,
    format_quantity,
    format_usd,
)
from coinlist.config import CHART_LINE_COLOR, CHART_LINE_WIDTH, CHART_TICK_INTERVAL_MS
from coinlist.logger import get_logger

logger = get_logger(__name__)


# ------------------ Page config ------------------ #
st.set_page_config(page_title="Coin List Toy", layout="centered")


# ------------------ Helpers ------------------ #
def _display_messages(messages: Sequence[ServiceMessage], *, stop_on_error: bool = False) -> None:
    has_error = False
    for message in messages:
        if message.level == MessageLevel.ERROR:
            st.error(message.text)
            has_error = True
        elif message.level == MessageLevel.WARNING:
            st.warning(message.text)
        else:
            st.info(message.text)
    if stop_on_error and has_error:
        st.stop()


def _repository() -> MarketDataRepository:
    return MarketDataRepository.from_config(CoinlistConfig.from_env())


def _build_price_chart(df: pd.DataFrame) -> go.Figure:
    fig = go.Figure(
        go.Scatter(
            x=df["Date"],
            y=df["Price (USD)"],
            mode="lines",
            line={"color": CHART_LINE_COLOR, "width": CHART_LINE_WIDTH, "shape": "spline"},
            hovertemplate="<b>%{x|%d/%m/%Y}</b><br>Price: $%{y:,.2f}<extra></extra>",
        )
    )
    fig.update_layout(
        xaxis=dict(
            type="date",
            dtick=CHART_TICK_INTERVAL_MS,
            tickformat="%-m '%y",
            tickangle=-30,
            showline=True,
            mirror=True,
        ),
        yaxis=dict(showticklabels=False, showline=True, mirror=True),
        showlegend=False,
        margin=dict(l=20, r=20, t=20, b=20),
    )
    return fig


# ------------------ Navigation ------------------ #
def _open_details(asset: Asset) -> None:
    session = CoinDetailSession(asset, _repository())
    st.session_state["detail"] = session
    st.session_state["usd_input"] = format_usd(session.calculator.usd_amount)
    st.session_state["qty_input"] = format_quantity(session.calculator.quantity)
    st.session_state["calc_messages"] = []


def _close_details() -> None:
    st.session_state.pop("detail", None)
    # New table key so the previous row selection does not reopen the coin
    st.session_state["table_generation"] = st.session_state.get("table_generation", 0) + 1


# ------------------ Calculator callbacks ------------------ #
def _apply_edit(edit: CalculatorEdit) -> None:
    if edit.warning:
        st.session_state["calc_messages"] = [ServiceMessage(MessageLevel.WARNING, edit.warning)]
        return
    st.session_state["calc_messages"] = []
    if edit.usd_field is not None:
        st.session_state["usd_input"] = edit.usd_field
    if edit.qty_field is not None:
        st.session_state["qty_input"] = edit.qty_field


def _on_usd_change() -> None:
    session: CoinDetailSession = st.session_state["detail"]
    _apply_edit(session.edit_usd(st.session_state["usd_input"]))


def _on_qty_change() -> None:
    session: CoinDetailSession = st.session_state["detail"]
    _apply_edit(session.edit_quantity(st.session_state["qty_input"]))


# ------------------ Views ------------------ #
def render_coin_list() -> None:
    st.title("Coin List Toy")

    if "catalog" not in st.session_state:
        with st.spinner("Loading coins..."):
            try:
                st.session_state["catalog"] = CoinCatalog.load(_repository())
            except CoinlistError as exc:
                _display_messages([ServiceMessage.from_error(exc)], stop_on_error=True)

    catalog: CoinCatalog = st.session_state["catalog"]
    query = st.text_input("🔍 Search", key="search", placeholder="Search")
    coins = catalog.filter(query)
    st.caption(f"{len(coins)} of {len(catalog)} coins")

    event = st.dataframe(
        CoinCatalog.to_frame(coins),
        hide_index=True,
        use_container_width=True,
        on_select="rerun",
        selection_mode="single-row",
        key=f"coin_table_{st.session_state.get('table_generation', 0)}",
    )
    rows = event.selection.rows
    if rows:
        asset = coins[rows[0]]
        logger.info("Opening details for %s", asset.id)
        _open_details(asset)
        st.rerun()


def render_coin_details(session: CoinDetailSession) -> None:
    st.title(session.asset.name)
    st.caption(f"{session.asset.symbol} · {session.asset.id}")
    st.button("← Back", on_click=_close_details)

    st.markdown("**Price History (1Y)**")
    if session.status == SessionStatus.LOADING:
        with st.spinner("Loading price history..."):
            try:
                session.load()
            except CoinlistError as exc:
                _display_messages([ServiceMessage.from_error(exc)])
    elif session.status == SessionStatus.FAILED:
        _display_messages([ServiceMessage.from_error(session.error)])

    if session.status == SessionStatus.LOADED:
        st.plotly_chart(
            _build_price_chart(session.chart_frame()),
            use_container_width=True,
            config={"displayModeBar": False},
        )
        period = session.covered_period()
        if period:
            st.caption(f"Covering {period}; latest price {format_usd(session.current_price)}")

    st.divider()
    st.markdown("**Price Calculator (USD)**")
    col_usd, col_qty = st.columns(2)
    with col_usd:
        st.text_input("USD", key="usd_input", placeholder="USD", on_change=_on_usd_change)
    with col_qty:
        st.text_input("QTY", key="qty_input", placeholder="QTY", on_change=_on_qty_change)
    _display_messages(st.session_state.get("calc_messages", []))


def main() -> None:
    session = st.session_state.get("detail")
    if session is None:
        render_coin_list()
    else:
        render_coin_details(session)


if __name__ == "__main__":
    main()
