"""Home page - Position sizing, sentiment advisor and trade journal."""
import asyncio
import dataclasses

import streamlit as st
from dotenv import load_dotenv

from src.advisor.models import SentimentUnavailableError
from src.dashboard.charts import equity_curve_figure, journal_table, r_distribution_figure
from src.dashboard.context import AppContext, create_context, load_settings
from src.dashboard.models import MessageLevel, RowStatus
from src.dashboard.session import TradingSession, resolve_user_id
from src.dashboard.state import ADVISOR, CALCULATOR, SAVE, SETTINGS, DashboardState
from src.journal.models import (
    MalformedRecordError,
    SENTIMENT_NOT_AVAILABLE,
    RecordNotFoundError,
    StoreUnavailableError,
    TradeRejectedError,
    TradeResult,
)
from src.preferences.models import DefaultSettings

st.set_page_config(
    page_title="ASSAP: Trading Strategy Simulator",
    page_icon="📈",
    layout="wide",
)


@st.cache_resource
def get_context() -> AppContext:
    load_dotenv()
    return create_context(load_settings())


context = get_context()
settings = context.settings
manager = context.manager

if "session" not in st.session_state:
    user_id = resolve_user_id(settings.session.user_id)
    session = TradingSession(
        manager=manager,
        parameters=settings.sizing.to_parameters(),
        ticker=settings.sizing.default_ticker,
    )
    state = DashboardState()

    if context.settings_store is not None:
        try:
            session.apply_defaults(asyncio.run(context.settings_store.get(user_id)))
        except StoreUnavailableError as e:
            state.post_message(SETTINGS, MessageLevel.ERROR, str(e))

    st.session_state["user_id"] = user_id
    st.session_state["session"] = session
    st.session_state["state"] = state
    for name, value in dataclasses.asdict(session.parameters).items():
        st.session_state[f"param_{name}"] = value

user_id: str = st.session_state["user_id"]
session: TradingSession = st.session_state["session"]
state: DashboardState = st.session_state["state"]
message_seconds = settings.dashboard.message_seconds

for key, text in context.errors.items():
    state.set_banner(key, text)

try:
    session.on_records(asyncio.run(manager.get_trades(user_id)))
    state.clear_banner("history")
except (OSError, ValueError, StoreUnavailableError) as e:
    state.set_banner("history", f"Failed to load trade history: {e}")


def show_message(area: str) -> None:
    message = state.message(area)
    if message is None:
        return
    render = {
        MessageLevel.INFO: st.info,
        MessageLevel.SUCCESS: st.success,
        MessageLevel.WARNING: st.warning,
        MessageLevel.ERROR: st.error,
    }[message.level]
    render(message.text)


st.title("📈 ASSAP: Trading Strategy Simulator")
st.caption("Analyze, Size, Signal, and Post-Trade. Ensure your strategy has a positive Expected Value.")
st.caption(f"Logged in as: `{user_id}`")

for banner in state.banners:
    st.error(banner.text)

# --- 1. Position Sizing & Risk Control ---
st.subheader("⚖️ 1. Position Sizing & Risk Control")

col1, col2, col3, col4 = st.columns(4)
with col1:
    account_size = st.number_input("Account Size ($)", min_value=0.0, step=100.0, key="param_account_size")
with col2:
    risk_percent = st.number_input("Risk per Trade (%)", min_value=0.0, step=0.1, key="param_risk_percent")
with col3:
    entry_price = st.number_input("Entry Price ($)", min_value=0.0, step=0.01, key="param_entry_price")
with col4:
    st.metric(f"Max Dollar Risk ({risk_percent}%)", f"${account_size * (risk_percent / 100):,.2f}")

st.markdown("**Trade Parameters**")
col1, col2, col3 = st.columns(3)
with col1:
    atr_stop_distance = st.number_input(
        "ATR Stop Distance ($)",
        min_value=0.0,
        step=0.01,
        key="param_atr_stop_distance",
        help="Difference between entry price and stop price (1R dollar value).",
    )
with col2:
    target_r_multiple = st.number_input(
        "Target R-Multiple (X)",
        min_value=0.5,
        step=0.5,
        key="param_target_r_multiple",
        help="Desired Risk-to-Reward ratio (e.g., 2.0).",
    )
with col3:
    total_trade_cost = st.number_input(
        "Est. Total Trade Cost ($)",
        min_value=0.0,
        step=0.01,
        key="param_total_trade_cost",
        help="Commissions/Slippage for the round-trip trade.",
    )

session.update_parameters(
    account_size=account_size,
    risk_percent=risk_percent,
    entry_price=entry_price,
    atr_stop_distance=atr_stop_distance,
    target_r_multiple=target_r_multiple,
    total_trade_cost=total_trade_cost,
)

if not session.check.is_valid:
    state.post_message(CALCULATOR, MessageLevel.ERROR, f"Error: {session.check.error}")
elif session.check.warnings:
    state.post_message(CALCULATOR, MessageLevel.WARNING, f"Warning: {session.check.warnings[0]}")
else:
    state.clear_message(CALCULATOR)

if st.button("⚙️ Save Settings as Default", disabled=context.settings_store is None):
    try:
        asyncio.run(
            context.settings_store.upsert(user_id, DefaultSettings.from_parameters(session.parameters))
        )
        state.post_message(
            SETTINGS, MessageLevel.SUCCESS, "Current inputs saved as default settings!", message_seconds
        )
    except (OSError, ValueError) as e:
        state.post_message(SETTINGS, MessageLevel.ERROR, f"Error saving defaults: {e}", message_seconds)
show_message(SETTINGS)

st.divider()

# --- 2. Pre-Trade Execution Summary ---
st.subheader("⚡ 2. Pre-Trade Execution Summary")
sizing = session.sizing

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("MAX SHARES TO BUY", f"{sizing.max_shares:,} Shares")
with col2:
    st.metric("MAX NET LOSS (Net Risk)", f"${sizing.net_risk:,.2f}")
with col3:
    st.metric(f"POTENTIAL NET GAIN ({target_r_multiple}R)", f"${sizing.net_gain:,.2f}")

if sizing.max_shares > 0:
    st.markdown(f"**Detailed Targets ({target_r_multiple}R)**")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Cost (Friction)", f"${sizing.total_cost:,.2f}")
    col2.metric("Stop Price", f"${sizing.stop_price:,.2f}")
    col3.metric(f"Target {target_r_multiple}R Price", f"${sizing.target_price:,.2f}")
    col4.metric("Net R-Multiple", f"{sizing.net_r_multiple:.2f}X")

session.set_ticker(st.session_state.get("ticker_input", session.ticker))

if st.button(
    "💾 SAVE TRADE TO JOURNAL",
    type="primary",
    disabled=not session.check.can_save or not manager.is_available,
):
    try:
        asyncio.run(
            manager.confirm_trade(user_id, session.parameters, session.ticker, session.sentiment_for_ticker)
        )
        state.post_message(
            SAVE,
            MessageLevel.SUCCESS,
            "Trade successfully logged to Journal! (Mark its result below)",
            message_seconds,
        )
        st.rerun()
    except (TradeRejectedError, MalformedRecordError, StoreUnavailableError) as e:
        state.post_message(SAVE, MessageLevel.ERROR, f"Error: {e}", message_seconds)
    except OSError as e:
        state.post_message(SAVE, MessageLevel.ERROR, f"Error logging trade: {e}", message_seconds)

show_message(CALCULATOR)
show_message(SAVE)

st.divider()

# --- 3. Market Sentiment Advisor ---
st.subheader("📰 3. Market Sentiment Advisor (Signal)")

col1, col2 = st.columns([1, 2])
with col1:
    st.text_input("Ticker", value=session.ticker, key="ticker_input", placeholder="Enter Ticker (e.g., QQQ)")
with col2:
    fetch_clicked = st.button("Get Sentiment Analysis", disabled=context.advisor is None)

if fetch_clicked:
    session.set_ticker(st.session_state["ticker_input"])
    with st.spinner("Analyzing News..."):
        try:
            session.set_sentiment(asyncio.run(context.advisor.fetch(session.ticker)))
            state.clear_message(ADVISOR)
        except (SentimentUnavailableError, ValueError) as e:
            state.post_message(ADVISOR, MessageLevel.ERROR, str(e))

advisor_error = state.message(ADVISOR)
if advisor_error is not None:
    st.error(advisor_error.text)
    if st.button("Dismiss", key="dismiss_advisor"):
        state.clear_message(ADVISOR)
        st.rerun()

if session.sentiment is not None:
    st.write(session.sentiment.text)
    if session.sentiment.has_sources:
        st.caption("Sources:")
        for source in session.sentiment.sources:
            st.markdown(f"- [{source.title}]({source.uri})")
elif advisor_error is None:
    st.caption("Enter a ticker to check the current market sentiment and direction.")

st.divider()

# --- 4. Strategy Performance Metrics ---
st.subheader("📊 4. Strategy Performance Metrics")
metrics = session.analytics.metrics

cols = st.columns(7)
cols[0].metric("Total Trades", metrics.total_trades)
cols[1].metric("Wins", metrics.wins)
cols[2].metric("Losses / Scratches", metrics.losses_and_scratches)
cols[3].metric("Win Rate", f"{metrics.win_rate:.1f}%")
cols[4].metric("Exp. Value ($/Trade)", f"{metrics.expected_value:.2f}")
cols[5].metric("Max Drawdown ($)", f"${metrics.max_drawdown_dollar:.2f}")
cols[6].metric("Max Drawdown (%)", f"{metrics.max_drawdown_percent:.1f}%")
st.caption("Expected Value is the key to long-term profitability. Aim for a positive number.")

st.divider()

# --- 5. Running Equity Curve ---
st.subheader("📈 5. Running Equity Curve (Performance Tracker)")
template = "plotly_dark" if settings.dashboard.theme == "dark" else "plotly_white"
curve = session.analytics.equity_curve

if curve.has_trades:
    st.plotly_chart(equity_curve_figure(curve, template), use_container_width=True)
else:
    st.info("Log trades and mark their results to build your equity curve.")

st.plotly_chart(r_distribution_figure(session.analytics.r_distribution, template), use_container_width=True)

st.divider()

# --- Trade Journal ---
st.subheader("🗂️ Trade Journal")

records = list(session.records)[-settings.dashboard.max_journal_rows:]
if not records:
    st.info("No trades logged yet.")

for record in reversed(records):
    status = state.row_status(record.id)
    cols = st.columns([2, 1, 1, 1, 1, 1, 1, 1])
    cols[0].markdown(
        f"**{record.ticker}** · {record.max_shares} sh @ ${record.entry_price:,.2f} · "
        f"{record.timestamp:%Y-%m-%d %H:%M}"
    )
    cols[1].markdown(f"Risk ${record.net_risk:,.2f}")
    cols[2].markdown(f"**{record.result.value}**")

    for col, result in zip(cols[3:6], (TradeResult.WIN, TradeResult.LOSS, TradeResult.SCRATCH)):
        if col.button(result.value, key=f"{result.value}-{record.id}", disabled=status is not None):
            state.set_row_status(record.id, RowStatus.LOADING)
            try:
                asyncio.run(manager.set_result(user_id, record.id, result))
                state.set_row_status(record.id, RowStatus.SUCCESS, settings.journal.update_status_seconds)
            except (RecordNotFoundError, StoreUnavailableError, OSError):
                state.set_row_status(record.id, RowStatus.ERROR, settings.journal.update_status_seconds)
            st.rerun()

    if cols[6].button("🗑️", key=f"delete-{record.id}", disabled=status is not None):
        state.set_row_status(record.id, RowStatus.DELETING)
        try:
            asyncio.run(manager.delete_trade(user_id, record.id))
            state.clear_row_status(record.id)
        except (RecordNotFoundError, StoreUnavailableError, OSError):
            state.set_row_status(record.id, RowStatus.ERROR, settings.journal.delete_status_seconds)
        st.rerun()

    if status is not None:
        cols[7].caption(status.value)

    if record.sentiment_text and record.sentiment_text != SENTIMENT_NOT_AVAILABLE:
        with st.expander(f"Sentiment snapshot · {record.ticker}"):
            st.write(record.sentiment_text)

if records:
    with st.expander("Journal table"):
        st.dataframe(journal_table(records), use_container_width=True, hide_index=True)
