"""Plotly figures and tables for the dashboard."""
import pandas as pd
import plotly.graph_objects as go

from src.journal.models import EquityCurve, RMultipleBucket, TradeRecord

JOURNAL_COLUMNS = [
    "Date",
    "Ticker",
    "Shares",
    "Entry",
    "Stop Dist.",
    "Gross Risk",
    "Net Risk",
    "Net Gain",
    "Target R",
    "Result",
]


def equity_curve_figure(curve: EquityCurve, template: str = "plotly_white") -> go.Figure:
    """Line chart of equity and high-water mark by trade number."""
    trade_numbers = [p.trade_number for p in curve.points]
    hover = [
        f"{p.ticker} {p.result.value}: ${p.realized_gain:,.2f}" if p.result else "Start"
        for p in curve.points
    ]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=trade_numbers,
            y=[p.equity for p in curve.points],
            mode="lines+markers",
            name="Equity",
            text=hover,
            line=dict(color="#4F46E5", width=3),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=trade_numbers,
            y=[p.high_water_mark for p in curve.points],
            mode="lines",
            name="High-Water Mark",
            line=dict(color="#10B981", dash="dash"),
        )
    )
    fig.update_layout(
        title="Running Equity Curve",
        xaxis_title="Trade Number",
        yaxis_title="Equity ($)",
        template=template,
    )
    return fig


def r_distribution_figure(
    buckets: list[RMultipleBucket], template: str = "plotly_white"
) -> go.Figure:
    """Bar chart of closed trades per R-multiple bucket."""
    fig = go.Figure(
        data=[
            go.Bar(
                x=[b.label for b in buckets],
                y=[b.count for b in buckets],
                marker_color=[b.color for b in buckets],
            )
        ]
    )
    fig.update_layout(
        title="R-Multiple Distribution",
        xaxis_title="Realized R",
        yaxis_title="Trades",
        template=template,
    )
    return fig


def journal_table(records: list[TradeRecord]) -> pd.DataFrame:
    """Journal rows, newest first, for display."""
    rows = [
        {
            "Date": r.timestamp.strftime("%Y-%m-%d %H:%M"),
            "Ticker": r.ticker,
            "Shares": r.max_shares,
            "Entry": r.entry_price,
            "Stop Dist.": r.atr_stop_distance,
            "Gross Risk": r.total_risk_amount,
            "Net Risk": r.net_risk,
            "Net Gain": r.net_gain,
            "Target R": r.target_r_multiple,
            "Result": r.result.value,
        }
        for r in reversed(records)
    ]
    return pd.DataFrame(rows, columns=JOURNAL_COLUMNS)
