"""Starter script and insertable snippets."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

DEFAULT_SCRIPT = """//@version=5
strategy("My Strategy", overlay=true, margin_long=100, margin_short=100)

// Input parameters
length = input.int(14, title="Length")
source = input(close, title="Source")

// Calculate indicators
rsiValue = ta.rsi(source, length)
smaValue = ta.sma(source, length)

// Entry conditions
longCondition = ta.crossover(rsiValue, 30)
shortCondition = ta.crossunder(rsiValue, 70)

// Strategy entries
if (longCondition)
    strategy.entry("Long", strategy.long)

if (shortCondition)
    strategy.entry("Short", strategy.short)

// Plot indicators
plot(smaValue, color=color.blue, title="SMA")
hline(70, "Overbought", color=color.red)
hline(30, "Oversold", color=color.green)

// Plot RSI in separate pane
rsiPlot = plot(rsiValue, title="RSI", color=color.purple)
hline(50, "Midline", color=color.gray)"""

SNIPPETS: Mapping[str, str] = MappingProxyType(
    {
        "SMA": "ta.sma(close, 20)",
        "EMA": "ta.ema(close, 21)",
        "RSI": "ta.rsi(close, 14)",
        "MACD": "ta.macd(close, 12, 26, 9)",
        "Bollinger Bands": "ta.bb(close, 20, 2)",
        "Long Entry": 'strategy.entry("Long", strategy.long)',
        "Short Entry": 'strategy.entry("Short", strategy.short)',
        "Plot Line": 'plot(close, title="Price", color=color.blue)',
    }
)

__all__ = ["DEFAULT_SCRIPT", "SNIPPETS"]
