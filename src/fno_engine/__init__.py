"""
fno_engine - Derivatives (F&O) analytics.

Turns an option-chain / futures snapshot into signals, multi-leg strategies and a
single weighted recommendation.

Usage:
    from fno_engine import OptionChain, full_derivatives_analysis

    chain = OptionChain.model_validate(raw_chain)
    result = full_derivatives_analysis("NIFTY", chain, futures)
"""

from fno_engine.analysis import AnalysisResult, full_derivatives_analysis
from fno_engine.decisions import Recommendation, Signal, SignalType
from fno_engine.models import FuturesContract, OptionChain, OptionContract, OptionType
from fno_engine.strategy_builder import build_bull_call_spread, build_iron_condor

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "full_derivatives_analysis",
    "Recommendation",
    "Signal",
    "SignalType",
    "FuturesContract",
    "OptionChain",
    "OptionContract",
    "OptionType",
    "build_bull_call_spread",
    "build_iron_condor",
]
