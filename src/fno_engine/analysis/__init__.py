"""
Derivatives Analysis Package

This package turns an option chain and an optional futures contract into signals
and a single weighted recommendation.

Key exports:
- full_derivatives_analysis: End-to-end analysis returning an AnalysisResult
- analyze_option_chain, compute_max_pain: Chain analytics
- compute_pcr, classify_oi_buildup, analyze_oi_buildup: PCR and OI buildup
- analyze_futures_basis: Futures premium/discount
"""

from fno_engine.analysis.engine import full_derivatives_analysis
from fno_engine.analysis.futures_basis import analyze_futures_basis, days_to_expiry
from fno_engine.analysis.models import (
    AnalysisResult,
    AnalysisType,
    ChainAnalysis,
    FuturesBasisResult,
    OIBuildupAnalysis,
    OIBuildupData,
    OIBuildupType,
    OISupportResistance,
    PCRAnalysis,
    StrikeBuildup,
)
from fno_engine.analysis.option_chain import (
    analyze_option_chain,
    compute_max_pain,
    find_atm_strike,
)
from fno_engine.analysis.pcr_oi import analyze_oi_buildup, classify_oi_buildup, compute_pcr

__all__ = [
    "full_derivatives_analysis",
    "analyze_futures_basis",
    "days_to_expiry",
    "AnalysisResult",
    "AnalysisType",
    "ChainAnalysis",
    "FuturesBasisResult",
    "OIBuildupAnalysis",
    "OIBuildupData",
    "OIBuildupType",
    "OISupportResistance",
    "PCRAnalysis",
    "StrikeBuildup",
    "analyze_option_chain",
    "compute_max_pain",
    "find_atm_strike",
    "analyze_oi_buildup",
    "classify_oi_buildup",
    "compute_pcr",
]
