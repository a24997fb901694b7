"""
Configuration Module

This module provides configuration classes for the derivatives analytics.
"""

from fno_engine.config.analysis_config import AnalysisConfig, load_analysis_config

__all__ = ["AnalysisConfig", "load_analysis_config"]
