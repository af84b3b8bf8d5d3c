"""Helix analysis: validation report, statistics and the run orchestration."""

from analysis.engine import AnalysisResult, run_analysis
from analysis.report import build_validation_report
from analysis.statistics import compute_statistics

__all__ = [
    "AnalysisResult",
    "build_validation_report",
    "compute_statistics",
    "run_analysis",
]
