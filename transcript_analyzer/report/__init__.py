from .aggregator import ReportAggregator, ReportSettings, build_report

__all__ = ["ReportAggregator", "ReportSettings", "build_report"]
