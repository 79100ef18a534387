from .contracts import (
    AnalysisOptions,
    AnalyzeCallable,
    ExternalServiceFailure,
    SemanticAnalyzer,
    speaker_options,
    summary_options,
)
from .response_cache import ResponseCache
from .watson import WatsonAnalyzer, parse_analysis

__all__ = [
    "AnalysisOptions",
    "AnalyzeCallable",
    "ExternalServiceFailure",
    "ResponseCache",
    "SemanticAnalyzer",
    "WatsonAnalyzer",
    "parse_analysis",
    "speaker_options",
    "summary_options",
]
