from .config import AppConfig, get_settings, reload_settings
from .domain import Cue, Report, ReportRow, ReportSummary, SemanticResult, WordLists
from .lexical import load_word_lists, score
from .report import ReportAggregator, ReportSettings, build_report
from .transcript import read_captions, segment
