"""Pure analysis logic: field extraction, normalization, merging, fallback.

Nothing in this package performs I/O or talks to a provider; it operates on
dicts, strings and :class:`AnalysisRecord` values only.
"""

from .extractor import extract_int, extract_list, extract_list_or_scalar, extract_mapping, extract_string
from .fallback import synthesize
from .job_query import build_job_search_query
from .merger import merge, merge_all
from .normalizer import normalize
from .record import AnalysisRecord, DetailedAnalysis

__all__ = [
    # Record
    "AnalysisRecord",
    "DetailedAnalysis",
    # Extractor
    "extract_list",
    "extract_list_or_scalar",
    "extract_string",
    "extract_mapping",
    "extract_int",
    # Pipeline
    "normalize",
    "merge",
    "merge_all",
    "synthesize",
    "build_job_search_query",
]
