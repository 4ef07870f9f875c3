"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .case_record import (
    CITATION_UNAVAILABLE,
    COURT_NOT_SPECIFIED,
    DATE_NOT_RECORDED,
    DESCRIPTION_UNAVAILABLE,
    JUDGES_UNAVAILABLE,
    MAJORITY_OPINION_UNAVAILABLE,
    SOURCE_UNAVAILABLE,
    TITLE_UNAVAILABLE,
    CaseRecord,
)
from .filter_criteria import FilterCriteria
from .page import MAX_PAGE_SIZE, PageRequest, PageResult

__all__ = [
    "CacheEntryEntity",
    "CaseRecord",
    "FilterCriteria",
    "PageRequest",
    "PageResult",
    "MAX_PAGE_SIZE",
    "TITLE_UNAVAILABLE",
    "DESCRIPTION_UNAVAILABLE",
    "DATE_NOT_RECORDED",
    "CITATION_UNAVAILABLE",
    "COURT_NOT_SPECIFIED",
    "MAJORITY_OPINION_UNAVAILABLE",
    "SOURCE_UNAVAILABLE",
    "JUDGES_UNAVAILABLE",
]
