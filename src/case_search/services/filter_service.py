"""Record matching for the search and filter paths.

Pure, side-effect-free functions. Matching is case-insensitive substring
containment; there is no ranking. Output order always equals input order.
"""

import re
from collections.abc import Callable, Iterable
from datetime import date

from case_search.entities import DATE_NOT_RECORDED, CaseRecord, FilterCriteria
from case_search.exceptions import ValidationError

RecordPredicate = Callable[[CaseRecord], bool]

MIN_YEAR = 1900

_YEAR_PATTERN = re.compile(r"[0-9]{4}")

# Synonym keywords per case type. A record matches a type if any keyword
# occurs in its title, description, citation or majority opinion.
CASE_TYPE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "criminal": (
        "criminal", "murder", "theft", "robbery", "assault", "fraud", "homicide",
        "manslaughter", "rape", "burglary", "kidnapping", "drug", "narcotic",
        "offence", "offense", "prosecution", "conviction", "sentence", "penal", "prison",
    ),
    "civil": (
        "civil", "contract", "tort", "negligence", "damages", "compensation",
        "liability", "breach", "plaintiff", "defendant", "suit", "claim",
    ),
    "constitutional": (
        "constitutional", "constitution", "fundamental", "rights", "human rights",
        "freedom", "liberty", "democracy", "election", "vote", "amendment", "charter",
    ),
    "administrative": (
        "administrative", "administrator", "government", "public", "authority",
        "agency", "regulation", "policy", "executive", "minister", "department",
    ),
    "commercial": (
        "commercial", "business", "trade", "company", "corporation", "partnership",
        "merchant", "sale", "purchase", "transaction", "commerce", "corporate",
    ),
    "family": (
        "family", "divorce", "marriage", "custody", "child", "parent", "adoption",
        "maintenance", "alimony", "spouse", "matrimonial", "domestic",
    ),
    "labor": (
        "labor", "labour", "employment", "employee", "employer", "work", "worker",
        "union", "strike", "wage", "salary", "dismissal", "termination", "industrial",
    ),
    "property": (
        "property", "land", "real estate", "ownership", "title", "deed", "lease",
        "leasehold", "freehold", "mortgage", "tenancy", "landlord", "tenant",
        "eviction", "possession", "acquisition", "compulsory", "expropriation",
        "conveyance", "transfer", "purchase", "sale", "immovable", "realty",
    ),
}


def validate_year(year: str | None, today: date | None = None) -> int | None:
    """Parse and range-check a year filter.

    Args:
        year: Raw year text; None or blank means "no year constraint"
        today: Reference date for the upper bound. Defaults to date.today().

    Returns:
        The year as an int, or None if no year was given

    Raises:
        ValidationError: If the year is not four digits in [1900, current year + 1]
    """
    if year is None or not year.strip():
        return None

    year = year.strip()
    max_year = (today or date.today()).year + 1
    message = (
        f"Invalid year format. Year must be a number between {MIN_YEAR} "
        f"and {max_year} (e.g., 2020)"
    )

    if not _YEAR_PATTERN.fullmatch(year):
        raise ValidationError(message, details={"year": year})

    value = int(year)
    if not MIN_YEAR <= value <= max_year:
        raise ValidationError(message, details={"year": year})

    return value


def record_year(record: CaseRecord) -> int | None:
    """Calendar year of a record's date, or None if it cannot be parsed."""
    if record.date == DATE_NOT_RECORDED:
        return None
    try:
        return date.fromisoformat(record.date[:10]).year
    except ValueError:
        return None


def keywords_for_case_type(case_type: str) -> tuple[str, ...]:
    """Expand a case type to its synonym keywords.

    Unknown types fall back to the type text itself as the only keyword.
    """
    case_type = case_type.strip().lower()
    return CASE_TYPE_KEYWORDS.get(case_type, (case_type,))


def build_search_predicate(query: str) -> RecordPredicate:
    """Predicate for the plain search path.

    Matches if the query occurs in the title, description, judges,
    citation or court of a record.
    """
    needle = query.strip().lower()

    def matches(record: CaseRecord) -> bool:
        return (
            needle in record.title.lower()
            or needle in record.description.lower()
            or needle in record.judges.lower()
            or needle in record.citation.lower()
            or needle in record.court.lower()
        )

    return matches


def matches_keyword(record: CaseRecord, keyword: str) -> bool:
    """Keyword criterion: title, description, citation or court contains it."""
    needle = keyword.lower()
    return (
        needle in record.title.lower()
        or needle in record.description.lower()
        or needle in record.citation.lower()
        or needle in record.court.lower()
    )


def matches_year(record: CaseRecord, year: int) -> bool:
    """Year criterion. Records with unparsable dates never match."""
    return record_year(record) == year


def matches_judge(record: CaseRecord, judge: str) -> bool:
    """Judge criterion. Records without judge data never match."""
    if not record.has_judges:
        return False
    return judge.lower() in record.judges.lower()


def matches_case_type(record: CaseRecord, keywords: Iterable[str]) -> bool:
    """Case type criterion over title, description, citation and majority opinion."""
    text = " ".join(
        (record.title, record.description, record.citation, record.majority_opinion)
    ).lower()
    return any(keyword in text for keyword in keywords)


def build_filter_predicate(criteria: FilterCriteria) -> RecordPredicate:
    """Predicate for the advanced filter path.

    Every present criterion must hold (logical AND). A year that does not
    parse as an integer matches nothing; use validate_year() beforehand to
    reject it instead.
    """
    checks: list[RecordPredicate] = []

    if criteria.keyword:
        keyword = criteria.keyword
        checks.append(lambda record: matches_keyword(record, keyword))

    if criteria.year:
        try:
            year = int(criteria.year)
        except ValueError:
            return lambda record: False
        checks.append(lambda record: matches_year(record, year))

    if criteria.judge:
        judge = criteria.judge
        checks.append(lambda record: matches_judge(record, judge))

    if criteria.case_type:
        keywords = keywords_for_case_type(criteria.case_type)
        checks.append(lambda record: matches_case_type(record, keywords))

    def matches(record: CaseRecord) -> bool:
        return all(check(record) for check in checks)

    return matches


def search(records: list[CaseRecord], query: str | None) -> list[CaseRecord]:
    """Keep records matching a single keyword.

    An empty query is a no-op: every record is returned in order.
    """
    if not query or not query.strip():
        return list(records)
    predicate = build_search_predicate(query)
    return [record for record in records if predicate(record)]


def filter_records(records: list[CaseRecord], criteria: FilterCriteria) -> list[CaseRecord]:
    """Keep records satisfying every present criterion.

    Criteria with no fields set are a no-op.
    """
    if criteria.is_empty:
        return list(records)
    predicate = build_filter_predicate(criteria)
    return [record for record in records if predicate(record)]
