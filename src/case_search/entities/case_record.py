"""Case record domain entity."""

from dataclasses import dataclass

# Placeholder values for fields the upstream source left empty. Every field of
# a CaseRecord is a plain string, so matching code can call string methods on
# any of them unconditionally.
TITLE_UNAVAILABLE = "Title unavailable"
DESCRIPTION_UNAVAILABLE = "No description available"
DATE_NOT_RECORDED = "Date not recorded"
CITATION_UNAVAILABLE = "Citation unavailable"
COURT_NOT_SPECIFIED = "Court not specified"
MAJORITY_OPINION_UNAVAILABLE = "Majority opinion unavailable"
SOURCE_UNAVAILABLE = "Source unavailable"
JUDGES_UNAVAILABLE = "Judges unavailable"


@dataclass(frozen=True)
class CaseRecord:
    """Immutable snapshot of one court case.

    Attributes:
        case_id: Stable unique identifier (never empty)
        title: Case name
        description: Short description of the case
        date: ISO calendar date (YYYY-MM-DD) or DATE_NOT_RECORDED
        citation: Legal citation
        court: Court that decided the case
        majority_opinion: Author of the majority opinion
        source_label: Law report the case was published in
        judges: Comma-joined judge names or JUDGES_UNAVAILABLE
        article_url: Link to the upstream entity
    """

    case_id: str
    title: str = TITLE_UNAVAILABLE
    description: str = DESCRIPTION_UNAVAILABLE
    date: str = DATE_NOT_RECORDED
    citation: str = CITATION_UNAVAILABLE
    court: str = COURT_NOT_SPECIFIED
    majority_opinion: str = MAJORITY_OPINION_UNAVAILABLE
    source_label: str = SOURCE_UNAVAILABLE
    judges: str = JUDGES_UNAVAILABLE
    article_url: str = ""

    def __post_init__(self) -> None:
        if not self.case_id:
            raise ValueError("case_id must not be empty")

    @property
    def has_judges(self) -> bool:
        """Whether the judges field holds real names."""
        return self.judges != JUDGES_UNAVAILABLE
