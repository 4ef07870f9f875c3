"""Filter criteria value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FilterCriteria:
    """Optional constraints for the advanced filter path.

    A field left as None places no constraint on that axis. Text fields are
    normalized (trimmed, lowercased, empty -> None) on construction, so two
    criteria that match the same records compare equal.
    """

    keyword: str | None = None
    year: str | None = None
    judge: str | None = None
    case_type: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "keyword", _normalize(self.keyword, lower=True))
        object.__setattr__(self, "year", _normalize(self.year))
        object.__setattr__(self, "judge", _normalize(self.judge, lower=True))
        object.__setattr__(self, "case_type", _normalize(self.case_type, lower=True))

    @property
    def is_empty(self) -> bool:
        """True when no criterion is present."""
        return not (self.keyword or self.year or self.judge or self.case_type)


def _normalize(value: str | None, lower: bool = False) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    return value.lower() if lower else value
