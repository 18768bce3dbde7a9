import re
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple


class PIIType(Enum):
    """Categories of PII the regex scanner looks for, in report order"""
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    SSN = "SSN"
    CREDIT_CARD = "CREDIT_CARD"
    NAME = "NAME"


@dataclass(frozen=True)
class PatternRule:
    """Associates a PII category with the regular expression that detects it"""
    pii_type: PIIType
    pattern: re.Pattern

    def find_all(self, text: str) -> List[str]:
        return [match.group(0) for match in self.pattern.finditer(text)]


@dataclass
class ScanFindings:
    """Distinct matches per PII category for a single scan.

    Every category is always present, in PIIType order, so iterating the
    findings gives the same category order the report uses.
    """
    matches: Dict[PIIType, List[str]] = field(default_factory=dict)

    def __post_init__(self):
        self.matches = {
            pii_type: list(self.matches.get(pii_type, []))
            for pii_type in PIIType
        }

    def __getitem__(self, pii_type: PIIType) -> List[str]:
        return self.matches[pii_type]

    def __iter__(self) -> Iterator[PIIType]:
        return iter(self.matches)

    def __len__(self) -> int:
        return len(self.matches)

    def items(self) -> Iterator[Tuple[PIIType, List[str]]]:
        return iter(self.matches.items())

    @property
    def has_pii(self) -> bool:
        return any(self.matches.values())

    def counts(self) -> Dict[PIIType, int]:
        return {pii_type: len(found) for pii_type, found in self.matches.items()}


@dataclass(frozen=True)
class ReportSection:
    label: str
    count: int
    examples: Tuple[str, ...]


@dataclass(frozen=True)
class ScanReport:
    """Structured form of a PII scan report"""
    file_name: str
    sections: Tuple[ReportSection, ...] = ()

    @property
    def pii_found(self) -> bool:
        return len(self.sections) > 0
