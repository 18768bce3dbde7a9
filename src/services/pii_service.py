import re
from typing import Dict, List, Optional
from utils.patterns import PIIType, PatternRule, ScanFindings

# Basic name detection (two capitalized words in a row). Expect false positives.
NAME_PATTERN = r'\b[A-Z][a-z]+\s+[A-Z][a-z]+\b'

DEFAULT_PATTERNS: Dict[PIIType, str] = {
    PIIType.EMAIL: r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b',
    # [0-9] rather than \d: only ASCII digits count
    PIIType.PHONE: r'\b(?:\+[0-9]{1,2}\s?)?\(?[0-9]{3}\)?[\s.-]?[0-9]{3}[\s.-]?[0-9]{4}\b',
    PIIType.SSN: r'\b[0-9]{3}-?[0-9]{2}-?[0-9]{4}\b',
    PIIType.CREDIT_CARD: r'\b(?:[0-9]{4}[-\s]?){3}[0-9]{4}\b|\b[0-9]{16}\b',
    PIIType.NAME: NAME_PATTERN,
}

_CAPITALIZED_RUN = re.compile(r'\b[A-Z][a-z]+\b(?:\s+[A-Z][a-z]+\b)+')
_CAPITALIZED_WORD = re.compile(r'[A-Z][a-z]+')
_SENTENCE_END = '.!?'


def _dedupe(matches: List[str]) -> List[str]:
    return list(dict.fromkeys(matches))


def _opens_sentence(text: str, position: int) -> bool:
    i = position - 1
    while i >= 0 and text[i].isspace():
        i -= 1
    return i < 0 or text[i] in _SENTENCE_END


class RegexService:
    """Detects PII with one fixed regular expression per PIIType.

    Holds nothing but compiled patterns, so a single instance can be shared
    between concurrent scans.
    """

    def __init__(self, patterns: Optional[Dict[PIIType, str]] = None):
        if patterns is None:
            patterns = DEFAULT_PATTERNS
        self.rules = tuple(
            PatternRule(pii_type=pii_type, pattern=re.compile(patterns[pii_type]))
            for pii_type in PIIType
            if pii_type in patterns
        )

    def detect(self, text: str) -> ScanFindings:
        """Return the distinct matches of every category, in first-seen order"""
        text = text or ""
        matches = {}

        for rule in self.rules:
            if rule.pii_type is PIIType.NAME:
                found = self._find_names(rule, text)
            else:
                found = rule.find_all(text)
            matches[rule.pii_type] = _dedupe(found)

        return ScanFindings(matches=matches)

    def _find_names(self, rule: PatternRule, text: str) -> List[str]:
        """
        Pair runs of capitalized words left to right, the way the plain
        two-word pattern does, except that a sentence-opening word in front
        of a longer run ("Contact Jane Smith") is left unpaired.
        """
        names = []

        for run in _CAPITALIZED_RUN.finditer(text):
            words = [
                (run.start() + word.start(), run.start() + word.end())
                for word in _CAPITALIZED_WORD.finditer(run.group(0))
            ]
            if len(words) >= 3 and _opens_sentence(text, run.start()):
                words = words[1:]

            for first, second in zip(words[0::2], words[1::2]):
                candidate = text[first[0]:second[1]]
                # NAME_PATTERN must still match the pair on its own
                if rule.pattern.fullmatch(candidate):
                    names.append(candidate)

        return names


_default_service = RegexService()


def scan_text_for_pii(text: str) -> ScanFindings:
    return _default_service.detect(text)
