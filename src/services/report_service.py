from typing import Union
from utils.patterns import PIIType, ReportSection, ScanFindings, ScanReport

MAX_EXAMPLES = 5

PII_TYPE_LABELS = {
    PIIType.EMAIL: "Email Addresses",
    PIIType.PHONE: "Phone Numbers",
    PIIType.SSN: "Social Security Numbers",
    PIIType.CREDIT_CARD: "Credit Card Numbers",
    PIIType.NAME: "Potential Names",
}

DISCLAIMER = (
    "**Note:** This scan provides potential PII matches and may include false positives. "
    "Please review the results carefully."
)


def format_pii_type(pii_type: Union[PIIType, str]) -> str:
    """Human-readable label for a category, or its raw identifier if unknown"""
    label = PII_TYPE_LABELS.get(pii_type)
    if label is not None:
        return label
    if isinstance(pii_type, PIIType):
        return pii_type.value
    return str(pii_type)


def build_scan_report(file_name: str, findings: ScanFindings) -> ScanReport:
    sections = tuple(
        ReportSection(
            label=format_pii_type(pii_type),
            count=len(matches),
            examples=tuple(matches[:MAX_EXAMPLES]),
        )
        for pii_type, matches in findings.items()
        if matches
    )
    return ScanReport(file_name=file_name, sections=sections)


def render_report(report: ScanReport) -> str:
    """Render a report as the markdown shown in the chat"""
    if not report.pii_found:
        return f"No PII detected in {report.file_name}."

    result = f"## PII Scan Results for: {report.file_name}\n\n"

    for section in report.sections:
        result += f"### {section.label}: {section.count} found\n"
        result += f"Examples: {', '.join(section.examples)}\n\n"

    result += DISCLAIMER

    return result


def format_scan_results(file_name: str, findings: ScanFindings) -> str:
    return render_report(build_scan_report(file_name, findings))
