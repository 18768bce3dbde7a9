import asyncio
import base64

import pytest

from services.pii_service import RegexService
from services.scan_service import (
    SCAN_ERROR_MESSAGE,
    ScanService,
    decode_file_data,
    is_supported_file_type,
)
from utils.errors import ExtractionError, InternalError, UnsupportedTypeError

PDF_BYTES = b"%PDF-1.4 fake document"
SCENARIO_TEXT = "Contact Jane Smith at jane@example.com or 555-123-4567. SSN 123-45-6789."


def data_url(data: bytes, file_type: str = "application/pdf") -> str:
    return f"data:{file_type};base64,{base64.b64encode(data).decode('ascii')}"


class FakeExtractor:
    def __init__(self, text: str = "", error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    def extract_text(self, data: bytes, file_name: str = "document.pdf") -> str:
        self.calls.append((data, file_name))
        if self.error is not None:
            raise self.error
        return self.text


class SpyDetector(RegexService):
    def __init__(self, error: Exception = None):
        super().__init__()
        self.error = error
        self.calls = 0

    def detect(self, text):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return super().detect(text)


def run_scan(service, file_data, file_name="doc.pdf", file_type="application/pdf"):
    return asyncio.run(service.handle_pii_scan(file_data, file_name, file_type))


def test_pdf_scan_returns_report():
    extractor = FakeExtractor(text=SCENARIO_TEXT)
    service = ScanService(extractor=extractor)

    report = run_scan(service, data_url(PDF_BYTES))

    assert report.startswith("## PII Scan Results for: doc.pdf")
    assert "### Potential Names: 1 found\nExamples: Jane Smith" in report
    assert extractor.calls == [(PDF_BYTES, "doc.pdf")]


def test_bare_base64_payload_is_accepted():
    extractor = FakeExtractor(text="")
    service = ScanService(extractor=extractor)

    report = run_scan(service, base64.b64encode(PDF_BYTES).decode("ascii"))

    assert report == "No PII detected in doc.pdf."
    assert extractor.calls[0][0] == PDF_BYTES


def test_unsupported_type_skips_detection():
    extractor = FakeExtractor(text=SCENARIO_TEXT)
    detector = SpyDetector()
    service = ScanService(extractor=extractor, detector=detector)

    message = run_scan(service, data_url(b"\x89PNG", "image/png"), "photo.png", "image/png")

    assert message == "Unsupported file type: image/png. Please upload a PDF document."
    assert detector.calls == 0
    assert extractor.calls == []


def test_extraction_failure_returns_generic_message():
    extractor = FakeExtractor(error=ExtractionError("docling blew up", {"page": 3}))
    service = ScanService(extractor=extractor)

    assert run_scan(service, data_url(PDF_BYTES)) == SCAN_ERROR_MESSAGE


def test_unexpected_extractor_error_details_are_not_leaked():
    extractor = FakeExtractor(error=RuntimeError("secret internal path /srv/tmp"))
    service = ScanService(extractor=extractor)

    message = run_scan(service, data_url(PDF_BYTES))

    assert message == SCAN_ERROR_MESSAGE
    assert "secret" not in message


@pytest.mark.parametrize("payload", [
    "data:application/pdf;base64,not*base64!",
    "data:application/pdf;base64,",
    "",
    "data:application/pdf",
    b"\xff\xfe raw bytes",
])
def test_bad_payloads_return_generic_message(payload):
    extractor = FakeExtractor(text=SCENARIO_TEXT)
    service = ScanService(extractor=extractor)

    assert run_scan(service, payload) == SCAN_ERROR_MESSAGE
    assert extractor.calls == []


def test_detector_failure_returns_generic_message():
    service = ScanService(
        extractor=FakeExtractor(text=SCENARIO_TEXT),
        detector=SpyDetector(error=ValueError("boom")),
    )

    assert run_scan(service, data_url(PDF_BYTES)) == SCAN_ERROR_MESSAGE


def test_scan_raises_typed_errors():
    service = ScanService(
        extractor=FakeExtractor(text=SCENARIO_TEXT),
        detector=SpyDetector(error=ValueError("boom")),
    )

    with pytest.raises(UnsupportedTypeError) as excinfo:
        asyncio.run(service.scan(data_url(PDF_BYTES), "doc.txt", "text/plain"))
    assert excinfo.value.file_type == "text/plain"

    with pytest.raises(InternalError):
        asyncio.run(service.scan(data_url(PDF_BYTES), "doc.pdf", "application/pdf"))


def test_failed_scan_does_not_affect_next_scan():
    extractor = FakeExtractor(error=RuntimeError("corrupt"))
    service = ScanService(extractor=extractor)
    assert run_scan(service, data_url(PDF_BYTES)) == SCAN_ERROR_MESSAGE

    extractor.error = None
    extractor.text = "write to jane@example.com"

    assert "### Email Addresses: 1 found" in run_scan(service, data_url(PDF_BYTES))


def test_concurrent_scans_are_independent():
    class TextByName:
        def extract_text(self, data, file_name="document.pdf"):
            return {"a.pdf": "a@a.com", "b.pdf": "b@b.com"}[file_name]

    service = ScanService(extractor=TextByName())

    async def scan_both():
        return await asyncio.gather(
            service.handle_pii_scan(data_url(PDF_BYTES), "a.pdf", "application/pdf"),
            service.handle_pii_scan(data_url(PDF_BYTES), "b.pdf", "application/pdf"),
        )

    report_a, report_b = asyncio.run(scan_both())

    assert "a@a.com" in report_a and "b@b.com" not in report_a
    assert "b@b.com" in report_b and "a@a.com" not in report_b


@pytest.mark.parametrize("file_type, supported", [
    ("application/pdf", True),
    ("APPLICATION/PDF", True),
    ("application/x-pdf", True),
    ("image/png", False),
    ("text/plain", False),
    ("", False),
    (None, False),
])
def test_is_supported_file_type(file_type, supported):
    assert is_supported_file_type(file_type) is supported


def test_decode_file_data_variants():
    encoded = base64.b64encode(PDF_BYTES)

    assert decode_file_data(data_url(PDF_BYTES)) == PDF_BYTES
    assert decode_file_data(encoded.decode("ascii")) == PDF_BYTES
    assert decode_file_data(encoded) == PDF_BYTES
    assert decode_file_data(f"  {encoded.decode('ascii')}\n") == PDF_BYTES


def test_decode_file_data_rejects_garbage():
    with pytest.raises(ExtractionError):
        decode_file_data("%%%")
