import asyncio
import base64
import binascii
import logging
from typing import Tuple, Union
from services.extraction_service import PDFTextExtractor
from services.pii_service import RegexService
from services.report_service import format_scan_results
from utils.errors import ExtractionError, InternalError, PIIScanError, UnsupportedTypeError

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Declared MIME types are matched by substring, e.g. "application/pdf"
SUPPORTED_FILE_TYPES: Tuple[str, ...] = ("pdf",)

SCAN_ERROR_MESSAGE = "Error processing the file. Please try again with a different file."


def is_supported_file_type(file_type: str) -> bool:
    file_type = (file_type or "").lower()
    return any(supported in file_type for supported in SUPPORTED_FILE_TYPES)


def decode_file_data(file_data: Union[str, bytes]) -> bytes:
    """Decode a base64 payload, with or without a data URL prefix (data:<type>;base64,)"""
    if isinstance(file_data, bytes):
        try:
            file_data = file_data.decode("ascii")
        except UnicodeDecodeError as e:
            raise ExtractionError("File payload is not valid base64") from e

    payload = file_data.strip()
    if payload.startswith("data:"):
        if "," not in payload:
            raise ExtractionError("Malformed data URL")
        payload = payload.split(",", 1)[1]

    if not payload:
        raise ExtractionError("Empty file payload")

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ExtractionError("File payload is not valid base64") from e


class ScanService:
    """Scans uploaded documents for PII and produces the chat report"""

    def __init__(self, extractor: PDFTextExtractor = None, detector: RegexService = None):
        self.extractor = extractor or PDFTextExtractor()
        self.detector = detector or RegexService()

    async def scan(self, file_data: Union[str, bytes], file_name: str, file_type: str) -> str:
        """
        Run one scan and return the report text.

        Raises:
            UnsupportedTypeError: Declared type is not one we can extract
            ExtractionError: Payload could not be decoded or converted to text
            InternalError: Detection or formatting failed
        """
        if not is_supported_file_type(file_type):
            raise UnsupportedTypeError(file_type)

        data = decode_file_data(file_data)

        # Extraction blocks, keep it off the event loop
        text = await asyncio.to_thread(self.extractor.extract_text, data, file_name)

        try:
            findings = self.detector.detect(text)
            counts = {pii_type.name: count for pii_type, count in findings.counts().items()}
            logger.info(f"PII counts for {file_name}: {counts}")
            return format_scan_results(file_name, findings)
        except Exception as e:
            raise InternalError("Failed to build PII report", {"file_name": file_name}) from e

    async def handle_pii_scan(self, file_data: Union[str, bytes], file_name: str, file_type: str) -> str:
        """Scan a document and always return a message that can be shown to the user"""
        logger.info(f"Starting PII scan: file={file_name}, type={file_type}")
        try:
            report = await self.scan(file_data, file_name, file_type)
        except UnsupportedTypeError as e:
            logger.warning(f"Rejected upload {file_name}: {e}")
            return e.message
        except PIIScanError as e:
            logger.error(f"Error during PII scan: {e}", exc_info=True)
            return SCAN_ERROR_MESSAGE
        except Exception as e:
            logger.error(f"Unexpected error during PII scan: {e}", exc_info=True)
            return SCAN_ERROR_MESSAGE

        logger.info(f"PII scan complete: file={file_name}")
        return report
