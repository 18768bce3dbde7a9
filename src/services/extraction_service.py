import logging
from io import BytesIO
from docling.datamodel.base_models import DocumentStream, InputFormat
from docling.document_converter import DocumentConverter
from utils.errors import ExtractionError

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    """Turns raw PDF bytes into plain text using docling"""

    def __init__(self, converter: DocumentConverter = None):
        self.converter = converter or DocumentConverter(allowed_formats=[InputFormat.PDF])

    def extract_text(self, data: bytes, file_name: str = "document.pdf") -> str:
        """
        Extract the text content of a PDF document

        Args:
            data: Decoded PDF bytes
            file_name: Name reported to docling; it uses the extension to pick a backend

        Returns:
            The document text

        Raises:
            ExtractionError: If the bytes are empty or docling cannot convert them
        """
        if not data:
            raise ExtractionError("Empty document payload", {"file_name": file_name})

        if not file_name.lower().endswith(".pdf"):
            file_name = f"{file_name}.pdf"

        try:
            source = DocumentStream(name=file_name, stream=BytesIO(data))
            result = self.converter.convert(source)
            text = result.document.export_to_text()
        except Exception as e:
            raise ExtractionError(
                "Failed to extract text from document",
                {"file_name": file_name, "error": type(e).__name__},
            ) from e

        logger.info(f"Extracted {len(text)} characters from {file_name}")
        return text
