import asyncio
import base64
import logging
import sys
from pathlib import Path
from services.pii_service import scan_text_for_pii
from services.report_service import format_scan_results
from services.scan_service import ScanService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

SAMPLE_TEXT = (
    "Contact Jane Smith at jane@example.com or 555-123-4567. SSN 123-45-6789. "
    "Card on file: 4111 1111 1111 1111."
)


async def scan_file(path: Path) -> str:
    file_data = base64.b64encode(path.read_bytes()).decode("ascii")
    file_type = "application/pdf" if path.suffix.lower() == ".pdf" else "application/octet-stream"
    return await ScanService().handle_pii_scan(
        file_data=file_data,
        file_name=path.name,
        file_type=file_type,
    )


async def main():
    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
        if not path.is_file():
            print(f"File not found: {path}")
            return
        print(('=' * 30) + f' PII SCAN: {path.name} ' + ('=' * 30))
        print(await scan_file(path))
        return

    print(('=' * 30) + ' SAMPLE TEXT PII SCAN ' + ('=' * 30))
    print(f"Text: {SAMPLE_TEXT}\n")
    print(format_scan_results("sample.txt", scan_text_for_pii(SAMPLE_TEXT)))


if __name__ == "__main__":
    # Scan a PDF: python src/main.py path/to/file.pdf
    asyncio.run(main())
