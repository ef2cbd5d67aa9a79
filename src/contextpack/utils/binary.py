"""Binary content detection for the plain-text extractor."""

from pathlib import Path

# Extensions that never hold readable text
BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt", ".ods",
    ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
    ".exe", ".dll", ".so", ".dylib", ".bin",
    ".mp3", ".mp4", ".avi", ".mov", ".wav", ".flac", ".mkv", ".webm",
    ".db", ".sqlite", ".sqlite3",
}

# Printable ASCII plus tab, LF, CR
_TEXT_BYTES = set(range(32, 127)) | {9, 10, 13}


def is_binary_extension(file_name: str) -> bool:
    """Check if the file extension indicates binary content."""
    return Path(file_name).suffix.lower() in BINARY_EXTENSIONS


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Detect binary content from null bytes and the share of control bytes.

    Bytes >= 0x80 are not counted against the sample so that UTF-8 encoded
    prose in other languages still reads as text.
    """
    if not content:
        return False

    sample = content[:sample_size]
    if b"\x00" in sample:
        return True

    control = sum(1 for byte in sample if byte < 128 and byte not in _TEXT_BYTES)
    return (control / len(sample)) > 0.30
