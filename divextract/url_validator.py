import structlog
from urllib.parse import urlparse

logger = structlog.get_logger(__name__)

# Paths we never treat as HTML documents
SKIP_EXTENSIONS = (
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.svg', '.webp',  # Images
    '.mp4', '.avi', '.mov', '.wmv', '.flv', '.mkv',            # Videos
    '.mp3', '.wav', '.ogg', '.flac',                           # Audio
    '.zip', '.rar', '.tar', '.gz', '.7z',                      # Archives
    '.pdf', '.doc', '.docx', '.xls', '.xlsx', '.ppt', '.pptx'  # Documents
)


def validate_url(url: str) -> dict:
    if not url or not isinstance(url, str) or not url.strip():
        logger.warning("invalid_url_format", url=url)
        return {
            "valid": False,
            "reason": "Empty or invalid URL"
        }

    parsed = urlparse(url.strip())
    if parsed.scheme not in ['http', 'https']:
        logger.warning("invalid_url_scheme",
                      url=url,
                      scheme=parsed.scheme)
        return {
            "valid": False,
            "reason": f"Invalid scheme: {parsed.scheme or '(none)'}"
        }

    if not parsed.netloc:
        logger.warning("missing_url_host", url=url)
        return {
            "valid": False,
            "reason": "Missing host"
        }

    path_lower = parsed.path.lower()
    for ext in SKIP_EXTENSIONS:
        if path_lower.endswith(ext):
            logger.warning("skipping_file_type",
                          url=url,
                          extension=ext)
            return {
                "valid": False,
                "reason": f"Skipping file type: {ext}"
            }

    return {
        "valid": True,
        "reason": "Valid HTML URL"
    }
