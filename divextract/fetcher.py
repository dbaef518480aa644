import time
import requests
import structlog
from typing import Optional

from divextract.url_validator import validate_url

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; divextract/1.0)'


class FetchResult:
    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        content: Optional[str] = None,
        final_url: str = None,
        fetch_time: float = 0.0,
        error: str = None,
    ):
        """Initialize a FetchResult with the response body and metadata."""
        self.url = url
        self.status_code = status_code
        self.content = content
        self.final_url = final_url or url
        self.fetch_time = fetch_time
        self.error = error

    @property
    def success(self) -> bool:
        """Check if the fetch was successful (no error and 2xx status code)."""
        return (
            self.error is None
            and self.status_code is not None
            and 200 <= self.status_code < 300
        )

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "content": self.content,
            "status_code": self.status_code,
            "error": self.error,
        }


def fetch_document(url: str, timeout: float, user_agent: str = None) -> FetchResult:
    """Fetch `url` and return its decoded body; failures come back on the result, not raised."""
    validation = validate_url(url)
    if not validation['valid']:
        return FetchResult(url=url, error=validation['reason'])

    headers = {
        'User-Agent': user_agent or DEFAULT_USER_AGENT,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    }
    start_time = time.time()

    try:
        logger.debug("sending_get_request", url=url, timeout_seconds=timeout)
        response = requests.get(
            url,
            timeout=timeout,
            allow_redirects=True,
            headers=headers,
        )
    except requests.Timeout:
        logger.warning("request_timeout",
                      url=url,
                      timeout_seconds=timeout)
        return FetchResult(url=url, error="Request timeout")
    except requests.ConnectionError as e:
        logger.warning("connection_error",
                      url=url,
                      error=str(e))
        return FetchResult(url=url, error="Connection error")
    except requests.RequestException as e:
        logger.error("request_failed",
                    url=url,
                    error=str(e))
        return FetchResult(url=url, error=f"Request failed: {e}")

    fetch_time = time.time() - start_time

    if not 200 <= response.status_code < 300:
        logger.warning("unexpected_status_code",
                      url=url,
                      status_code=response.status_code)
        return FetchResult(
            url=url,
            status_code=response.status_code,
            final_url=response.url,
            fetch_time=fetch_time,
            error=f"HTTP {response.status_code}",
        )

    body = response.text
    if not body or not body.strip():
        logger.warning("empty_response_body", url=url)
        return FetchResult(
            url=url,
            status_code=response.status_code,
            final_url=response.url,
            fetch_time=fetch_time,
            error="Empty response body",
        )

    logger.info("document_fetched",
               url=url,
               status_code=response.status_code,
               length=len(body),
               fetch_time=round(fetch_time, 3))

    return FetchResult(
        url=url,
        status_code=response.status_code,
        content=body,
        final_url=response.url,
        fetch_time=fetch_time,
    )
