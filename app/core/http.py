import httpx
from app.config import settings


class HttpClient:
    """Process-wide httpx client for the ledger webapp and the n8n workflow."""

    _client: httpx.Client = None

    @classmethod
    def get_client(cls) -> httpx.Client:
        if cls._client is None:
            # Apps Script answers POST with a 302 to the result page
            cls._client = httpx.Client(
                timeout=settings.http_timeout_seconds,
                follow_redirects=True,
            )
        return cls._client

    @classmethod
    def close(cls):
        if cls._client is not None:
            cls._client.close()
            cls._client = None


def get_http_client() -> httpx.Client:
    return HttpClient.get_client()
