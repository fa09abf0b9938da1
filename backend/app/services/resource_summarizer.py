"""LLM summaries of saved second-brain resources (web pages, images, files)."""
from __future__ import annotations

import logging
import re
from typing import Optional

import httpx

from app.core.config import settings
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.ai_client import AIClientConfig, AIClientError, GenerativeClient

logger = logging.getLogger(__name__)

RESOURCE_SUMMARY_FAILURE = "Failed to summarize resource"
MAX_WEBSITE_CHARS = 50_000
BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_STYLE_BLOCK = re.compile(r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")

WEBSITE_PROMPT = (
    "You are a helpful research assistant. Summarize the following website content comprehensively. "
    "Extract the main ideas and highlight the BEST points or takeaways from the resource. "
    "Keep it structured and easy to read.\n\n"
    "Website Content Limit Reached:\n"
)
IMAGE_PROMPT = (
    "You are a helpful assistant. Analyze this image carefully. Summarize its contents, any readable text, "
    "and highlight the most important visual information or takeaways."
)
FILE_PROMPT = (
    "You are a helpful research assistant. Analyze this document. Summarize its key contents and highlight "
    "the BEST points, main arguments, or most important takeaways."
)


class ResourceSummaryError(RuntimeError):
    """Raised for any failure while summarizing a resource."""


def html_to_text(html: str) -> str:
    """Drop script/style blocks and tags, then collapse whitespace."""
    text = _STYLE_BLOCK.sub("", _SCRIPT_BLOCK.sub("", html))
    text = _TAG.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def strip_data_uri_prefix(content: str) -> str:
    """``data:image/png;base64,AAAA`` -> ``AAAA``; bare base64 passes through."""
    if "base64," in content:
        return content.split("base64,", 1)[1]
    return content


def fetch_website_text(url: str, *, http_client: Optional[httpx.Client] = None) -> str:
    owns_client = http_client is None
    http_client = http_client or httpx.Client(timeout=settings.ai_timeout_seconds, follow_redirects=True)
    try:
        response = http_client.get(url, headers={"User-Agent": BROWSER_USER_AGENT})
    except httpx.HTTPError as exc:
        raise ResourceSummaryError(f"Failed to fetch website: {exc}") from exc
    finally:
        if owns_client:
            http_client.close()

    if response.is_error:
        raise ResourceSummaryError(f"Failed to fetch website: {response.status_code} {response.reason_phrase}")
    return html_to_text(response.text)[:MAX_WEBSITE_CHARS]


def summarize_resource(
    resource_type: str,
    content: str,
    mime_type: Optional[str] = None,
    *,
    client: Optional[GenerativeClient] = None,
    http_client: Optional[httpx.Client] = None,
) -> str:
    """Summarize a web page (``content`` is its URL) or a base64 image/file.

    Raises ResourceSummaryError on any failure. Fetch, input and model errors
    keep their own message; the underlying cause is chained.
    """
    client = client or GenerativeClient(AIClientConfig.from_settings())
    with trace("resource.summarize", metadata={"resource_type": resource_type, "mime_type": mime_type}):
        try:
            summary = _summarize(client, resource_type, content, mime_type, http_client)
        except ResourceSummaryError as exc:
            logger.error("Error in summarize_resource: %s", exc)
            log_metric("resource.summarize.success", 0, metadata={"resource_type": resource_type})
            raise
        except AIClientError as exc:
            logger.error("Error in summarize_resource: %s", exc)
            log_metric("resource.summarize.success", 0, metadata={"resource_type": resource_type})
            raise ResourceSummaryError(str(exc) or RESOURCE_SUMMARY_FAILURE) from exc

    log_metric("resource.summarize.success", 1, metadata={"resource_type": resource_type})
    return summary


def _summarize(
    client: GenerativeClient,
    resource_type: str,
    content: str,
    mime_type: Optional[str],
    http_client: Optional[httpx.Client],
) -> str:
    if resource_type == "website":
        client.ensure_configured()
        page_text = fetch_website_text(content, http_client=http_client)
        summary = client.generate_text(WEBSITE_PROMPT + page_text)
    elif resource_type in ("image", "file"):
        if not mime_type:
            raise ResourceSummaryError("MIME type is required for files and images")
        prompt = IMAGE_PROMPT if resource_type == "image" else FILE_PROMPT
        summary = client.generate_with_attachment(prompt, strip_data_uri_prefix(content), mime_type)
    else:
        raise ResourceSummaryError("Invalid resource type")

    if not summary.strip():
        raise ResourceSummaryError("Empty response from AI")
    return summary
