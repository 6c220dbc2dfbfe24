"""Single-attempt JSON GET shared by every provider adapter.

All three providers share one failure contract: a transport error, a
non-2xx status, or a body that is not valid JSON raises
:class:`~encore.utils.errors.UpstreamError` with the status code and raw
body preserved.  There are no retries; one call is one GET.

JSON floats are parsed as :class:`~decimal.Decimal` so coordinates and
ratings keep the exact digits the provider sent.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

import httpx

from encore.utils.errors import UpstreamError
from encore.utils.logging import get_logger

_logger = get_logger(__name__)

# Raw bodies are kept on the error for diagnostics; very large HTML error
# pages are truncated.
_MAX_ERROR_BODY = 2000


async def get_json(
    http: httpx.AsyncClient,
    url: str,
    provider_name: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    """Issue one GET and return the decoded JSON body.

    Raises
    ------
    UpstreamError
        On ``httpx.HTTPError`` (including timeouts), any non-2xx status,
        or an unparsable body.
    """
    try:
        response = await http.get(url, params=params, headers=headers)
    except httpx.HTTPError as exc:
        _logger.warning("upstream_request_failed", provider=provider_name, url=url, error=str(exc))
        raise UpstreamError(
            message=f"Request to {url} failed: {exc}",
            provider_name=provider_name,
        ) from exc

    body = response.text
    if not 200 <= response.status_code < 300:
        _logger.warning(
            "upstream_bad_status",
            provider=provider_name,
            url=url,
            status=response.status_code,
        )
        raise UpstreamError(
            message=f"Request failed with status {response.status_code}",
            provider_name=provider_name,
            status_code=response.status_code,
            body=body[:_MAX_ERROR_BODY],
        )

    try:
        return json.loads(body, parse_float=Decimal)
    except (json.JSONDecodeError, TypeError) as exc:
        _logger.warning("upstream_unparsable_body", provider=provider_name, url=url)
        raise UpstreamError(
            message=f"Unparsable response body: {exc}",
            provider_name=provider_name,
            status_code=response.status_code,
            body=body[:_MAX_ERROR_BODY],
        ) from exc
