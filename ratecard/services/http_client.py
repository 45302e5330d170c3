from __future__ import annotations

"""Lightweight HTTP client util.

Uses stdlib urllib; the only outbound call is the exchange-rate fetch, a single
GET returning JSON. Retries are opt-in (default none) so a refresh is bounded by
one timeout.
"""
import http.client
import json
import time
import urllib.request
import urllib.error
from typing import Any, Dict, Mapping, Optional

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "RateCardCalculator/1.0",
}


class HttpError(Exception):
    pass


def get_json(
    url: str,
    *,
    timeout: float = 5.0,
    retries: int = 0,
    backoff: float = 0.5,
    headers: Optional[Mapping[str, str]] = None,
) -> Any:
    request = urllib.request.Request(url, headers={**DEFAULT_HEADERS, **(headers or {})})
    last_err: Optional[Exception] = None
    for attempt in range(retries + 1):
        try:
            with urllib.request.urlopen(request, timeout=timeout) as resp:  # nosec B310
                if resp.status >= 400:
                    raise HttpError(f"HTTP {resp.status} for {url}")
                data = resp.read()
                return json.loads(data.decode("utf-8"))
        except (
            urllib.error.URLError,
            TimeoutError,
            OSError,
            http.client.HTTPException,
            HttpError,
            ValueError,
        ) as e:  # ValueError for JSON / UTF-8 decode
            last_err = e
            if attempt == retries:
                break
            time.sleep(backoff * (2**attempt))
    raise HttpError(f"Failed to fetch JSON from {url}: {last_err}")


def get_json_object(url: str, **kwargs: Any) -> Dict[str, Any]:
    data = get_json(url, **kwargs)
    if not isinstance(data, dict):
        raise HttpError(f"Expected a JSON object from {url}, got {type(data).__name__}")
    return data
