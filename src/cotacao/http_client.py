"""Deadline-bounded JSON GET shared by the quote fetcher and the client.

`requests` applies its timeout to the connect and to each socket read
separately. The body is streamed here so the whole call can be capped.
"""

import json
import time
from typing import Any

import requests

CHUNK_SIZE = 64


class DeadlineExceeded(requests.Timeout):
    """The response did not complete before the call's deadline."""


def get_json(url: str, timeout: float) -> Any:
    """GET `url` and decode its JSON body, all within `timeout` seconds.

    Raises requests.RequestException (DeadlineExceeded included) or ValueError.
    """
    expires_at = time.monotonic() + timeout
    body = bytearray()
    with requests.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        for chunk in resp.iter_content(CHUNK_SIZE):
            if time.monotonic() > expires_at:
                raise DeadlineExceeded(f"deadline of {timeout * 1000:.0f} ms exceeded")
            body += chunk
    if time.monotonic() > expires_at:
        raise DeadlineExceeded(f"deadline of {timeout * 1000:.0f} ms exceeded")
    return json.loads(body)
