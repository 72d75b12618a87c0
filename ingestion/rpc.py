# ingestion/rpc.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0
REQUEST_ID = "holders"


class RpcError(RuntimeError):
    pass


class RpcHttpError(RpcError):
    def __init__(self, status_code: int):
        super().__init__(f"RPC HTTP error: {status_code}")
        self.status_code = status_code


class RpcResponseError(RpcError):
    """JSON-RPC error object returned by the node; message kept verbatim."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class RpcTransportError(RpcError):
    pass


def rpc_call(
    rpc_url: str,
    method: str,
    params: List[Any],
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """
    Send one JSON-RPC 2.0 request and return its result field.
    """
    payload = {"jsonrpc": "2.0", "id": REQUEST_ID, "method": method, "params": params}
    logger.debug("rpc %s -> %s", method, rpc_url)
    try:
        resp = requests.post(rpc_url, json=payload, timeout=timeout)
    except requests.Timeout as e:
        raise RpcTransportError(f"RPC request timed out after {timeout}s for {method}") from e
    except requests.RequestException as e:
        raise RpcTransportError(f"RPC transport failed for {method}: {e}") from e

    if not 200 <= resp.status_code < 300:
        raise RpcHttpError(resp.status_code)

    try:
        data = resp.json()
    except ValueError as e:
        raise RpcTransportError(f"RPC response for {method} is not JSON") from e

    err = data.get("error") if isinstance(data, dict) else None
    if err:
        if isinstance(err, dict):
            raise RpcResponseError(err.get("message") or "RPC error", err.get("code"))
        raise RpcResponseError("RPC error")
    return data.get("result") if isinstance(data, dict) else None


__all__ = [
    "rpc_call",
    "RpcError",
    "RpcHttpError",
    "RpcResponseError",
    "RpcTransportError",
    "DEFAULT_TIMEOUT",
]
