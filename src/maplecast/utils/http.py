"""Async JSON fetching with maplecast's error taxonomy."""

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from maplecast.errors import MalformedResponseError, NetworkError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[dict[str, Any]] = None,
) -> Any:
    """GET url and decode the JSON body.

    Args:
        client: Shared async client
        url: Endpoint URL
        params: Query parameters

    Returns:
        Decoded JSON payload

    Raises:
        NetworkError: On transport failure or non-2xx status
        MalformedResponseError: If the body is not valid JSON
    """
    try:
        response = await client.get(url, params=params)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise NetworkError(f"Request to {url} failed: {e}", url=url) from e

    if not response.is_success:
        raise NetworkError(
            f"{url} returned HTTP {response.status_code}",
            url=url,
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(f"{url} returned invalid JSON: {e}") from e


async def fetch_model(
    client: httpx.AsyncClient,
    url: str,
    model: type[ModelT],
    params: Optional[dict[str, Any]] = None,
) -> ModelT:
    """GET url and validate the JSON body against a pydantic model.

    Raises:
        NetworkError: On transport failure or non-2xx status
        MalformedResponseError: If the body is not JSON or fails validation
    """
    payload = await fetch_json(client, url, params=params)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            f"{url} returned an unexpected {model.__name__} payload: {e.error_count()} errors"
        ) from e
