"""HTTP transport for the hosted assistant API.

Sends requests with the fixed header set and turns responses into typed
records. An error envelope is checked before the expected schema, so a
service-side error is never reported as a decoding problem.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ts_helper.client.config import AssistantConfig
from ts_helper.client.errors import APIError, DecodeError, NetworkError
from ts_helper.models.remote import ErrorResponse

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class AssistantTransport:
    """Thin async HTTP layer over httpx.

    Owns its AsyncClient unless one is injected (tests inject a client built
    on httpx.MockTransport).
    """

    def __init__(
        self,
        config: AssistantConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client or httpx.AsyncClient(timeout=config.timeout)
        self._owns_client = client is None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
            "OpenAI-Beta": self._config.beta_header,
        }

    async def perform_request(
        self,
        method: str,
        path: str,
        response_model: type[RecordT],
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> RecordT:
        """Send a request and decode the body into ``response_model``.

        Args:
            method: HTTP method.
            path: Path relative to the configured base URL.
            response_model: Record type expected on success.
            json: Optional JSON body.
            params: Optional query parameters.

        Returns:
            The decoded record.

        Raises:
            NetworkError: The request failed before a response arrived.
            APIError: The body is an error envelope.
            DecodeError: The body does not match ``response_model``.
        """
        url = f"{self._config.base_url}{path}"
        logger.debug(f"{method} {url} params={params}")

        try:
            response = await self._client.request(
                method, url, headers=self.headers, json=json, params=params
            )
        except httpx.RequestError as e:
            logger.warning(f"Request error for {method} {url}: {e}")
            raise NetworkError(f"{method} {path} failed: {e}") from e

        body = response.content
        logger.debug(f"Response from {url}: {response.status_code}")

        try:
            envelope = ErrorResponse.model_validate_json(body)
        except ValidationError:
            envelope = None

        if envelope is not None:
            detail = envelope.error
            logger.warning(f"API error for {method} {path}: {detail.type} - {detail.message}")
            raise APIError(
                message=detail.message,
                error_type=detail.type,
                param=detail.param,
                code=detail.code,
                status_code=response.status_code,
            )

        try:
            return response_model.model_validate_json(body)
        except ValidationError as e:
            raw = response.text
            logger.error(
                f"Failed to decode {response_model.__name__} from {method} {path}: {e}\n"
                f"Response data: {raw}"
            )
            raise DecodeError(
                f"Unexpected {response_model.__name__} payload from {method} {path}",
                body=raw,
                status_code=response.status_code,
            ) from e

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
            logger.debug("Owned httpx.AsyncClient closed.")
