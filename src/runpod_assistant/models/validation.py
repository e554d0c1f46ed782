"""RunPod API key validation.

A key is validated by asking the GraphQL API who it belongs to. One
request, no retries: the caller decides what to do with a failure.
"""

from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from runpod_assistant.config import DEFAULT_GRAPHQL_URL, get_settings
from runpod_assistant.logging import get_logger

log = get_logger("runpod_assistant.models.validation")

ACCOUNT_QUERY = "query { myself { email currentSpendPerHr } }"


class _GraphQLError(BaseModel):
    message: str = ""


class _Myself(BaseModel):
    email: str
    current_spend_per_hr: float | None = Field(default=None, alias="currentSpendPerHr")


class _AccountData(BaseModel):
    myself: _Myself | None = None


class _AccountResponse(BaseModel):
    """Body of the ``myself`` query response."""

    data: _AccountData | None = None
    errors: list[_GraphQLError] | None = None


class ValidationError(Exception):
    """The API key could not be validated."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class AccountInfo:
    """Account details returned for a valid key."""

    email: str
    current_spend_per_hr: float | None = None


class CredentialValidator:
    """Validates RunPod API keys against the GraphQL ``myself`` query."""

    def __init__(
        self,
        graphql_url: str = DEFAULT_GRAPHQL_URL,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the validator.

        Args:
            graphql_url: RunPod GraphQL endpoint.
            http_client: Optional client to use instead of an owned one.
                A supplied client is never closed by the validator.
        """
        self._graphql_url = graphql_url
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            # Transport defaults apply; no timeout layer of our own
            self._http_client = httpx.AsyncClient()
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if the validator created it."""
        if self._owns_client and self._http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def validate(self, api_key: str) -> AccountInfo:
        """Validate an API key and return the account it belongs to.

        Args:
            api_key: RunPod API key. Sent as the ``api_key`` query parameter
                and never logged.

        Returns:
            The account's email and current hourly spend (None if the API
            did not report one).

        Raises:
            ValidationError: On a non-2xx status, a GraphQL error, a missing
                account payload, or a transport failure.
        """
        client = await self._get_client()
        try:
            response = await client.post(
                self._graphql_url,
                params={"api_key": api_key},
                json={"query": ACCOUNT_QUERY},
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.warning("credential_validation_failed", reason="http_status", status=status)
            raise ValidationError(f"Runpod API returned {status}") from e
        except httpx.RequestError as e:
            # str(e) may embed the request URL, which carries the key
            log.warning("credential_validation_failed", reason="transport", error=type(e).__name__)
            raise ValidationError(f"Could not reach Runpod API ({type(e).__name__})") from e

        try:
            payload = response.json()
        except ValueError as e:
            log.warning("credential_validation_failed", reason="invalid_json")
            raise ValidationError("Runpod API returned an invalid response") from e

        return self._parse_account(payload)

    @staticmethod
    def _parse_account(payload: Any) -> AccountInfo:
        """Extract AccountInfo from a GraphQL response body."""
        try:
            body = _AccountResponse.model_validate(payload)
        except SchemaError as e:
            log.warning("credential_validation_failed", reason="unexpected_shape")
            raise ValidationError("Runpod API returned an invalid response") from e

        if body.errors:
            log.warning("credential_validation_failed", reason="graphql_error")
            raise ValidationError(body.errors[0].message or "Runpod API returned an error")

        myself = body.data.myself if body.data else None
        if myself is None:
            log.warning("credential_validation_failed", reason="no_account")
            raise ValidationError("Invalid API key")

        account = AccountInfo(email=myself.email, current_spend_per_hr=myself.current_spend_per_hr)
        log.info("credential_validated", email=account.email)
        return account


async def validate(api_key: str, graphql_url: str | None = None) -> AccountInfo:
    """Validate an API key with a short-lived validator.

    See CredentialValidator.validate for the failure modes.
    """
    validator = CredentialValidator(graphql_url or get_settings().runpod_graphql_url)
    try:
        return await validator.validate(api_key)
    finally:
        await validator.close()
