"""Gitea client using direct REST API calls."""

from typing import Any

import httpx
import pydantic
import structlog

from gitea_cli.exceptions import ApiError, ApiErrorKind
from gitea_cli.models.domain import CreateRepoOptions, Credentials, Repository, SearchReposResult

log = structlog.get_logger(__name__)


class GiteaRestClient:
    """Gitea REST API client for the two calls gitea-cli makes.

    Use as an async context manager; the underlying ``httpx.AsyncClient``
    lives for the duration of the ``async with`` block.

    Example:
        >>> async with GiteaRestClient("https://gitea.example.com", credentials) as client:
        ...     repo = await client.create_repository(options)
    """

    def __init__(
        self,
        base_url: str,
        credentials: Credentials | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Gitea client.

        Args:
            base_url: Gitea base URL (e.g., http://gitea.example.com or
                http://host/gitea when served under a sub-path)
            credentials: Credentials for authenticated calls; None for
                anonymous access
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_base = f"{self.base_url}/api/v1"
        self.credentials = credentials
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Open the HTTP client."""
        headers = {"Accept": "application/json"}
        auth: tuple[str, str] | None = None

        if self.credentials is not None:
            if self.credentials.token:
                headers["Authorization"] = f"token {self.credentials.token.strip()}"
            elif self.credentials.has_basic_auth:
                auth = (self.credentials.username or "", self.credentials.password or "")

        self._client = httpx.AsyncClient(
            base_url=self.api_base,
            headers=headers,
            auth=auth,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GiteaRestClient":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.disconnect()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("GiteaRestClient is not connected; use 'async with'")
        return self._client

    async def create_repository(self, options: CreateRepoOptions) -> Repository:
        """Create a repository owned by the authenticated user.

        Args:
            options: Validated creation request

        Returns:
            The created repository

        Raises:
            ApiError: On network failure (kind=network), rejected credentials
                (authentication), an existing repository with that name
                (conflict), server-side validation (validation) or any other
                server error (server)
        """
        if self.credentials is None or not self.credentials.is_complete:
            raise ApiError("Creating a repository requires credentials", ApiErrorKind.AUTHENTICATION)

        log.info("create_repository", name=options.name, private=options.private)

        try:
            response = await self.client.post("/user/repos", json=options.to_payload())
        except httpx.HTTPError as e:
            raise _network_error(self.base_url, e) from e

        if response.is_error:
            raise _status_error(response, action=f"create repository '{options.name}'")

        try:
            repository = Repository.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as e:
            raise ApiError(
                f"Unexpected response from {self.base_url} while creating '{options.name}'",
                ApiErrorKind.SERVER,
                status_code=response.status_code,
            ) from e

        log.info("gitea_repo_created", full_name=repository.full_name, clone_url=repository.clone_url)
        return repository

    async def search_repositories(self, contains: str | None = None) -> SearchReposResult:
        """Search repositories visible to anonymous users.

        Args:
            contains: Optional keyword; all repositories when omitted

        Returns:
            SearchReposResult; a failure reported by the server is returned
            as ok=False rather than raised

        Raises:
            ApiError: On network or transport failure only
        """
        params: dict[str, str] = {}
        if contains:
            params["q"] = contains

        log.info("search_repositories", contains=contains)

        try:
            response = await self.client.get("/repos/search", params=params)
        except httpx.HTTPError as e:
            raise _network_error(self.base_url, e) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            log.info("search_unexpected_response", status=response.status_code)
            return SearchReposResult(ok=False, message=f"Unexpected response (HTTP {response.status_code})")

        message = payload.get("error") or payload.get("message")
        ok = bool(payload.get("ok", response.is_success)) and response.is_success
        if not ok:
            log.info("search_failed", status=response.status_code, message=message)
            return SearchReposResult(ok=False, message=message or f"HTTP {response.status_code}")

        try:
            repositories = [Repository.model_validate(item) for item in payload.get("data") or []]
        except pydantic.ValidationError as e:
            log.info("search_unparseable_result", error=str(e))
            return SearchReposResult(ok=False, message="Unexpected repository data in search result")

        return SearchReposResult(ok=True, repositories=repositories)


def _network_error(base_url: str, error: httpx.HTTPError) -> ApiError:
    log.info("gitea_request_failed", base_url=base_url, error=str(error))
    return ApiError(f"Could not reach {base_url}: {error}", ApiErrorKind.NETWORK)


def _status_error(response: httpx.Response, action: str) -> ApiError:
    """Classify an HTTP error response.

    Gitea reports errors as JSON with a ``message`` field; that text is
    used when present.
    """
    status = response.status_code
    try:
        detail = response.json().get("message")
    except (ValueError, AttributeError):
        detail = None
    detail = detail or response.reason_phrase or "request failed"

    if status in (401, 403):
        kind = ApiErrorKind.AUTHENTICATION
        hint = "Check the username/password or token"
    elif status == 409:
        kind = ApiErrorKind.CONFLICT
        hint = "Choose another name with --gitea-name"
    elif status in (400, 422):
        kind = ApiErrorKind.VALIDATION
        hint = None
    else:
        kind = ApiErrorKind.SERVER
        hint = None

    log.info("gitea_request_rejected", status=status, kind=str(kind), detail=detail)
    return ApiError(f"Failed to {action}: {detail}", kind, status_code=status, hint=hint)
