"""HTTP client for the cluster API server."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from clusterdiag.adapters.http_resilience import ResilientClient
from clusterdiag.config import get_cluster_config
from clusterdiag.domain.model import SCC_API_GROUP, SCC_RESOURCE
from clusterdiag.domain.ports import (
    AccessReviewer,
    ClusterAccessError,
    PolicyObjectNotFoundError,
    PolicyObjectReader,
)

from .schema import (
    ResourceAttributes,
    SecurityContextConstraintsPayload,
    SelfSubjectAccessReview,
    SelfSubjectAccessReviewSpec,
    StatusPayload,
)
from .translator import parse_security_context_constraints

if TYPE_CHECKING:
    from collections.abc import Callable

    from clusterdiag.config import ClusterConfig, ResilienceConfig
    from clusterdiag.domain.model import SecurityContextConstraints

log = getLogger(__name__)

SCC_PATH = f"/apis/{SCC_API_GROUP}/v1/{SCC_RESOURCE}"
SELF_SUBJECT_ACCESS_REVIEW_PATH = "/apis/authorization.k8s.io/v1/selfsubjectaccessreviews"


class ClusterAPIError(ClusterAccessError):
    """Raised when the API server answers with an unexpected status or payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClusterClient:
    """Blocking facade over the cluster API used by the diagnostics.

    Every call opens a short-lived async client, so instances hold no
    connection state between calls.
    """

    def __init__(
        self,
        *,
        config: ClusterConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_cluster_config()
        self._resilience = self._config.resilience
        self._client_factory = client_factory or ResilientClient

    @property
    def infra_namespace(self) -> str:
        return self._config.infra_namespace

    def get_security_context_constraints(self, name: str) -> SecurityContextConstraints:
        payload = asyncio.run(self._get_scc_async(name))
        return parse_security_context_constraints(payload)

    def user_can(self, verb: str, *, group: str, resource: str) -> bool:
        review = SelfSubjectAccessReview(
            spec=SelfSubjectAccessReviewSpec(
                resource_attributes=ResourceAttributes(verb=verb, group=group, resource=resource)
            )
        )
        answered = asyncio.run(self._review_access_async(review))
        if answered.status is None:
            raise ClusterAPIError("Access review response carried no status")
        if answered.status.evaluation_error:
            log.warning(
                "Access review for %s %s.%s reported: %s",
                verb,
                resource,
                group,
                answered.status.evaluation_error,
            )
        if not answered.status.allowed:
            log.info(
                "Access review denied %s %s.%s (explicit=%s): %s",
                verb,
                resource,
                group,
                answered.status.denied,
                answered.status.reason or "no reason given",
            )
        return answered.status.allowed

    async def _get_scc_async(self, name: str) -> SecurityContextConstraintsPayload:
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(client, "GET", _scc_path(name))
        if response.status_code == httpx.codes.NOT_FOUND:
            raise PolicyObjectNotFoundError(name)
        payload = self._decode(response)
        try:
            return SecurityContextConstraintsPayload.model_validate(payload)
        except ValidationError as exc:
            raise ClusterAPIError(f"Malformed scc/{name} payload: {exc}") from exc

    async def _review_access_async(self, review: SelfSubjectAccessReview) -> SelfSubjectAccessReview:
        body = review.model_dump(by_alias=True, exclude_none=True)
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(
                client, "POST", SELF_SUBJECT_ACCESS_REVIEW_PATH, json=body
            )
        payload = self._decode(response)
        try:
            return SelfSubjectAccessReview.model_validate(payload)
        except ValidationError as exc:
            raise ClusterAPIError(f"Malformed access review payload: {exc}") from exc

    async def _perform_request(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        json: object = None,
    ) -> httpx.Response:
        try:
            if method == "POST":
                return await client.post(path, json=json)
            return await client.get(path)
        except httpx.HTTPError as exc:
            raise ClusterAPIError(f"{method} {path} failed: {exc}") from exc

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, object]:
        if response.is_error:
            detail = _status_message(response)
            log.error("Cluster API error %s: %s", response.status_code, detail)
            raise ClusterAPIError(detail, status_code=response.status_code)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ClusterAPIError("Cluster API returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise ClusterAPIError("Unexpected cluster API response payload")
        return payload


def _scc_path(name: str) -> str:
    quoted = quote(name, safe="")
    return f"{SCC_PATH}/{quoted}"


def _status_message(response: httpx.Response) -> str:
    try:
        status = StatusPayload.model_validate(response.json())
    except (ValueError, ValidationError):
        return f"{response.status_code} {response.reason_phrase}".strip()
    return status.message or status.reason or str(response.status_code)


class ClusterPolicyReader:
    """Adapts :class:`ClusterClient` to the ``PolicyObjectReader`` port."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    def get(self, name: str) -> SecurityContextConstraints:
        return self._client.get_security_context_constraints(name)


if TYPE_CHECKING:
    _reader_check: PolicyObjectReader = ClusterPolicyReader(ClusterClient())
    _reviewer_check: AccessReviewer = ClusterClient()
