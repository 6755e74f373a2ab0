"""CloudAPI client for instance snapshots.

Implements the two collaborators of the delete batch on top of a
``requests`` session:

- ``delete_instance_snapshot``: resolve the instance, then DELETE the snapshot
- ``wait_for_snapshot_states``: poll the snapshot until it reaches a wanted
  state; a 404 means the snapshot is gone, which CloudAPI reports as
  ``deleted``
"""

from __future__ import annotations

import logging
import re
import threading
import time
from collections.abc import Collection
from typing import Any, Callable
from urllib.parse import quote

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from snapctl.config.models.settings import Settings
from snapctl.shared.constants import SnapshotState
from snapctl.shared.errors import (
    ApplicationError,
    ConvergenceError,
    ConvergenceTimeoutError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    MutationError,
)
from snapctl.shared.logging import log_operation_success
from snapctl.shared.models.cloudapi import DeleteResult, Instance, Snapshot

log = logging.getLogger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
SHORT_ID_RE = re.compile(r"^[0-9a-f]{8}$", re.IGNORECASE)

HTTP_NOT_FOUND = 404
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_SERVER_ERROR = 500


class CloudApiClient:
    """Thin CloudAPI client for the snapshot operations snapctl needs.

    Safe to share between threads: the session is only used for independent
    requests and the instance-id cache is guarded by a lock.

    Args:
        url: CloudAPI base URL
        account: Account login, or ``my`` for the authenticated caller
        token: Bearer token sent with every request
        timeout: Per-request timeout in seconds
        verify_tls: Verify the server certificate
        max_retries: Retries for idempotent requests on 5xx responses
        poll_interval: Seconds between state queries while waiting
        wait_timeout: Give up waiting after this many seconds (None = never)
        session: Pre-built session (tests)
        sleep: Sleep function used between polls (tests)
        clock: Monotonic clock used for the wait timeout (tests)
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        url: str | None,
        *,
        account: str = "my",
        token: str | None = None,
        timeout: float = 30.0,
        verify_tls: bool = True,
        max_retries: int = 3,
        poll_interval: float = 1.0,
        wait_timeout: float | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not url:
            raise ApplicationError(
                ErrorCode.CONFIG_MISSING,
                "CloudAPI URL is not configured. Set SNAPCTL_API__URL or [api] url in the config file.",
                ErrorContext(operation="create_cloudapi_client"),
            )

        self.url = url.rstrip("/")
        self.account = account
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.poll_interval = poll_interval
        self.wait_timeout = wait_timeout
        self._sleep = sleep
        self._clock = clock

        self.session = session or self._create_session(max_retries)
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

        self._instance_ids: dict[str, str] = {}
        self._instance_lock = threading.Lock()

        log.debug("CloudAPI client initialized for %s (account %s)", self.url, self.account)

    @classmethod
    def from_settings(cls, settings: Settings) -> CloudApiClient:
        """Build a client from the api and wait sections of the settings."""
        api = settings.api
        return cls(
            api.url,
            account=api.account,
            token=api.token.get_secret_value() if api.token else None,
            timeout=api.timeout,
            verify_tls=api.verify_tls,
            max_retries=api.max_retries,
            poll_interval=settings.wait.poll_interval,
            wait_timeout=settings.wait.timeout,
        )

    @staticmethod
    def _create_session(max_retries: int) -> requests.Session:
        """Create a session with a retry strategy for idempotent requests."""
        session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            status_forcelist=[500, 502, 503, 504],
            backoff_factor=1,
            allowed_methods=["HEAD", "GET", "OPTIONS"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def _url(self, *parts: str) -> str:
        path = "/".join(quote(part, safe="") for part in (self.account, *parts))
        return f"{self.url}/{path}"

    def _request(
        self,
        method: str,
        parts: tuple[str, ...],
        *,
        error_cls: type[InfrastructureError],
        context: ErrorContext,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        url = self._url(*parts)
        started = time.perf_counter()
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                timeout=self.timeout,
                verify=self.verify_tls,
            )
        except requests.exceptions.Timeout as e:
            raise error_cls(
                ErrorCode.API_TIMEOUT,
                f"CloudAPI request timed out: {method} {url}",
                context,
                original_error=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise error_cls(
                ErrorCode.NETWORK_ERROR,
                f"CloudAPI request failed: {e}",
                context,
                original_error=e,
            ) from e

        log.debug(
            "%s %s -> %s (%.0f ms)",
            method,
            url,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @staticmethod
    def _server_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text.strip() or response.reason or str(response.status_code)
        if isinstance(body, dict):
            return str(body.get("message") or body.get("code") or body)
        return str(body)

    def _raise_for_status(
        self,
        response: requests.Response,
        *,
        error_cls: type[InfrastructureError],
        code: ErrorCode,
        message: str,
        context: ErrorContext,
    ) -> None:
        if response.ok:
            return

        status = response.status_code
        if status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
            code = ErrorCode.API_AUTHENTICATION_FAILED
        elif status == HTTP_NOT_FOUND:
            code = ErrorCode.RESOURCE_NOT_FOUND
        elif status >= HTTP_SERVER_ERROR:
            code = ErrorCode.API_SERVER_ERROR

        raise error_cls(
            code,
            f"{message} (HTTP {status}): {self._server_message(response)}",
            ErrorContext(
                operation=context.operation,
                target=context.target,
                instance=context.instance,
                additional_data={"status_code": status},
            ),
        )

    def _parse(self, response: requests.Response, model: Any, *, error_cls: type[InfrastructureError], context: ErrorContext) -> Any:
        try:
            payload = response.json()
            if isinstance(payload, list):
                return [model.model_validate(item) for item in payload]
            return model.model_validate(payload)
        except (ValueError, ValidationError) as e:
            raise error_cls(
                ErrorCode.API_INVALID_RESPONSE,
                f"Unexpected CloudAPI response: {e}",
                context,
                original_error=e,
            ) from e

    def list_instances(self, name: str | None = None) -> list[Instance]:
        """List instances, optionally filtered by exact name."""
        context = ErrorContext(operation="list_instances", instance=name)
        params = {"name": name} if name else None
        response = self._request(
            "GET",
            ("machines",),
            params=params,
            error_cls=MutationError,
            context=context,
        )
        self._raise_for_status(
            response,
            error_cls=MutationError,
            code=ErrorCode.API_REQUEST_FAILED,
            message="CloudAPI instance listing failed",
            context=context,
        )
        return self._parse(response, Instance, error_cls=MutationError, context=context)

    def resolve_instance_id(self, instance: str) -> str:
        """Resolve an instance name, short id or UUID to its UUID.

        Raises:
            MutationError: If no single instance matches
        """
        if UUID_RE.match(instance):
            return instance.lower()

        with self._instance_lock:
            cached = self._instance_ids.get(instance)
        if cached:
            return cached

        matches = self.list_instances(name=instance)
        if not matches and SHORT_ID_RE.match(instance):
            prefix = instance.lower()
            matches = [item for item in self.list_instances() if item.id.lower().startswith(prefix)]

        if len(matches) != 1:
            reason = "no instance" if not matches else f"{len(matches)} instances"
            raise MutationError(
                ErrorCode.RESOURCE_NOT_FOUND,
                f'{reason} found with name or short id "{instance}"',
                ErrorContext(
                    operation="resolve_instance_id",
                    instance=instance,
                    additional_data={"matches": len(matches)},
                ),
            )

        instance_id = matches[0].id
        with self._instance_lock:
            self._instance_ids[instance] = instance_id
        return instance_id

    def delete_instance_snapshot(self, instance: str, name: str) -> DeleteResult:
        """Request deletion of a snapshot.

        Args:
            instance: Instance name, short id or UUID
            name: Snapshot name

        Returns:
            DeleteResult carrying the resolved instance UUID

        Raises:
            MutationError: If the instance cannot be resolved or the delete fails
        """
        instance_id = self.resolve_instance_id(instance)
        context = ErrorContext(operation="delete_instance_snapshot", target=name, instance=instance_id)

        started = time.perf_counter()
        response = self._request(
            "DELETE",
            ("machines", instance_id, "snapshots", name),
            error_cls=MutationError,
            context=context,
        )
        self._raise_for_status(
            response,
            error_cls=MutationError,
            code=ErrorCode.SNAPSHOT_DELETE_FAILED,
            message="CloudAPI rejected the delete",
            context=context,
        )

        log_operation_success(
            log,
            "delete_instance_snapshot",
            (time.perf_counter() - started) * 1000,
            context=context,
        )
        return DeleteResult(instance_id=instance_id, name=name)

    def get_snapshot(self, instance_id: str, name: str) -> Snapshot:
        """Fetch a snapshot; a missing snapshot is reported as ``deleted``.

        Raises:
            ConvergenceError: If the request fails or the response is malformed
        """
        context = ErrorContext(operation="get_snapshot", target=name, instance=instance_id)
        response = self._request(
            "GET",
            ("machines", instance_id, "snapshots", name),
            error_cls=ConvergenceError,
            context=context,
        )
        if response.status_code == HTTP_NOT_FOUND:
            return Snapshot(name=name, state=SnapshotState.DELETED)

        self._raise_for_status(
            response,
            error_cls=ConvergenceError,
            code=ErrorCode.SNAPSHOT_WAIT_FAILED,
            message="CloudAPI snapshot query failed",
            context=context,
        )
        return self._parse(response, Snapshot, error_cls=ConvergenceError, context=context)

    def wait_for_snapshot_states(
        self,
        instance_id: str,
        name: str,
        states: Collection[str],
    ) -> Snapshot:
        """Poll a snapshot until it reaches one of ``states``.

        Raises:
            ValueError: If states is empty
            ConvergenceTimeoutError: If wait_timeout elapses first
            ConvergenceError: If a state query fails
        """
        wanted = frozenset(states)
        if not wanted:
            msg = "states must not be empty"
            raise ValueError(msg)

        started = self._clock()
        while True:
            snapshot = self.get_snapshot(instance_id, name)
            if snapshot.state in wanted:
                return snapshot

            if self.wait_timeout is not None and self._clock() - started >= self.wait_timeout:
                raise ConvergenceTimeoutError(
                    ErrorCode.OPERATION_TIMEOUT,
                    (
                        f"timed out after {self.wait_timeout:g}s waiting for state "
                        f"{', '.join(sorted(wanted))} (last state: {snapshot.state})"
                    ),
                    ErrorContext(
                        operation="wait_for_snapshot_states",
                        target=name,
                        instance=instance_id,
                        additional_data={"timeout": self.wait_timeout, "state": snapshot.state},
                    ),
                )

            log.debug("Snapshot %s is %s, polling again in %.1fs", name, snapshot.state, self.poll_interval)
            self._sleep(self.poll_interval)
