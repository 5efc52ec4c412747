from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from src.config import Settings, get_settings
from src.integrations.google_credentials import build_credentials

logger = logging.getLogger(__name__)


class RemoteErrorKind(str, Enum):
    AUTH_EXPIRED = "auth_expired"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    RATE_LIMITED = "rate_limited"
    TRANSPORT_UNAVAILABLE = "transport_unavailable"


class RemoteServiceError(Exception):
    def __init__(self, message: str, kind: RemoteErrorKind, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status = status


_RATE_LIMIT_REASONS = {"rateLimitExceeded", "userRateLimitExceeded", "quotaExceeded"}


def _is_rate_limited(exc: HttpError) -> bool:
    details = getattr(exc, "error_details", None) or []
    if isinstance(details, list):
        for item in details:
            if isinstance(item, dict) and item.get("reason") in _RATE_LIMIT_REASONS:
                return True
    reason = str(getattr(exc, "reason", "") or "").lower()
    return "rate limit" in reason or "quota" in reason


def classify_http_error(exc: HttpError) -> RemoteServiceError:
    status = int(exc.resp.status) if getattr(exc, "resp", None) is not None else None
    message = str(getattr(exc, "reason", "") or exc)

    if status == 429 or (status == 403 and _is_rate_limited(exc)):
        kind = RemoteErrorKind.RATE_LIMITED
    elif status in {401, 403}:
        kind = RemoteErrorKind.AUTH_EXPIRED
    elif status in {404, 410}:
        kind = RemoteErrorKind.NOT_FOUND
    elif status is not None and 400 <= status < 500:
        kind = RemoteErrorKind.INVALID_ARGUMENT
    else:
        kind = RemoteErrorKind.TRANSPORT_UNAVAILABLE
    return RemoteServiceError(message, kind, status)


class _CapabilityGroup:
    """Runs requests against one discovery resource.

    httplib2 connections are not thread-safe. When an ``http_factory`` is set
    each request executes on its own authorized transport, so calls from
    different threads never share a connection.
    """

    def __init__(self, resource: Any, http_factory: Callable[[], Any] | None = None) -> None:
        self._resource = resource
        self._http_factory = http_factory

    def _run(self, operation: str, make_request: Callable[[Any], Any]) -> Any:
        try:
            request = make_request(self._resource)
            if self._http_factory is None:
                return request.execute()
            return request.execute(http=self._http_factory())
        except HttpError as exc:
            error = classify_http_error(exc)
            logger.warning(
                "Google API request failed",
                extra={"operation": operation, "status": error.status, "kind": error.kind.value},
            )
            raise error from exc
        except RefreshError as exc:
            raise RemoteServiceError(str(exc), RemoteErrorKind.AUTH_EXPIRED) from exc
        except (TransportError, httplib2.HttpLib2Error, OSError) as exc:
            raise RemoteServiceError(str(exc), RemoteErrorKind.TRANSPORT_UNAVAILABLE) from exc
        except (TypeError, ValueError) as exc:
            # discovery rejects unknown or badly typed parameters before sending
            raise RemoteServiceError(str(exc), RemoteErrorKind.INVALID_ARGUMENT) from exc


class TasksApi(_CapabilityGroup):
    def list_task_lists(self) -> dict:
        return self._run("tasklists.list", lambda api: api.tasklists().list())

    def list_tasks(self, tasklist_id: str) -> dict:
        return self._run("tasks.list", lambda api: api.tasks().list(tasklist=tasklist_id))

    def insert_task(self, tasklist_id: str, body: dict) -> dict:
        return self._run("tasks.insert", lambda api: api.tasks().insert(tasklist=tasklist_id, body=body))

    def patch_task(self, tasklist_id: str, task_id: str, body: dict) -> dict:
        return self._run(
            "tasks.patch",
            lambda api: api.tasks().patch(tasklist=tasklist_id, task=task_id, body=body),
        )

    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        self._run("tasks.delete", lambda api: api.tasks().delete(tasklist=tasklist_id, task=task_id))


class CalendarApi(_CapabilityGroup):
    def list_calendars(self) -> dict:
        return self._run("calendarList.list", lambda api: api.calendarList().list())

    def list_events(
        self,
        calendar_id: str,
        *,
        time_min: str | None = None,
        time_max: str | None = None,
        max_results: int | None = None,
        single_events: bool = True,
        order_by: str | None = "startTime",
    ) -> dict:
        params: dict[str, Any] = {"calendarId": calendar_id, "singleEvents": single_events}
        if time_min is not None:
            params["timeMin"] = time_min
        if time_max is not None:
            params["timeMax"] = time_max
        if max_results is not None:
            params["maxResults"] = max_results
        if order_by is not None:
            params["orderBy"] = order_by
        return self._run("events.list", lambda api: api.events().list(**params))

    def insert_event(self, calendar_id: str, body: dict) -> dict:
        return self._run("events.insert", lambda api: api.events().insert(calendarId=calendar_id, body=body))

    def patch_event(self, calendar_id: str, event_id: str, body: dict) -> dict:
        return self._run(
            "events.patch",
            lambda api: api.events().patch(calendarId=calendar_id, eventId=event_id, body=body),
        )

    def delete_event(self, calendar_id: str, event_id: str) -> None:
        self._run("events.delete", lambda api: api.events().delete(calendarId=calendar_id, eventId=event_id))


class GoogleWorkspaceClient:
    """Authenticated handle to the Google Tasks and Google Calendar APIs."""

    def __init__(
        self,
        tasks_resource: Any,
        calendar_resource: Any,
        http_factory: Callable[[], Any] | None = None,
    ) -> None:
        self._resources = (tasks_resource, calendar_resource)
        self.tasks = TasksApi(tasks_resource, http_factory)
        self.calendar = CalendarApi(calendar_resource, http_factory)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GoogleWorkspaceClient:
        cfg = settings or get_settings()
        credentials = build_credentials(cfg)
        tasks_resource = build("tasks", "v1", credentials=credentials, cache_discovery=False)
        calendar_resource = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        logger.info("Google API clients built", extra={"services": ["tasks/v1", "calendar/v3"]})
        return cls(tasks_resource, calendar_resource, lambda: AuthorizedHttp(credentials, http=httplib2.Http()))

    def close(self) -> None:
        for resource in self._resources:
            close = getattr(resource, "close", None)
            if callable(close):
                close()
