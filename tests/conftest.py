from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.integrations.google_workspace_client import RemoteErrorKind, RemoteServiceError
from src.mcp_server.server import MCPServer


class _Recorder:
    def __init__(self, calls: list) -> None:
        self.calls = calls

    def _record(self, method: str, *args, **kwargs) -> None:
        self.calls.append((method, args, kwargs))


class FakeTasksApi(_Recorder):
    def __init__(self, calls: list) -> None:
        super().__init__(calls)
        self.task_lists: dict[str, dict[str, dict]] = {"abc": {}}
        self._next_id = 1

    def list_task_lists(self) -> dict:
        self._record("list_task_lists")
        return {"kind": "tasks#taskLists", "items": [{"id": key, "title": f"List {key}"} for key in self.task_lists]}

    def list_tasks(self, tasklist_id: str) -> dict:
        self._record("list_tasks", tasklist_id)
        return {"items": list(self._tasks(tasklist_id).values())}

    def insert_task(self, tasklist_id: str, body: dict) -> dict:
        self._record("insert_task", tasklist_id, body)
        task = {"id": str(self._next_id), "status": "needsAction", **body}
        self._next_id += 1
        self._tasks(tasklist_id)[task["id"]] = task
        return task

    def patch_task(self, tasklist_id: str, task_id: str, body: dict) -> dict:
        self._record("patch_task", tasklist_id, task_id, body)
        task = self._task(tasklist_id, task_id)
        task.update(body)
        return task

    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        self._record("delete_task", tasklist_id, task_id)
        self._task(tasklist_id, task_id)
        del self.task_lists[tasklist_id][task_id]

    def _tasks(self, tasklist_id: str) -> dict[str, dict]:
        if tasklist_id not in self.task_lists:
            raise RemoteServiceError("Task list not found.", RemoteErrorKind.NOT_FOUND, 404)
        return self.task_lists[tasklist_id]

    def _task(self, tasklist_id: str, task_id: str) -> dict:
        tasks = self._tasks(tasklist_id)
        if task_id not in tasks:
            raise RemoteServiceError("Not Found", RemoteErrorKind.NOT_FOUND, 404)
        return tasks[task_id]


class FakeCalendarApi(_Recorder):
    def __init__(self, calls: list) -> None:
        super().__init__(calls)
        self.calendars: dict[str, dict[str, dict]] = {"primary": {}}
        self._next_id = 1

    def list_calendars(self) -> dict:
        self._record("list_calendars")
        return {"items": [{"id": key, "summary": key, "accessRole": "owner"} for key in self.calendars]}

    def list_events(self, calendar_id: str, **kwargs) -> dict:
        self._record("list_events", calendar_id, **kwargs)
        events = list(self._events(calendar_id).values())
        if not events:
            # the real API omits "items" on some empty responses
            return {"kind": "calendar#events"}
        return {"items": events[: kwargs.get("max_results") or len(events)]}

    def insert_event(self, calendar_id: str, body: dict) -> dict:
        self._record("insert_event", calendar_id, body)
        event = {"id": f"e{self._next_id}", "status": "confirmed", **body}
        self._next_id += 1
        self._events(calendar_id)[event["id"]] = event
        return event

    def patch_event(self, calendar_id: str, event_id: str, body: dict) -> dict:
        self._record("patch_event", calendar_id, event_id, body)
        event = self._event(calendar_id, event_id)
        event.update(body)
        return event

    def delete_event(self, calendar_id: str, event_id: str) -> None:
        self._record("delete_event", calendar_id, event_id)
        self._event(calendar_id, event_id)
        del self.calendars[calendar_id][event_id]

    def _events(self, calendar_id: str) -> dict[str, dict]:
        if calendar_id not in self.calendars:
            raise RemoteServiceError("Not Found", RemoteErrorKind.NOT_FOUND, 404)
        return self.calendars[calendar_id]

    def _event(self, calendar_id: str, event_id: str) -> dict:
        events = self._events(calendar_id)
        if event_id not in events:
            raise RemoteServiceError("Resource has been deleted", RemoteErrorKind.NOT_FOUND, 410)
        return events[event_id]


class FakeWorkspaceClient:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple, dict]] = []
        self.tasks = FakeTasksApi(self.calls)
        self.calendar = FakeCalendarApi(self.calls)
        self.closed = False

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def test_settings() -> Settings:
    return Settings(default_time_zone="Asia/Kuala_Lumpur", default_calendar_id="primary", default_max_results=10)


@pytest.fixture
def fake_client() -> FakeWorkspaceClient:
    return FakeWorkspaceClient()


@pytest.fixture
def mcp_server(fake_client, test_settings) -> MCPServer:
    return MCPServer(client=fake_client, settings=test_settings)


@pytest.fixture
def api_client(mcp_server, monkeypatch) -> Generator[TestClient, None, None]:
    import src.api.routes as routes_module
    from src.app import app

    monkeypatch.setattr(routes_module, "_server", mcp_server, raising=False)

    with TestClient(app) as client:
        yield client
