"""Shared fixtures: settings and an in-memory GitLab API served through httpx.MockTransport."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Any

import httpx
import pytest

from gitlabctl.config import Settings, load_settings

_PROJECTS = re.compile(r"^/api/v4/projects$")
_ENVIRONMENTS = re.compile(r"^/api/v4/projects/(\d+)/environments$")
_ENVIRONMENT = re.compile(r"^/api/v4/projects/(\d+)/environments/(\d+)$")


def project_payload(project_id: int, path: str) -> dict[str, Any]:
    namespace, _, name = path.rpartition("/")
    return {
        "id": project_id,
        "name": name,
        "path_with_namespace": path,
        "namespace": {"name": namespace.rpartition("/")[2], "full_path": namespace},
    }


def deployment_payload(iid: int, username: str, short_id: str, created_at: str) -> dict[str, Any]:
    return {
        "id": iid * 10,
        "iid": iid,
        "ref": "main",
        "sha": short_id + "0" * 32,
        "created_at": created_at,
        "updated_at": created_at,
        "user": {"id": 1, "username": username},
        "deployable": {"commit": {"short_id": short_id}},
    }


class FakeGitLab:
    """Serves projects, environments and environment details with real pagination headers."""

    def __init__(self) -> None:
        self.projects: list[dict[str, Any]] = []
        self.environments: dict[int, list[dict[str, Any]]] = {}
        self.deployments: dict[tuple[int, int], dict[str, Any] | None] = {}
        self.failing_projects: set[int] = set()
        self.failing_environments: set[tuple[int, int]] = set()
        self.fail_project_listing = False
        self.max_page_size: int | None = None
        self.delay = 0.0
        self.requests: list[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def add_project(self, project_id: int, path: str, environments: list[tuple[int, str]] = ()) -> None:
        self.projects.append(project_payload(project_id, path))
        self.environments[project_id] = [
            {"id": env_id, "name": name, "state": "available"} for env_id, name in environments
        ]

    def deploy(self, project_id: int, env_id: int, deployment: dict[str, Any] | None) -> None:
        self.deployments[(project_id, env_id)] = deployment

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def _page(self, request: httpx.Request, items: list[dict[str, Any]]) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        per_page = int(request.url.params.get("per_page", "20"))
        if self.max_page_size is not None:
            per_page = min(per_page, self.max_page_size)
        start = (page - 1) * per_page
        chunk = items[start:start + per_page]
        has_next = start + per_page < len(items)
        headers = {"X-Next-Page": str(page + 1) if has_next else "", "X-Page": str(page)}
        return httpx.Response(200, json=chunk, headers=headers)

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return self._route(request)
        finally:
            self.in_flight -= 1

    def _route(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if _PROJECTS.match(path):
            if self.fail_project_listing:
                return httpx.Response(502, text="bad gateway")
            return self._page(request, self.projects)

        match = _ENVIRONMENTS.match(path)
        if match:
            project_id = int(match.group(1))
            if project_id in self.failing_projects:
                return httpx.Response(403, json={"message": "403 Forbidden"})
            return self._page(request, self.environments.get(project_id, []))

        match = _ENVIRONMENT.match(path)
        if match:
            key = (int(match.group(1)), int(match.group(2)))
            if key in self.failing_environments:
                return httpx.Response(500, json={"message": "500 Internal Server Error"})
            return httpx.Response(200, json={"id": key[1], "last_deployment": self.deployments.get(key)})

        return httpx.Response(404, json={"message": "404 Not Found"})


class RecordingProgress:
    def __init__(self) -> None:
        self.lines: list[tuple[str, float]] = []

    def stage_completed(self, message: str, elapsed: float) -> None:
        self.lines.append((message, elapsed))


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("GITLABCTL_SERVER", "GITLABCTL_ACCESS_TOKEN", "GITLABCTL_CONFIG_FILE", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    # CLI tests install a non-propagating handler; let caplog see records again
    logger = logging.getLogger("gitlabctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return load_settings(
        tmp_path / "absent.toml",
        server="https://gitlab.example.com",
        access_token="glpat-test",
        page_size=2,
        environment_concurrency=2,
        deployment_concurrency=3,
    )


@pytest.fixture
def fake_gitlab() -> FakeGitLab:
    return FakeGitLab()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()
