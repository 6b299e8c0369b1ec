"""Tests for concurrent environment discovery."""

from __future__ import annotations

import logging

import pytest

from gitlabctl.domain.entities import Project
from gitlabctl.domain.services import EnvironmentDiscoverer
from gitlabctl.infrastructure.gitlab import GitLabClient


def _projects(fake_gitlab) -> list[Project]:
    return [Project.model_validate(payload) for payload in fake_gitlab.projects]


@pytest.mark.asyncio
async def test_environments_of_all_projects_are_merged(settings, fake_gitlab, progress) -> None:
    fake_gitlab.add_project(1, "team-a/svc1", [(11, "prod"), (12, "qa"), (13, "review/feature")])
    fake_gitlab.add_project(2, "team-a/svc2", [(21, "prod")])
    fake_gitlab.add_project(3, "team-a/svc3", [])

    async with GitLabClient(settings, transport=fake_gitlab.transport()) as client:
        stage = EnvironmentDiscoverer(client, concurrency=2, progress=progress)
        environments = await stage.discover(_projects(fake_gitlab))

    assert sorted((e.project_id, e.id, e.name) for e in environments) == [
        (1, 11, "prod"),
        (1, 12, "qa"),
        (1, 13, "review/feature"),
        (2, 21, "prod"),
    ]
    assert stage.failures == []
    assert [message for message, _ in progress.lines] == ["Retrieved 4 environments"]


@pytest.mark.asyncio
async def test_failed_project_contributes_no_environments(settings, fake_gitlab, progress, caplog) -> None:
    fake_gitlab.add_project(1, "team-a/svc1", [(11, "prod"), (12, "qa")])
    fake_gitlab.add_project(2, "team-a/locked", [(21, "prod")])
    fake_gitlab.add_project(3, "team-a/svc3", [(31, "prod")])
    fake_gitlab.failing_projects.add(2)

    caplog.set_level(logging.WARNING, logger="gitlabctl")
    async with GitLabClient(settings, transport=fake_gitlab.transport()) as client:
        stage = EnvironmentDiscoverer(client, concurrency=2, progress=progress)
        environments = await stage.discover(_projects(fake_gitlab))

    assert len(environments) == 3
    assert {e.project_id for e in environments} == {1, 3}
    assert [outcome.item.id for outcome in stage.failures] == [2]
    assert stage.failures[0].error.status_code == 403
    assert "team-a/locked" in caplog.text
    assert progress.lines[0][0] == "Retrieved 3 environments"


@pytest.mark.asyncio
async def test_fan_out_respects_concurrency_limit(settings, fake_gitlab) -> None:
    for project_id in range(1, 9):
        fake_gitlab.add_project(project_id, f"group/svc{project_id}", [(project_id * 10, "prod")])
    fake_gitlab.delay = 0.01

    async with GitLabClient(settings, transport=fake_gitlab.transport()) as client:
        environments = await EnvironmentDiscoverer(client, concurrency=3).discover(_projects(fake_gitlab))

    assert len(environments) == 8
    assert 1 < fake_gitlab.max_in_flight <= 3


@pytest.mark.asyncio
async def test_no_projects_means_no_requests(settings, fake_gitlab, progress) -> None:
    async with GitLabClient(settings, transport=fake_gitlab.transport()) as client:
        environments = await EnvironmentDiscoverer(client, concurrency=2, progress=progress).discover([])

    assert environments == []
    assert fake_gitlab.requests == []
    assert progress.lines[0][0] == "Retrieved 0 environments"
