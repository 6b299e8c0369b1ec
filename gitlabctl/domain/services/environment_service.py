"""Environment Service - lists the environments of many projects concurrently."""
import logging
from typing import List

from gitlabctl.domain.entities import Environment, Project
from gitlabctl.domain.services.progress import NullProgress, ProgressSink
from gitlabctl.infrastructure.gitlab import GitLabClient, collect
from gitlabctl.utils import Outcome, StageTimer, fan_out

logger = logging.getLogger(__name__)


class EnvironmentDiscoverer:
    def __init__(self, client: GitLabClient, concurrency: int, progress: ProgressSink = NullProgress()):
        self.client = client
        self.concurrency = concurrency
        self.progress = progress
        self.failures: List[Outcome[Project, List[Environment]]] = []

    async def _environments_of(self, project: Project) -> List[Environment]:
        return await collect(self.client.list_environments(project.id))

    async def discover(self, projects: List[Project]) -> List[Environment]:
        """
        Fetch the environments of every project.

        A project whose environments cannot be fetched contributes none and
        is logged; the remaining projects are unaffected.
        """
        with StageTimer() as timer:
            outcomes = await fan_out(projects, self._environments_of, self.concurrency)

        environments: List[Environment] = []
        self.failures = []
        for outcome in outcomes:
            if outcome.ok:
                environments.extend(outcome.value)
            else:
                self.failures.append(outcome)
                logger.warning(
                    f"Skipping environments of {outcome.item.path_with_namespace}: {outcome.error}"
                )

        self.progress.stage_completed(f"Retrieved {len(environments)} environments", timer.elapsed)
        return environments
