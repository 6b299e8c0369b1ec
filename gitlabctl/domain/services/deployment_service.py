"""Deployment Service - looks up the latest deployment of each environment."""
import logging
from typing import Dict, List, Optional, Tuple

from gitlabctl.domain.entities import DeploymentDetail, Environment
from gitlabctl.domain.services.progress import NullProgress, ProgressSink
from gitlabctl.infrastructure.gitlab import GitLabClient
from gitlabctl.utils import Outcome, StageTimer, fan_out

logger = logging.getLogger(__name__)


class DeploymentEnricher:
    def __init__(self, client: GitLabClient, concurrency: int, progress: ProgressSink = NullProgress()):
        self.client = client
        self.concurrency = concurrency
        self.progress = progress
        self.failures: List[Outcome[Environment, Optional[DeploymentDetail]]] = []

    async def _latest_deployment(self, environment: Environment) -> Optional[DeploymentDetail]:
        return await self.client.get_latest_deployment(environment.project_id, environment.id)

    async def enrich(self, environments: List[Environment]) -> Dict[Tuple[int, int], DeploymentDetail]:
        """
        Map each environment's key to its latest deployment.

        Environments that were never deployed, or whose lookup failed, are
        left out of the mapping; failures are logged.
        """
        with StageTimer() as timer:
            outcomes = await fan_out(environments, self._latest_deployment, self.concurrency)

        details: Dict[Tuple[int, int], DeploymentDetail] = {}
        self.failures = []
        for outcome in outcomes:
            environment = outcome.item
            if not outcome.ok:
                self.failures.append(outcome)
                logger.warning(
                    f"No deployment details for environment '{environment.name}' "
                    f"of project {environment.project_id}: {outcome.error}"
                )
            elif outcome.value is None:
                logger.debug(f"Environment '{environment.name}' of project {environment.project_id} has no deployments")
            else:
                details[environment.key] = outcome.value

        self.progress.stage_completed("Retrieved environment details", timer.elapsed)
        return details
