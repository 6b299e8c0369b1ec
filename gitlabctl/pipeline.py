"""
Environments pipeline.

Runs the stages strictly one after another, each a barrier for the next:
project discovery, environment discovery, deployment enrichment and
aggregation. Only project discovery failures abort the run.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

import httpx

from gitlabctl.config import Settings
from gitlabctl.domain.entities import DisplayRow
from gitlabctl.domain.services import (
    Aggregator,
    DeploymentEnricher,
    EnvironmentDiscoverer,
    ProjectDiscoverer,
)
from gitlabctl.domain.services.progress import NullProgress, ProgressSink
from gitlabctl.errors import ResolutionError
from gitlabctl.infrastructure.gitlab import GitLabClient

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    rows: List[DisplayRow]
    failed_projects: List[str] = field(default_factory=list)
    failed_environments: List[str] = field(default_factory=list)
    dropped: List[ResolutionError] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not (self.failed_projects or self.failed_environments or self.dropped)


class EnvironmentsPipeline:
    def __init__(
        self,
        settings: Settings,
        progress: ProgressSink = NullProgress(),
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.settings = settings
        self.progress = progress
        self.transport = transport
        self.clock = clock

    async def run(self, namespace: Optional[str] = None) -> PipelineResult:
        """
        Collect the environments table rows.

        Raises:
            TransportError: the project listing could not be fetched
            DecodeError: the project listing could not be decoded
        """
        async with GitLabClient(self.settings, transport=self.transport) as client:
            projects = await ProjectDiscoverer(client, self.progress).discover(namespace)

            environment_stage = EnvironmentDiscoverer(
                client, self.settings.environment_concurrency, self.progress
            )
            environments = await environment_stage.discover(projects)

            deployment_stage = DeploymentEnricher(
                client, self.settings.deployment_concurrency, self.progress
            )
            details = await deployment_stage.enrich(environments)

        aggregator = Aggregator()
        rows = aggregator.aggregate(projects, environments, details, now=self.clock())

        result = PipelineResult(
            rows=rows,
            failed_projects=[o.item.path_with_namespace for o in environment_stage.failures],
            failed_environments=[o.item.name for o in deployment_stage.failures],
            dropped=aggregator.dropped,
        )
        if not result.complete:
            logger.warning(
                f"Table is incomplete: {len(result.failed_projects)} project(s) without environments, "
                f"{len(result.failed_environments)} environment(s) without deployment details, "
                f"{len(result.dropped)} environment(s) dropped"
            )
        return result
