"""Aggregation Service - joins projects, environments and deployments into table rows."""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from gitlabctl.domain.entities import DeploymentDetail, DisplayRow, Environment, Project
from gitlabctl.errors import ResolutionError
from gitlabctl.utils import humanize_delta

logger = logging.getLogger(__name__)


class Aggregator:
    def __init__(self):
        self.dropped: List[ResolutionError] = []

    def _resolve(self, projects_by_id: Dict[int, Project], environment: Environment) -> Project:
        project = projects_by_id.get(environment.project_id)
        if project is None:
            raise ResolutionError(environment.name, environment.project_id)
        return project

    def aggregate(
        self,
        projects: Sequence[Project],
        environments: Sequence[Environment],
        deployment_details: Mapping[Tuple[int, int], DeploymentDetail],
        now: Optional[datetime] = None,
    ) -> List[DisplayRow]:
        """
        Build one row per environment, sorted by project path then environment name.

        Environments whose project is not in ``projects`` are dropped and
        logged. Environments without deployment details get blank
        deployment, commit and updated cells.
        """
        now = now or datetime.now(timezone.utc)
        projects_by_id = {project.id: project for project in projects}

        rows: List[DisplayRow] = []
        self.dropped = []
        for environment in environments:
            try:
                project = self._resolve(projects_by_id, environment)
            except ResolutionError as e:
                self.dropped.append(e)
                logger.warning(f"Dropping environment: {e}")
                continue

            detail = deployment_details.get(environment.key)
            if detail is None:
                rows.append(DisplayRow(project=project.path_with_namespace, environment=environment.name))
                continue
            rows.append(
                DisplayRow(
                    project=project.path_with_namespace,
                    environment=environment.name,
                    deployment=detail.label,
                    commit=detail.short_sha,
                    updated=humanize_delta(detail.created_at, now),
                )
            )

        return sorted(rows, key=lambda row: row.sort_key)
