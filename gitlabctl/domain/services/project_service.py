"""Project Service - discovers the projects whose environments are listed."""
import logging
from typing import List, Optional

from gitlabctl.domain.entities import Project
from gitlabctl.domain.services.progress import NullProgress, ProgressSink
from gitlabctl.infrastructure.gitlab import GitLabClient, collect
from gitlabctl.utils import StageTimer

logger = logging.getLogger(__name__)


def matches_namespace(project: Project, namespace: Optional[str]) -> bool:
    """Whether ``project`` lives under ``namespace`` (case-insensitive).

    The filter matches whole leading path segments, so ``team-a`` selects
    ``team-a/svc`` and ``team-a/sub/svc`` but not ``team-ab/svc``. A filter
    without a slash also matches the innermost group name, e.g. ``backend``
    selects ``org/backend/api``.
    """
    if not namespace:
        return True
    wanted = namespace.strip("/").lower()
    if not wanted:
        return True
    path = project.path_with_namespace.lower()
    if path == wanted or path.startswith(wanted + "/"):
        return True
    if "/" not in wanted:
        return project.namespace_path.lower().rpartition("/")[2] == wanted
    return False


class ProjectDiscoverer:
    def __init__(self, client: GitLabClient, progress: ProgressSink = NullProgress()):
        self.client = client
        self.progress = progress

    async def discover(self, namespace: Optional[str] = None) -> List[Project]:
        """
        Fetch every visible project and keep those under ``namespace``.

        Raises:
            TransportError: a page of the project listing could not be fetched
            DecodeError: a page of the project listing could not be decoded
        """
        with StageTimer() as timer:
            projects = await collect(self.client.list_projects())
            selected = [project for project in projects if matches_namespace(project, namespace)]

        if namespace:
            logger.debug(f"{len(selected)} of {len(projects)} projects match namespace '{namespace}'")
        self.progress.stage_completed(f"Retrieved {len(selected)} projects", timer.elapsed)
        return selected
