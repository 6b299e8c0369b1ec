"""GitLab REST client for projects, environments and their latest deployments."""
import logging
from typing import Any, AsyncIterator, Dict, Optional

from pydantic import ValidationError

from gitlabctl.domain.entities import DeploymentDetail, Environment, Project
from gitlabctl.errors import DecodeError
from gitlabctl.infrastructure.gitlab.base_client import BaseGitLabClient
from gitlabctl.infrastructure.gitlab.paginator import paginate

logger = logging.getLogger(__name__)


class GitLabClient(BaseGitLabClient):
    """Read-only access to the three resources the environments table needs."""

    def list_projects(self) -> AsyncIterator[Project]:
        """All projects visible to the token.

        Namespace scoping is done by the caller; the ``/projects`` listing has
        no namespace filter that behaves the same across GitLab versions.
        """
        params: Dict[str, Any] = {"simple": "true", "order_by": "id", "sort": "asc"}
        if self.settings.membership_only:
            params["membership"] = "true"
        return paginate(self, "/projects", Project, page_size=self.settings.page_size, params=params)

    def list_environments(self, project_id: int) -> AsyncIterator[Environment]:
        return paginate(
            self,
            f"/projects/{project_id}/environments",
            Environment,
            page_size=self.settings.page_size,
            extra_fields={"project_id": project_id},
        )

    async def get_latest_deployment(self, project_id: int, environment_id: int) -> Optional[DeploymentDetail]:
        """Return the environment's last deployment, or None when it was never deployed.

        Raises:
            TransportError: the request failed
            DecodeError: the body is not an environment object
        """
        response = await self._make_request("GET", f"/projects/{project_id}/environments/{environment_id}")
        body = self._decode_json(response)
        if not isinstance(body, dict):
            raise DecodeError(
                f"Expected a JSON object from {response.request.url}, got {type(body).__name__}",
                url=str(response.request.url),
            )

        last_deployment = body.get("last_deployment")
        if not last_deployment:
            return None
        try:
            return DeploymentDetail.model_validate(last_deployment)
        except ValidationError as e:
            raise DecodeError(
                f"Could not decode last deployment from {response.request.url}: {e}",
                url=str(response.request.url),
            ) from e
