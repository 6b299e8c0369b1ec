from gitlabctl.domain.entities.deployment import DeploymentDetail
from gitlabctl.domain.entities.display_row import DisplayRow
from gitlabctl.domain.entities.environment import Environment
from gitlabctl.domain.entities.project import Project

__all__ = ["DeploymentDetail", "DisplayRow", "Environment", "Project"]
