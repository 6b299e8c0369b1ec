from gitlabctl.domain.services.aggregation_service import Aggregator
from gitlabctl.domain.services.deployment_service import DeploymentEnricher
from gitlabctl.domain.services.environment_service import EnvironmentDiscoverer
from gitlabctl.domain.services.project_service import ProjectDiscoverer, matches_namespace

__all__ = [
    "Aggregator",
    "DeploymentEnricher",
    "EnvironmentDiscoverer",
    "ProjectDiscoverer",
    "matches_namespace",
]
