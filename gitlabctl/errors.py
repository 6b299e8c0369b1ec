"""Exception taxonomy shared by the client, the pipeline stages and the CLI."""
from typing import Optional


class GitLabCtlError(Exception):
    """Base class for all gitlabctl errors."""


class ConfigurationError(GitLabCtlError):
    """Settings are missing or invalid."""


class TransportError(GitLabCtlError):
    """A request to the GitLab API failed at the network or HTTP level."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(GitLabCtlError):
    """A response body could not be decoded into the expected shape."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ResolutionError(GitLabCtlError):
    """An environment references a project that is not part of the run."""

    def __init__(self, environment_name: str, project_id: int):
        super().__init__(
            f"environment '{environment_name}' references unknown project {project_id}"
        )
        self.environment_name = environment_name
        self.project_id = project_id
