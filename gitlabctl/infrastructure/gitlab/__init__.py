from gitlabctl.infrastructure.gitlab.base_client import BaseGitLabClient
from gitlabctl.infrastructure.gitlab.gitlab_client import GitLabClient
from gitlabctl.infrastructure.gitlab.paginator import collect, paginate

__all__ = ["BaseGitLabClient", "GitLabClient", "collect", "paginate"]
