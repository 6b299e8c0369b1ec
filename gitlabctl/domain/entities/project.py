from typing import Optional

from pydantic import BaseModel, ConfigDict


class Namespace(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    full_path: str = ""


class Project(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    path_with_namespace: str
    namespace: Optional[Namespace] = None

    @property
    def namespace_path(self) -> str:
        """Everything before the project's own path segment."""
        if self.namespace and self.namespace.full_path:
            return self.namespace.full_path
        return self.path_with_namespace.rpartition("/")[0]
