from typing import Optional

from pydantic import BaseModel, ConfigDict


class Environment(BaseModel):
    """A deployment target of one project.

    The environments endpoint does not echo the owning project, so
    ``project_id`` is filled in by the client that fetched it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    project_id: int
    state: Optional[str] = None
    external_url: Optional[str] = None

    @property
    def key(self) -> tuple[int, int]:
        # Environment ids are only guaranteed unique within a project
        return (self.project_id, self.id)
