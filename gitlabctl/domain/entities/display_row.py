"""Display Row Entity - one rendered line of the environments table."""
from dataclasses import dataclass


@dataclass(frozen=True)
class DisplayRow:
    project: str
    environment: str
    deployment: str = ""
    commit: str = ""
    updated: str = ""

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.project, self.environment)

    def cells(self) -> tuple[str, str, str, str, str]:
        return (self.project, self.environment, self.deployment, self.commit, self.updated)
