from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class DeploymentDetail(BaseModel):
    """The latest deployment of an environment, flattened from the API payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    iid: int
    deployer: str = ""
    ref: str = ""
    short_sha: str = ""
    created_at: datetime
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        flat = dict(data)
        if "deployer" not in flat:
            user = _mapping(data, "user")
            flat["deployer"] = user.get("username") or ""
        if "short_sha" not in flat:
            commit = _mapping(_mapping(data, "deployable"), "commit")
            sha = data.get("sha") or ""
            if not isinstance(sha, str):
                raise ValueError(f"sha must be a string, got {type(sha).__name__}")
            flat["short_sha"] = commit.get("short_id") or sha[:8]
        if flat.get("ref") is None:
            flat["ref"] = ""
        return flat

    @property
    def label(self) -> str:
        if self.deployer:
            return f"{self.iid} by {self.deployer}"
        return str(self.iid)


def _mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Nested object under ``key``; null counts as empty, other shapes are rejected."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object, got {type(value).__name__}")
    return value
