"""Project showcase stored in the remote `projects` table."""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

from ..errors import SyncError, ValidationError

PROJECTS_TABLE = "projects"


def parse_technologies(text: str) -> List[str]:
    """Split a comma-separated technology list, dropping blanks."""
    return [t.strip() for t in (text or "").split(",") if t.strip()]


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class ProjectDraft:
    """Form data for a new project."""
    title: str
    description: str
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    file_url: Optional[str] = None

    def validate(self):
        if not self.title or not self.title.strip():
            raise ValidationError("Project title is required")
        if not self.description or not self.description.strip():
            raise ValidationError("Project description is required")

    def to_row(self, user_id: str) -> dict:
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "github_url": _blank_to_none(self.github_url),
            "live_url": _blank_to_none(self.live_url),
            "technologies": [t.strip() for t in self.technologies if t and t.strip()],
            "file_url": _blank_to_none(self.file_url),
            "user_id": user_id,
        }

    @classmethod
    def from_form(cls, data: Dict[str, Any]) -> "ProjectDraft":
        """
        Build from request JSON; technologies may be a list or a comma string.

        Raises:
            ValidationError: a field has the wrong type
        """
        for key in ("title", "description", "github_url", "live_url", "file_url"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{key} must be a string")

        technologies = data.get("technologies")
        if technologies is None:
            technologies = []
        elif isinstance(technologies, str):
            technologies = parse_technologies(technologies)
        elif not isinstance(technologies, list) or not all(isinstance(t, str) for t in technologies):
            raise ValidationError("technologies must be a list of strings or a comma-separated string")

        return cls(
            title=data.get("title") or "",
            description=data.get("description") or "",
            github_url=data.get("github_url"),
            live_url=data.get("live_url"),
            technologies=list(technologies),
            file_url=data.get("file_url"),
        )


@dataclass
class Project:
    id: str
    user_id: str
    title: str
    description: str
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    file_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            id=str(data.get("id")),
            user_id=str(data.get("user_id")),
            title=data.get("title", ""),
            description=data.get("description", ""),
            github_url=data.get("github_url"),
            live_url=data.get("live_url"),
            technologies=data.get("technologies") or [],
            file_url=data.get("file_url"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


class ProjectRepository:
    """Create, list and delete a user's projects."""

    def __init__(self, client, table_name: str = PROJECTS_TABLE):
        self.client = client
        self.table_name = table_name

    async def list(self, user_id: str) -> List[Project]:
        """Projects of a user, newest first."""
        try:
            response = await (
                self.client.table(self.table_name)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Fetching projects failed: {e}") from e
        return [Project.from_dict(row) for row in response.data or []]

    async def create(self, user_id: str, draft: ProjectDraft) -> Project:
        """
        Insert a project.

        Raises:
            ValidationError: title or description missing
            SyncError: insert failed
        """
        draft.validate()
        row = draft.to_row(user_id)
        try:
            response = await self.client.table(self.table_name).insert(row).execute()
        except Exception as e:
            raise SyncError(f"Creating project failed: {e}") from e

        rows = response.data or []
        if not rows:
            raise SyncError("Creating project returned no row")
        return Project.from_dict(rows[0])

    async def delete(self, user_id: str, project_id: str):
        try:
            await (
                self.client.table(self.table_name)
                .delete()
                .eq("id", project_id)
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Deleting project {project_id} failed: {e}") from e
