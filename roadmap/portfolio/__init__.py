"""Portfolio module: the project showcase."""

from .projects import Project, ProjectDraft, ProjectRepository, parse_technologies

__all__ = [
    "Project",
    "ProjectDraft",
    "ProjectRepository",
    "parse_technologies",
]
