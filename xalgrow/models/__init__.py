from xalgrow.models.user import User
from xalgrow.models.project import Project
from xalgrow.models.file import File
from xalgrow.models.template import Template

__all__ = ["User", "Project", "File", "Template"]
