from .project import Project as Project
