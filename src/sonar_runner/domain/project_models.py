from __future__ import annotations

"""
Project Definition Data Models.

Provides the recursive node used to describe a root project and its
modules, as handed over to the analysis engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sonar_runner.domain.constants import (
    PROPERTY_PROJECT_DESCRIPTION,
    PROPERTY_PROJECT_KEY,
    PROPERTY_PROJECT_NAME,
    PROPERTY_PROJECT_VERSION,
)

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class ProjectDefinition:
    """
    A project or module node of the analysed tree.

    Attributes:
        base_dir: Directory the project's relative paths are resolved against.
        work_dir: Scanner scratch directory of this node.
        properties: Property bag of this node.
        sub_projects: Ordered modules owned by this node.
        parent: Owning project, None for the root.
    """
    base_dir: str
    work_dir: str
    properties: Dict[str, str] = field(default_factory=dict)
    sub_projects: List["ProjectDefinition"] = field(default_factory=list)
    parent: Optional["ProjectDefinition"] = field(default=None, repr=False)

    @property
    def key(self) -> Optional[str]:
        return self.properties.get(PROPERTY_PROJECT_KEY)

    @property
    def name(self) -> Optional[str]:
        return self.properties.get(PROPERTY_PROJECT_NAME)

    @property
    def version(self) -> Optional[str]:
        return self.properties.get(PROPERTY_PROJECT_VERSION)

    @property
    def description(self) -> Optional[str]:
        return self.properties.get(PROPERTY_PROJECT_DESCRIPTION)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_aggregator(self) -> bool:
        return bool(self.sub_projects)

    def add_sub_project(self, child: "ProjectDefinition") -> "ProjectDefinition":
        """
        Attach a module to this project.

        Args:
            child: Freshly built module, not yet owned by another project.

        Returns:
            ProjectDefinition: This project, to allow chaining.
        """
        if child.parent is not None and child.parent is not self:
            raise ValueError(f"Module '{child.key}' already belongs to '{child.parent.key}'.")
        child.parent = self
        self.sub_projects.append(child)
        return self

    def walk(self):
        """Yield this node then every descendant, depth-first."""
        yield self
        for module in self.sub_projects:
            yield from module.walk()

    def to_dict(self) -> Dict[str, Any]:
        """
        Build a JSON-serialisable view of the subtree rooted at this node.
        """
        return {
            "key": self.key,
            "name": self.name,
            "base_dir": self.base_dir,
            "work_dir": self.work_dir,
            "properties": dict(sorted(self.properties.items())),
            "modules": [module.to_dict() for module in self.sub_projects],
        }
