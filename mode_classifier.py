from enum import Enum
from typing import Dict

from project_walker import ProjectSnapshot

FRONTEND_DIRS = ("src", "src/pages", "src/components", "pages", "components", "app")


class Mode(str, Enum):
    FRONTEND = "FRONTEND"
    BACKEND = "BACKEND"
    FULLSTACK = "FULLSTACK"

    @property
    def architecture(self) -> str:
        return self.value.capitalize()


def has_frontend_signal(snapshot: ProjectSnapshot) -> bool:
    return any(snapshot.is_dir(d) for d in FRONTEND_DIRS)


def classify(has_frontend: bool, backend_counts: Dict[str, int]) -> Mode:
    """
    backend_counts carries the routes/controllers/models totals; any of them
    above zero is a backend signal.
    """
    has_backend = any(backend_counts.get(k, 0) > 0 for k in ("routes", "controllers", "models"))
    if has_frontend and has_backend:
        return Mode.FULLSTACK
    if has_backend:
        return Mode.BACKEND
    return Mode.FRONTEND
