"""FlowGuard: deadline risk and scope gating from project-health signals."""

from flowguard.analyzer import analyze, analyze_project, build_project_data
from flowguard.models import FinalResult, ProjectData

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "analyze_project",
    "build_project_data",
    "FinalResult",
    "ProjectData",
]
