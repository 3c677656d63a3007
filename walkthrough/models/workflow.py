"""
Recorded workflow models

A workflow is produced by the capture layer and is read-only here.
"""

import json
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel

StepAction = Literal["click", "scroll", "input", "navigate", "wait", "hover"]

KEY_STEP_ACTIONS = ("click", "navigate")


class Coordinates(CamelModel):
    x: float
    y: float


class Viewport(CamelModel):
    width: int = 1920
    height: int = 1080


class WorkflowMetadata(CamelModel):
    browser: str = "chromium"
    viewport: Viewport = Field(default_factory=Viewport)
    recorded_at: Optional[str] = None


class WorkflowStep(CamelModel):
    """A single timestamped interaction"""
    timestamp: float = Field(ge=0)
    action: StepAction
    target: Optional[str] = None
    value: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    dom_snapshot: Optional[str] = None
    screenshot: Optional[str] = None


class Workflow(CamelModel):
    """A recorded sequence of interactions against a target URL"""
    id: str
    url: str
    steps: List[WorkflowStep] = Field(default_factory=list)
    duration: float = Field(ge=0)
    metadata: WorkflowMetadata = Field(default_factory=WorkflowMetadata)

    def actions(self) -> List[str]:
        return [step.action for step in self.steps]


def key_steps(workflow: Workflow) -> List[WorkflowStep]:
    """Steps worth narrating on their own (clicks and navigations)"""
    return [step for step in workflow.steps if step.action in KEY_STEP_ACTIONS]


def load_workflow(path: Path) -> Workflow:
    """Load a recorded workflow from a JSON file"""
    with open(path, "r", encoding="utf-8") as f:
        return Workflow.model_validate(json.load(f))
