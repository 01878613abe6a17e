"""
Execution Step Model

A single sub-action logged inside one method execution.

DESIGN RULES:
- Pure data container
- Immutable after creation
- Created only by ExecutionInfo
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExecutionStep:
    """
    Immutable record of one logged step.
    
    Captures:
    - What happened (description, optional name)
    - When (elapsed ms since the owning method started)
    - How long since the previous step (delta ms, 0 for the first one)
    """
    
    description: str
    elapsed_milliseconds: int
    delta_with_previous_step: int
    name: Optional[str] = None
