"""
Pydantic models for daily goals.

Goal ids are generated by the client (typically a UUID) and are unique
per identity.
"""

from pydantic import Field, StrictBool, StrictInt

from .base import CamelModel


class GoalCreate(CamelModel):
    id: str = Field(..., examples=["6f1c2a0e-4d0b-4f5e-9a51-0c9f2c3b7d11"])
    name: str = Field(..., examples=["Deep work"])
    daily_target_sessions: StrictInt = Field(..., examples=[4])


class GoalUpdate(CamelModel):
    name: str
    daily_target_sessions: StrictInt
    active: StrictBool


class Goal(CamelModel):
    id: str
    name: str
    daily_target_sessions: int
    active: bool = True
