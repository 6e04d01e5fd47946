"""
Pydantic model for per-user timer settings.

Durations are minutes; ``long_break_interval`` is the number of focus
sessions between long breaks.
"""

from pydantic import Field, StrictInt

from .base import CamelModel


class UserSettings(CamelModel):
    focus_duration: StrictInt = Field(..., examples=[25])
    short_break_duration: StrictInt = Field(..., examples=[5])
    long_break_duration: StrictInt = Field(..., examples=[15])
    long_break_interval: StrictInt = Field(..., examples=[4])
