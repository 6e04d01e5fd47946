"""
Common base model for API payloads.

Python attributes are snake_case; the JSON representation uses the
camelCase names the web client expects (``focusDuration``,
``currentStreak``...).  Either form is accepted on input.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
