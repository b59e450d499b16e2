"""Pydantic base schema for the public JSON contract.

The storefront front-end speaks camelCase (``totalPrice``, ``deliveredAt``);
Python code uses snake_case. Requests accept either spelling, responses are
always serialized with the camelCase aliases.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MessageResponse(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"message": "Plan deleted"}]}}

    message: str
