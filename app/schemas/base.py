"""Shared schema base: snake_case in Python, camelCase on the wire."""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Largest value an INTEGER column holds
MAX_INT32 = 2**31 - 1


class CamelSchema(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
