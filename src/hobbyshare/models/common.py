"""
Shared base for wire models. The backend speaks camelCase.
"""

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
