"""Shared base model for records persisted to local state."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON form uses camelCase keys.

    Stored records are shared with the browser client, which reads and writes
    camelCase. Both spellings are accepted on input.
    """

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
