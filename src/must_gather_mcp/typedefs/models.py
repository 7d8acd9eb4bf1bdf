from typing import Any

from pydantic import BaseModel, ConfigDict


class TypeDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    definition: str
    source_note: str = ""
    referenced_type_names: tuple[str, ...] = ()
    example_value: Any = None

    def without_example(self) -> "TypeDescriptor":
        if self.example_value is None:
            return self
        return self.model_copy(update={"example_value": None})
