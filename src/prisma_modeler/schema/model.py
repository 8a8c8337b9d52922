"""Model and field definitions for the schema designer."""

from typing import List, Optional, Union
from uuid import uuid4
from pydantic import BaseModel, ConfigDict, Field as PydanticField

# bool must come first so True/False are not coerced into numbers
DefaultValue = Union[bool, int, float, str]


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return uuid4().hex


class Field(BaseModel):
    """A named, typed column of a model."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str = ""  # scalar type token; left free-form so validation can report it
    is_required: bool = PydanticField(default=True, alias="isRequired")
    is_list: bool = PydanticField(default=False, alias="isList")
    attributes: List[str] = PydanticField(default_factory=list)  # e.g. ["id", "default"]
    default_value: Optional[DefaultValue] = PydanticField(
        default=None, alias="defaultValue"
    )

    @property
    def has_default(self) -> bool:
        return self.default_value is not None


class ModelAttribute(BaseModel):
    """A model-level attribute such as @@map("users") or @@ignore."""

    name: str
    value: Optional[str] = None


class Model(BaseModel):
    """An entity definition, rendered as a Prisma `model` block."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = PydanticField(default_factory=new_id)
    name: str
    fields: List[Field] = PydanticField(default_factory=list)
    attributes: List[ModelAttribute] = PydanticField(default_factory=list)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None
