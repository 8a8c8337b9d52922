"""Relationship records between models."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from .model import new_id
from .vocabulary import RelationType, ReferentialAction


class RelationField(BaseModel):
    """One foreign-key mapping: a field on the source model and the field it references."""

    model_config = ConfigDict(populate_by_name=True)

    field_name: str = Field(alias="fieldName")
    referenced_field: str = Field(alias="referencedField")

    @property
    def pair(self) -> tuple:
        return (self.field_name, self.referenced_field)


class RelationConfig(BaseModel):
    """Referential actions and field mappings of a relationship."""

    model_config = ConfigDict(populate_by_name=True)

    on_delete: Optional[ReferentialAction] = Field(default=None, alias="onDelete")
    on_update: Optional[ReferentialAction] = Field(default=None, alias="onUpdate")
    fields: List[RelationField] = Field(default_factory=list)


class Relationship(BaseModel):
    """
    Directed association between two models.

    ``from_model`` owns the scalar fields named in ``config.fields[].field_name``;
    ``to_model`` owns the fields named in ``referenced_field``. Both are model ids.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    from_model: str = Field(alias="fromModel")
    to_model: str = Field(alias="toModel")
    type: RelationType = RelationType.ONE_TO_MANY
    config: RelationConfig = Field(default_factory=RelationConfig)

    def involves(self, model_id: str) -> bool:
        return self.from_model == model_id or self.to_model == model_id

    @property
    def is_self_reference(self) -> bool:
        return self.from_model == self.to_model
