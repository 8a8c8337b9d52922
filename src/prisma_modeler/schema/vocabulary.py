"""Fixed vocabularies of the Prisma schema language."""

from enum import Enum
from typing import Dict, Optional, Tuple
from pydantic import BaseModel

SCALAR_TYPES: Tuple[str, ...] = (
    "String",
    "Int",
    "Float",
    "Boolean",
    "DateTime",
    "BigInt",
    "Decimal",
    "Json",
    "Bytes",
)

SCALAR_TYPE_DESCRIPTIONS: Dict[str, str] = {
    "String": "Text values",
    "Int": "Integer numbers",
    "Float": "Decimal numbers",
    "Boolean": "True/false values",
    "DateTime": "Date and time values",
    "BigInt": "Large integer numbers",
    "Decimal": "Precise decimal numbers",
    "Json": "JSON data",
    "Bytes": "Binary data",
}

# Field attribute tokens, stored without the leading "@"
FIELD_ATTRIBUTES: Tuple[str, ...] = (
    "id",
    "unique",
    "default",
    "map",
    "updatedAt",
    "db.Text",
    "db.VarChar",
)


class ModelAttributeSpec(BaseModel):
    """Static definition of a model-level attribute."""

    name: str
    description: str
    requires_value: bool
    single: bool = False  # may appear at most once per model


MODEL_ATTRIBUTE_SPECS: Dict[str, ModelAttributeSpec] = {
    spec.name: spec
    for spec in (
        ModelAttributeSpec(
            name="@@map",
            description="Map model to a different table name",
            requires_value=True,
            single=True,
        ),
        ModelAttributeSpec(
            name="@@id",
            description="Define composite ID",
            requires_value=True,
        ),
        ModelAttributeSpec(
            name="@@unique",
            description="Define composite unique constraint",
            requires_value=True,
        ),
        ModelAttributeSpec(
            name="@@index",
            description="Define database index",
            requires_value=True,
        ),
        ModelAttributeSpec(
            name="@@fulltext",
            description="Define full-text search index",
            requires_value=True,
        ),
        ModelAttributeSpec(
            name="@@ignore",
            description="Ignore model in SQL schema",
            requires_value=False,
            single=True,
        ),
    )
}


def get_model_attribute_spec(name: str) -> Optional[ModelAttributeSpec]:
    """Return the static definition for a model attribute name, if known."""
    return MODEL_ATTRIBUTE_SPECS.get(name)


class RelationType(str, Enum):
    """Cardinality of a relationship."""

    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_MANY = "MANY_TO_MANY"

    @property
    def is_list(self) -> bool:
        return self in (RelationType.ONE_TO_MANY, RelationType.MANY_TO_MANY)

    @property
    def description(self) -> str:
        return _RELATION_DESCRIPTIONS[self]


_RELATION_DESCRIPTIONS = {
    RelationType.ONE_TO_ONE: "Each record in model A has exactly one matching record in model B",
    RelationType.ONE_TO_MANY: "Each record in model A has many matching records in model B",
    RelationType.MANY_TO_MANY: "Multiple records in model A can match multiple records in model B",
}


class ReferentialAction(str, Enum):
    """Behavior applied to dependent rows when the referenced row changes."""

    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"
    NO_ACTION = "NO_ACTION"
    SET_NULL = "SET_NULL"
    SET_DEFAULT = "SET_DEFAULT"

    @property
    def keyword(self) -> str:
        """Spelling used inside a Prisma @relation clause, e.g. SetNull."""
        return "".join(part.capitalize() for part in self.value.split("_"))

    @property
    def description(self) -> str:
        return _ACTION_DESCRIPTIONS[self]


_ACTION_DESCRIPTIONS = {
    ReferentialAction.CASCADE: "Delete or update related records",
    ReferentialAction.RESTRICT: "Prevent deletion or update if related records exist",
    ReferentialAction.NO_ACTION: "Similar to RESTRICT, but deferred until transaction commit",
    ReferentialAction.SET_NULL: "Set foreign key to NULL",
    ReferentialAction.SET_DEFAULT: "Set foreign key to its default value",
}
