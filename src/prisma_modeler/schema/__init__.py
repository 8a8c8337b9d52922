"""Schema data model, state container and validators."""

from .vocabulary import (
    SCALAR_TYPES,
    FIELD_ATTRIBUTES,
    MODEL_ATTRIBUTE_SPECS,
    RelationType,
    ReferentialAction,
)
from .model import Field, Model, ModelAttribute
from .relationship import RelationConfig, RelationField, Relationship
from .validators import (
    Diagnostic,
    Location,
    Severity,
    has_errors,
    validate_field,
    validate_model,
    validate_model_attribute,
    validate_relationship,
)
from .state import SchemaState, SchemaValidationError

__all__ = [
    "SCALAR_TYPES",
    "FIELD_ATTRIBUTES",
    "MODEL_ATTRIBUTE_SPECS",
    "RelationType",
    "ReferentialAction",
    "Field",
    "Model",
    "ModelAttribute",
    "RelationConfig",
    "RelationField",
    "Relationship",
    "Diagnostic",
    "Location",
    "Severity",
    "has_errors",
    "validate_field",
    "validate_model",
    "validate_model_attribute",
    "validate_relationship",
    "SchemaState",
    "SchemaValidationError",
]
