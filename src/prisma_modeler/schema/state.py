"""Application state container holding the committed models and relationships."""

from typing import Any, List, Optional
from pydantic import BaseModel, Field
from .model import Field as ModelField, Model, new_id
from .relationship import Relationship
from .validators import Diagnostic, has_errors, validate_model, validate_relationship
from prisma_modeler.config.logging import get_logger

logger = get_logger(__name__)


class SchemaValidationError(ValueError):
    """Raised when a commit is attempted on an entity with error diagnostics."""

    def __init__(self, message: str, diagnostics: List[Diagnostic]):
        super().__init__(message)
        self.diagnostics = diagnostics


class SchemaState(BaseModel):
    """
    Snapshot of the schema being designed.

    Every command returns a new SchemaState and leaves the receiver untouched,
    so validators and the generator can work on any snapshot safely.
    """

    models: List[Model] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)

    # Lookups

    def get_model(self, model_id: str) -> Optional[Model]:
        for m in self.models:
            if m.id == model_id:
                return m
        return None

    def get_relationship(self, relationship_id: str) -> Optional[Relationship]:
        for r in self.relationships:
            if r.id == relationship_id:
                return r
        return None

    def _require_model(self, model_id: str) -> Model:
        model = self.get_model(model_id)
        if model is None:
            raise KeyError(f"Unknown model id: {model_id}")
        return model

    def _require_relationship(self, relationship_id: str) -> Relationship:
        rel = self.get_relationship(relationship_id)
        if rel is None:
            raise KeyError(f"Unknown relationship id: {relationship_id}")
        return rel

    # Model commands

    def add_model(self, model: Model, validate: bool = True) -> "SchemaState":
        """Append a copy of ``model`` under a freshly generated id."""
        if validate:
            _check_model(model)
        created = model.model_copy(update={"id": new_id()}, deep=True)
        logger.info(f"Adding model '{created.name}' ({created.id})")
        return self._with(models=[*self.models, created])

    def update_model(self, model_id: str, validate: bool = True, **changes: Any) -> "SchemaState":
        """Merge ``changes`` (name, fields, attributes) into the model with ``model_id``."""
        current = self._require_model(model_id)
        changes.pop("id", None)
        updated = Model.model_validate(
            {**current.model_dump(), **_dump_changes(Model, changes), "id": model_id}
        )
        return self._replace_model(updated, validate)

    def delete_model(self, model_id: str) -> "SchemaState":
        """Remove a model and every relationship that references it."""
        self._require_model(model_id)
        remaining = [r for r in self.relationships if not r.involves(model_id)]
        dropped = len(self.relationships) - len(remaining)
        logger.info(f"Deleting model {model_id} and {dropped} relationship(s)")
        return self._with(
            models=[m for m in self.models if m.id != model_id],
            relationships=remaining,
        )

    # Field commands

    def add_field(
        self,
        model_id: str,
        field: ModelField,
        index: Optional[int] = None,
        validate: bool = True,
    ) -> "SchemaState":
        """Insert ``field`` at ``index`` (appended when None)."""
        model = self._require_model(model_id)
        fields = list(model.fields)
        if index is None:
            fields.append(field)
        else:
            fields.insert(index, field)
        return self._replace_model(model.model_copy(update={"fields": fields}), validate)

    def update_field(
        self, model_id: str, index: int, field: ModelField, validate: bool = True
    ) -> "SchemaState":
        model = self._require_model(model_id)
        fields = list(model.fields)
        fields[index] = field
        return self._replace_model(model.model_copy(update={"fields": fields}), validate)

    def delete_field(self, model_id: str, index: int) -> "SchemaState":
        model = self._require_model(model_id)
        fields = list(model.fields)
        del fields[index]
        return self._replace_model(model.model_copy(update={"fields": fields}), False)

    def move_field(self, model_id: str, from_index: int, to_index: int) -> "SchemaState":
        """Reorder a field; emission order follows field order."""
        model = self._require_model(model_id)
        fields = list(model.fields)
        fields.insert(to_index, fields.pop(from_index))
        return self._replace_model(model.model_copy(update={"fields": fields}), False)

    # Relationship commands

    def add_relationship(self, relationship: Relationship, validate: bool = True) -> "SchemaState":
        """Append a copy of ``relationship`` under a freshly generated id."""
        if validate:
            self._check_relationship(relationship)
        created = relationship.model_copy(update={"id": new_id()}, deep=True)
        logger.info(
            f"Adding {created.type.value} relationship {created.from_model} -> {created.to_model}"
        )
        return self._with(relationships=[*self.relationships, created])

    def update_relationship(
        self, relationship_id: str, validate: bool = True, **changes: Any
    ) -> "SchemaState":
        current = self._require_relationship(relationship_id)
        changes.pop("id", None)
        updated = Relationship.model_validate(
            {**current.model_dump(), **_dump_changes(Relationship, changes), "id": relationship_id}
        )
        if validate:
            self._check_relationship(updated)
        return self._with(
            relationships=[updated if r.id == relationship_id else r for r in self.relationships]
        )

    def delete_relationship(self, relationship_id: str) -> "SchemaState":
        self._require_relationship(relationship_id)
        return self._with(
            relationships=[r for r in self.relationships if r.id != relationship_id]
        )

    # Internals

    def _replace_model(self, model: Model, validate: bool) -> "SchemaState":
        if validate:
            _check_model(model)
        return self._with(models=[model if m.id == model.id else m for m in self.models])

    def _check_relationship(self, relationship: Relationship) -> None:
        diagnostics = validate_relationship(relationship, self.models)
        if has_errors(diagnostics):
            raise SchemaValidationError(
                f"Relationship {relationship.from_model} -> {relationship.to_model} is invalid",
                diagnostics,
            )

    def _with(self, **update: Any) -> "SchemaState":
        return self.model_copy(update=update)


def _check_model(model: Model) -> None:
    diagnostics = validate_model(model)
    if has_errors(diagnostics):
        raise SchemaValidationError(f"Model '{model.name}' is invalid", diagnostics)


def _dump_changes(model_cls: type, changes: dict) -> dict:
    """
    Turn ``changes`` into plain data keyed by field name for re-validation.

    Raises:
        ValueError: If a key is neither a field name nor an alias of ``model_cls``
    """
    by_key = {}
    for name, info in model_cls.model_fields.items():
        by_key[name] = name
        if info.alias:
            by_key[info.alias] = name
    unknown = sorted(k for k in changes if k not in by_key)
    if unknown:
        raise ValueError(f"Unknown {model_cls.__name__} field(s): {', '.join(unknown)}")

    out = {}
    for raw_key, value in changes.items():
        key = by_key[raw_key]
        if isinstance(value, BaseModel):
            out[key] = value.model_dump()
        elif isinstance(value, list):
            out[key] = [v.model_dump() if isinstance(v, BaseModel) else v for v in value]
        else:
            out[key] = value
    return out
