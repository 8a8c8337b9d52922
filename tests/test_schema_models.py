"""Tests for schema models and vocabularies."""

import logging
import sys
from prisma_modeler.config.logging import setup_logging
from prisma_modeler.config.settings import Settings
from prisma_modeler.schema.model import Field, Model, ModelAttribute
from prisma_modeler.schema.relationship import Relationship
from prisma_modeler.schema.vocabulary import (
    MODEL_ATTRIBUTE_SPECS,
    ReferentialAction,
    RelationType,
)


def test_field_accepts_camel_case_aliases():
    """Fields load from the persisted camelCase layout."""
    field = Field.model_validate(
        {"name": "age", "type": "Int", "isRequired": False, "isList": False, "defaultValue": 3}
    )
    assert field.is_required is False
    assert field.default_value == 3
    assert field.attributes == []


def test_default_value_keeps_its_type():
    """Booleans stay booleans and strings stay strings."""
    assert Field(name="flag", type="Boolean", default_value=True).default_value is True
    assert Field(name="flag", type="Boolean", default_value="true").default_value == "true"
    assert Field(name="ratio", type="Float", default_value=1.5).default_value == 1.5


def test_model_ids_are_unique():
    a = Model(name="A")
    b = Model(name="A")
    assert a.id and b.id and a.id != b.id


def test_model_field_lookup():
    model = Model(name="User", fields=[Field(name="id", type="Int")])
    assert model.get_field("id").type == "Int"
    assert model.get_field("email") is None


def test_relationship_defaults():
    rel = Relationship(fromModel="a", toModel="b")
    assert rel.type == RelationType.ONE_TO_MANY
    assert rel.config.fields == []
    assert rel.involves("a") and rel.involves("b") and not rel.involves("c")


def test_model_attribute_table():
    assert not MODEL_ATTRIBUTE_SPECS["@@ignore"].requires_value
    assert all(
        spec.requires_value for name, spec in MODEL_ATTRIBUTE_SPECS.items() if name != "@@ignore"
    )
    assert ModelAttribute(name="@@map", value='"users"').value == '"users"'


def test_vocabulary_helpers():
    assert RelationType.MANY_TO_MANY.is_list
    assert not RelationType.ONE_TO_ONE.is_list
    assert ReferentialAction.SET_DEFAULT.keyword == "SetDefault"
    assert ReferentialAction.CASCADE.keyword == "Cascade"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATASOURCE_PROVIDER", "mysql")
    settings = Settings()
    assert settings.datasource_provider == "mysql"
    assert settings.generator_provider == "prisma-client-js"


def test_console_logging_goes_to_stderr():
    setup_logging(level="DEBUG")
    try:
        handler = logging.getLogger("prisma_modeler").handlers[0]
        assert handler.stream is sys.stderr
    finally:
        setup_logging()
