"""Tests for schema state persistence."""

import json
import pytest
from prisma_modeler.schema.model import Field, Model
from prisma_modeler.schema.relationship import RelationConfig, RelationField, Relationship
from prisma_modeler.schema.state import SchemaState
from prisma_modeler.schema.vocabulary import ReferentialAction, RelationType
from prisma_modeler.utils.state_io import load_state_from_json, save_state_to_json


def _state() -> SchemaState:
    return SchemaState(
        models=[
            Model(id="u1", name="User", fields=[Field(name="id", type="String", attributes=["id"])]),
            Model(
                id="p1",
                name="Post",
                fields=[
                    Field(name="authorId", type="String", is_required=False),
                    Field(name="views", type="Int", default_value=0),
                ],
            ),
        ],
        relationships=[
            Relationship(
                id="r1",
                from_model="p1",
                to_model="u1",
                type=RelationType.ONE_TO_MANY,
                config=RelationConfig(
                    on_delete=ReferentialAction.CASCADE,
                    fields=[RelationField(field_name="authorId", referenced_field="id")],
                ),
            )
        ],
    )


def test_save_and_load_preserves_ids(tmp_path):
    """Relationships reference models by id, so ids must survive a save/load."""
    path = tmp_path / "nested" / "state.json"
    state = _state()
    save_state_to_json(state, path)
    assert load_state_from_json(path) == state


def test_saved_layout_uses_camel_case(tmp_path):
    path = tmp_path / "state.json"
    save_state_to_json(_state(), path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["relationships"][0]["fromModel"] == "p1"
    assert data["relationships"][0]["config"]["onDelete"] == "CASCADE"
    assert data["relationships"][0]["config"]["fields"][0] == {
        "fieldName": "authorId",
        "referencedField": "id",
    }
    assert data["models"][1]["fields"][0]["isRequired"] is False
    assert data["models"][1]["fields"][1]["defaultValue"] == 0


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_state_from_json(tmp_path / "absent.json")


def test_empty_or_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("   ", encoding="utf-8")
    with pytest.raises(ValueError, match="empty"):
        load_state_from_json(path)
    path.write_text('{"models": [{"name": 3}]}', encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to load"):
        load_state_from_json(path)
