"""Tests for the schema state container."""

import pytest
from prisma_modeler.schema.model import Field, Model
from prisma_modeler.schema.relationship import RelationConfig, RelationField, Relationship
from prisma_modeler.schema.state import SchemaState, SchemaValidationError
from prisma_modeler.schema.vocabulary import RelationType


def _state_with_blog():
    state = SchemaState()
    state = state.add_model(Model(name="User", fields=[Field(name="id", type="String")]))
    state = state.add_model(
        Model(
            name="Post",
            fields=[Field(name="id", type="String"), Field(name="authorId", type="String")],
        )
    )
    user, post = state.models
    return state, user, post


def _relationship(from_id, to_id, rel_type=RelationType.ONE_TO_MANY):
    return Relationship(
        from_model=from_id,
        to_model=to_id,
        type=rel_type,
        config=RelationConfig(fields=[RelationField(field_name="authorId", referenced_field="id")]),
    )


def test_add_model_assigns_fresh_id():
    """Committed models get a new id; the original state is untouched."""
    empty = SchemaState()
    candidate = Model(id="draft", name="User", fields=[Field(name="id", type="Int")])
    state = empty.add_model(candidate)
    assert empty.models == []
    assert len(state.models) == 1
    assert state.models[0].id != "draft"
    assert state.models[0].name == "User"


def test_add_model_rejects_errors_but_not_warnings():
    with pytest.raises(SchemaValidationError) as exc:
        SchemaState().add_model(Model(name="user"))
    assert exc.value.diagnostics[0].message.startswith("Model name")

    state = SchemaState().add_model(Model(name="Empty"))
    assert state.models[0].fields == []


def test_add_model_without_validation():
    state = SchemaState().add_model(Model(name="user"), validate=False)
    assert state.models[0].name == "user"


def test_update_model():
    state, user, _ = _state_with_blog()
    updated = state.update_model(user.id, name="Account")
    assert updated.get_model(user.id).name == "Account"
    assert state.get_model(user.id).name == "User"
    with pytest.raises(SchemaValidationError):
        state.update_model(user.id, name="account")


def test_unknown_ids_raise_key_error():
    state, _, _ = _state_with_blog()
    with pytest.raises(KeyError):
        state.update_model("nope", name="X")
    with pytest.raises(KeyError):
        state.delete_relationship("nope")


def test_field_commands():
    state, user, _ = _state_with_blog()
    state = state.add_field(user.id, Field(name="email", type="String"))
    state = state.add_field(user.id, Field(name="name", type="String"), index=0)
    assert state.get_model(user.id).field_names() == ["name", "id", "email"]

    state = state.move_field(user.id, 0, 2)
    assert state.get_model(user.id).field_names() == ["id", "email", "name"]

    state = state.update_field(user.id, 2, Field(name="fullName", type="String"))
    assert state.get_model(user.id).field_names() == ["id", "email", "fullName"]

    state = state.delete_field(user.id, 1)
    assert state.get_model(user.id).field_names() == ["id", "fullName"]

    with pytest.raises(SchemaValidationError):
        state.add_field(user.id, Field(name="id", type="Int"))


def test_add_relationship_validates_against_models():
    state, user, post = _state_with_blog()
    state = state.add_relationship(_relationship(post.id, user.id))
    assert len(state.relationships) == 1
    with pytest.raises(SchemaValidationError):
        state.add_relationship(_relationship(user.id, post.id))


def test_update_relationship():
    state, user, post = _state_with_blog()
    state = state.add_relationship(_relationship(post.id, user.id))
    rel_id = state.relationships[0].id
    state = state.update_relationship(rel_id, type=RelationType.ONE_TO_ONE)
    assert state.get_relationship(rel_id).type == RelationType.ONE_TO_ONE
    assert state.get_relationship(rel_id).config.fields[0].field_name == "authorId"


def test_delete_model_cascades_relationships():
    """Deleting a model removes every relationship that references it."""
    state, user, post = _state_with_blog()
    state = state.add_model(
        Model(name="Comment", fields=[Field(name="id", type="String"), Field(name="authorId", type="String")])
    )
    comment = state.models[2]
    state = state.add_relationship(_relationship(post.id, user.id))
    state = state.add_relationship(_relationship(comment.id, user.id))
    state = state.add_relationship(_relationship(comment.id, post.id))

    after = state.delete_model(user.id)
    assert [m.name for m in after.models] == ["Post", "Comment"]
    assert len(after.relationships) == 1
    assert not any(r.involves(user.id) for r in after.relationships)


def test_delete_relationship():
    state, user, post = _state_with_blog()
    state = state.add_relationship(_relationship(post.id, user.id))
    state = state.delete_relationship(state.relationships[0].id)
    assert state.relationships == []


def test_update_rejects_unknown_keys():
    """Misspelled changes are reported instead of silently dropped."""
    state, user, post = _state_with_blog()
    with pytest.raises(ValueError, match="Unknown Model field"):
        state.update_model(user.id, nme="Account")
    state = state.add_relationship(_relationship(post.id, user.id))
    rel_id = state.relationships[0].id
    with pytest.raises(ValueError, match="Unknown Relationship field"):
        state.update_relationship(rel_id, kind=RelationType.ONE_TO_ONE)


def test_update_relationship_accepts_aliases():
    state, user, post = _state_with_blog()
    state = state.add_relationship(_relationship(post.id, user.id))
    rel_id = state.relationships[0].id
    state = state.add_model(Model(name="Draft", fields=[Field(name="authorId", type="String")]))
    draft = state.models[2]
    state = state.update_relationship(rel_id, fromModel=draft.id)
    assert state.get_relationship(rel_id).from_model == draft.id
