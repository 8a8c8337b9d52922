"""Render the schema data model as a Prisma schema document."""

import json
from typing import Dict, List, Sequence
from prisma_modeler.schema.model import Field, Model, ModelAttribute
from prisma_modeler.schema.relationship import RelationField, Relationship
from prisma_modeler.schema.vocabulary import RelationType
from prisma_modeler.config.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PROVIDER = "postgresql"
DEFAULT_URL_ENV = "DATABASE_URL"
DEFAULT_CLIENT_PROVIDER = "prisma-client-js"

INDENT = "  "

# Types whose default literal is written as a quoted string
_QUOTED_DEFAULT_TYPES = {"String", "DateTime", "Json", "Bytes"}


def generate_schema(
    models: Sequence[Model],
    relationships: Sequence[Relationship],
    *,
    provider: str = DEFAULT_PROVIDER,
    url_env: str = DEFAULT_URL_ENV,
    client_provider: str = DEFAULT_CLIENT_PROVIDER,
) -> str:
    """
    Generate the complete Prisma schema.

    Output follows the order of ``models``; relation fields follow the order of
    ``relationships``. No validation is performed: ids that do not resolve and
    mappings to missing fields are rendered verbatim.

    Args:
        models: Models in emission order
        relationships: All relationships of the schema
        provider: Datasource provider
        url_env: Environment variable holding the database URL
        client_provider: Generator client provider

    Returns:
        Schema text, newline-terminated
    """
    names = {m.id: m.name for m in models}
    blocks = [
        "\n".join(
            [
                "datasource db {",
                f'{INDENT}provider = "{provider}"',
                f'{INDENT}url      = env("{url_env}")',
                "}",
            ]
        ),
        "\n".join(
            [
                "generator client {",
                f'{INDENT}provider = "{client_provider}"',
                "}",
            ]
        ),
    ]
    for model in models:
        blocks.append(generate_model(model, relationships, names))

    logger.debug(
        f"Generated schema for {len(models)} model(s), {len(relationships)} relationship(s)"
    )
    return "\n\n".join(blocks) + "\n"


def generate_model(
    model: Model,
    relationships: Sequence[Relationship],
    names: Dict[str, str],
) -> str:
    """Render a single `model` block, including synthesized relation fields."""
    lines: List[str] = [format_model_attribute(attr) for attr in model.attributes]
    lines.append(f"model {model.name} {{")

    for f in model.fields:
        lines.append(f"{INDENT}{f.name} {format_field_type(f)}{format_field_attributes(f)}")

    relation_lines = generate_relation_fields(model, relationships, names)
    if relation_lines:
        if model.fields:
            lines.append("")
        lines.extend(relation_lines)

    lines.append("}")
    return "\n".join(lines)


def format_model_attribute(attr: ModelAttribute) -> str:
    if attr.value:
        return f"{attr.name}({attr.value})"
    return attr.name


def format_field_type(field: Field) -> str:
    """Type expression: list takes precedence over optionality."""
    if field.is_list:
        return f"{field.type}[]"
    if field.is_required:
        return field.type
    return f"{field.type}?"


def format_field_attributes(field: Field) -> str:
    if not field.attributes:
        return ""
    rendered = []
    for token in field.attributes:
        if token == "default" and field.has_default:
            rendered.append(f"@default({format_default_value(field)})")
        else:
            rendered.append(f"@{token}")
    return " " + " ".join(rendered)


def format_default_value(field: Field) -> str:
    value = field.default_value
    if isinstance(value, bool):
        return "true" if value else "false"
    if field.type in _QUOTED_DEFAULT_TYPES:
        return json.dumps(str(value))
    return str(value)


def generate_relation_fields(
    model: Model,
    relationships: Sequence[Relationship],
    names: Dict[str, str],
) -> List[str]:
    """
    Synthesize the relation fields a model needs.

    One line per mapping entry of each relationship the model owns, plus the
    reverse side of every many-to-many relationship pointing at it. Field names
    never collide with the model's ordinary fields or with each other.
    """
    lines: List[str] = []
    taken = set(model.field_names())

    for rel in relationships:
        if rel.from_model != model.id:
            continue
        target = names.get(rel.to_model, rel.to_model)
        suffix = "[]" if rel.type.is_list else ""
        for mapping in rel.config.fields:
            args = [
                f"fields: [{mapping.field_name}]",
                f"references: [{mapping.referenced_field}]",
            ]
            if rel.config.on_delete:
                args.append(f"onDelete: {rel.config.on_delete.keyword}")
            if rel.config.on_update:
                args.append(f"onUpdate: {rel.config.on_update.keyword}")
            if rel.type == RelationType.MANY_TO_MANY:
                args.append(f"name: {json.dumps(relation_name(rel))}")
            field_name = _claim(relation_field_name(mapping, target), taken)
            lines.append(f"{INDENT}{field_name} {target}{suffix} @relation({', '.join(args)})")

    for rel in relationships:
        if rel.to_model != model.id or rel.type != RelationType.MANY_TO_MANY:
            continue
        source = names.get(rel.from_model, rel.from_model)
        field_name = _claim(_lower_first(source), taken)
        lines.append(f"{INDENT}{field_name} {source}[] @relation({json.dumps(relation_name(rel))})")

    return lines


def _claim(name: str, taken: set) -> str:
    """Return ``name`` or the first free ``<name>Related``, ``<name>Related2``, ... and reserve it."""
    candidate = name
    n = 1
    while candidate in taken:
        candidate = f"{name}Related" if n == 1 else f"{name}Related{n}"
        n += 1
    taken.add(candidate)
    return candidate


def relation_name(relationship: Relationship) -> str:
    """Name shared by both sides of a many-to-many relation."""
    return relationship.id


def relation_field_name(mapping: RelationField, target: str) -> str:
    """Derive the relation field name, e.g. authorId -> author."""
    name = mapping.field_name
    for suffix in ("_id", "Id", "ID"):
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return _lower_first(target)


def _lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]
