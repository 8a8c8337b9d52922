"""Utilities for loading and saving schema state from/to JSON files."""

from pathlib import Path
from pydantic import TypeAdapter, ValidationError
from prisma_modeler.schema.state import SchemaState


def load_state_from_json(state_path: Path) -> SchemaState:
    """
    Load SchemaState from a JSON file.

    Args:
        state_path: Path to the JSON file

    Returns:
        Loaded SchemaState instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or does not hold a valid state
    """
    state_path = Path(state_path)
    if not state_path.exists():
        raise FileNotFoundError(f"State file not found: {state_path}")

    file_content = state_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"State file is empty: {state_path}")

    try:
        return TypeAdapter(SchemaState).validate_json(file_content)
    except ValidationError as e:
        raise ValueError(f"Failed to load schema state from {state_path}: {e}") from e


def dump_state_json(state: SchemaState) -> str:
    """Serialize state with the camelCase keys used by the persisted layout."""
    return state.model_dump_json(indent=2, by_alias=True)


def save_state_to_json(state: SchemaState, state_path: Path) -> None:
    """
    Save SchemaState to a JSON file.

    Note:
        Creates parent directories if they don't exist.
    """
    state_path = Path(state_path)
    state_path.parent.mkdir(parents=True, exist_ok=True)
    state_path.write_text(dump_state_json(state), encoding="utf-8")
