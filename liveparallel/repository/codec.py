"""Conversion between scenario entities and wire documents.

Documents use camelCase keys and ISO-8601 UTC timestamps; the document id is kept
outside the document body.
"""

from datetime import datetime, timezone
from typing import Any

from cattrs.gen import make_dict_structure_fn, make_dict_unstructure_fn, override
from cattrs.preconf.json import make_converter

from ..models.scenario import Scenario

# This converter instance should be used to un/structure all documents written by this library.
# Hooks for field types must be registered before the Scenario hooks are generated.
converter = make_converter()


def to_utc(dt: datetime) -> datetime:
    """Normalize to an aware UTC datetime; naive values are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@converter.register_unstructure_hook
def _unstructure_datetime(dt: datetime) -> str:
    return to_utc(dt).isoformat()


@converter.register_structure_hook
def _structure_datetime(value: str, _) -> datetime:
    return to_utc(datetime.fromisoformat(value))


_SCENARIO_RENAMES = {
    "owner_id": "ownerId",
    "alternative_path": "alternativePath",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}

converter.register_unstructure_hook(
    Scenario,
    make_dict_unstructure_fn(
        Scenario,
        converter,
        id=override(omit=True),
        **{name: override(rename=wire_name) for name, wire_name in _SCENARIO_RENAMES.items()},
    ),
)
converter.register_structure_hook(
    Scenario,
    make_dict_structure_fn(
        Scenario,
        converter,
        **{name: override(rename=wire_name) for name, wire_name in _SCENARIO_RENAMES.items()},
    ),
)


def encode_scenario(scenario: Scenario) -> dict[str, Any]:
    """The document body for a scenario, without its id."""
    return converter.unstructure(scenario)


def decode_scenario(document_id: str, data: dict[str, Any]) -> Scenario:
    return converter.structure({**data, "id": document_id}, Scenario)
