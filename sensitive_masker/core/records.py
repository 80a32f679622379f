from __future__ import annotations

from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python


class RecordConversionError(ValueError):
    """Raised when a typed record cannot be flattened into a string-keyed map."""


def to_generic_map(record: Any) -> dict[str, Any]:
    """Convert a typed record into its JSON-shaped ``dict`` form.

    Pydantic models, dataclasses and plain mappings are supported. Field
    aliases are honoured, so a model declaring ``alias="accountNumber"`` comes
    out keyed by ``accountNumber``.

    Raises:
        RecordConversionError: If the record cannot be serialized or does not
            serialize to a JSON object.
    """
    try:
        data = to_jsonable_python(record, by_alias=True)
    except PydanticSerializationError as exc:
        raise RecordConversionError(
            f"cannot convert {type(record).__name__} to a generic map: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise RecordConversionError(
            f"{type(record).__name__} did not serialize to an object "
            f"(got {type(data).__name__})"
        )
    return data
