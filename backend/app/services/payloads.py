"""Turning request payloads into ORM column values."""

from pydantic import BaseModel


def column_values(
    data: BaseModel,
    json_fields: set[str],
    list_fields: set[str],
    bool_fields: set[str],
) -> dict:
    """Explicitly-set fields of a payload, shaped for the ORM columns.

    JSON columns get plain JSON; an explicit null on a list or flag column
    means "empty" / "no".
    """
    values = data.model_dump(exclude_unset=True)
    values.update(
        data.model_dump(mode="json", by_alias=True, include=json_fields, exclude_unset=True)
    )
    for name, value in values.items():
        if value is None and name in list_fields:
            values[name] = []
        elif value is None and name in bool_fields:
            values[name] = False
    return values
