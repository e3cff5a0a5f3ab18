"""Shared pydantic configuration for Pulseboard models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PulseboardModel(BaseModel):
    """Immutable model serialised with camelCase keys.

    Stored snapshots keep the key names used by the browser build of the app
    (``createdAt``, ``userLikes``...), while Python code uses snake_case
    attributes. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json_dict(self) -> dict[str, object]:
        """Return a JSON-compatible payload using the storage key names."""

        return self.model_dump(mode="json", by_alias=True)
