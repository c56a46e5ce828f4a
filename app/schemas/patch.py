from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Patch(BaseModel):
    """A single RFC 6902 patch operation."""

    model_config = ConfigDict(populate_by_name=True)

    op: str = ""
    path: str = ""
    from_: str = Field("", alias="from")
    value: Any = None

    @property
    def has_value(self) -> bool:
        # an explicit JSON null is treated as absent
        return self.value is not None
