from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlanGenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    input: str | None = None

    @field_validator("user_id", "input", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str | None:
        # clients send ids as numbers too
        return None if value is None else str(value)
