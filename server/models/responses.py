from pydantic import BaseModel, ConfigDict, Field


class PlanGenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    fitness_plan: str = Field(alias="fitnessPlan")


class ErrorResponse(BaseModel):
    error: str
