"""
API models for the parameter update endpoint.

The request shape mirrors the host's generic JSON binding of parameter
values, which is why each entry may carry a `class` key.
"""

from pydantic import BaseModel, ConfigDict, Field

from paramset.core.models import STRING_PARAMETER_KIND, ParameterValue


class ParameterIn(BaseModel):
    """One submitted (name, value) pair."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    class_: str | None = Field(
        None, alias="class", description="Storage type of the parameter value"
    )
    name: str = Field(..., description="Parameter name")
    value: str = Field(..., description="New parameter value")

    def to_value(self) -> ParameterValue:
        return ParameterValue(
            name=self.name, value=self.value, kind=self.class_ or STRING_PARAMETER_KIND
        )


class SetParameterRequest(BaseModel):
    """Request to update parameters that already exist on a run."""

    job: str = Field(..., description="Full name of the job")
    run: str = Field(..., description="Run identifier within the job")
    parameter: list[ParameterIn] = Field(..., description="Parameters to update")

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "job": "folder/deploy",
                "run": "12",
                "parameter": [
                    {
                        "class": "hudson.model.StringParameterValue",
                        "name": "VERSION",
                        "value": "1.4.2",
                    }
                ],
            }
        }
    )


class ErrorResponse(BaseModel):
    """Error body returned with every non-2xx response."""

    message: str


class OkResponse(BaseModel):
    status: str = "ok"
