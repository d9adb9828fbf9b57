"""
Zephyr Scale entity models.

Pydantic models for the structured arguments accepted by the Zephyr tools.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ZephyrTestStep(BaseModel):
    """A single step of a STEP_BY_STEP test script."""

    model_config = ConfigDict(populate_by_name=True)

    description: str | None = Field(default=None, description="Step action")
    test_data: str | None = Field(
        default=None, alias="testData", description="Data used by the step"
    )
    expected_result: str | None = Field(
        default=None, alias="expectedResult", description="Expected outcome"
    )
    test_case_key: str | None = Field(
        default=None,
        alias="testCaseKey",
        description="Key of a test case to call instead of an inline step",
    )

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to the camelCase step object used by the REST API."""
        return self.model_dump(by_alias=True, exclude_none=True)
