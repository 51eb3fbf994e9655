"""
Cascade outcome types.

Each recipient attempt resolves to exactly one of RecipientSuccess or
RecipientFailure; the `kind` field is the discriminator.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class RecipientSuccess(BaseModel):
    """Draft generated and stored for a recipient."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    user_id: str
    user_name: str
    user_role: str
    user_company: str
    draft_id: str
    content: str


class RecipientFailure(BaseModel):
    """Generation failed for a recipient; no draft was stored."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    user_id: str
    user_name: str
    user_role: str
    user_company: str
    error: str


RecipientOutcome = Annotated[
    Union[RecipientSuccess, RecipientFailure],
    Field(discriminator="kind"),
]


class CascadeRunResult(BaseModel):
    """Aggregated result of one cascade run, in recipient resolution order."""
    cascade_job_id: str
    results: list[RecipientOutcome]

    @property
    def succeeded(self) -> list[RecipientSuccess]:
        return [r for r in self.results if isinstance(r, RecipientSuccess)]

    @property
    def failed(self) -> list[RecipientFailure]:
        return [r for r in self.results if isinstance(r, RecipientFailure)]
