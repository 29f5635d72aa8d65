"""
Member model for the Library Catalogue.

Members are the people who borrow books. Their IDs are handed out by the
store from a sequence that starts at 1 and is never reused. The name is
fixed at registration; the email is optional and is the only field that
can change, through ``CatalogueService.update_member_email``.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Member(BaseModel):
    """Represents a registered library member."""

    id: int = Field(
        ...,
        description="Sequential member ID assigned by the catalogue",
        ge=1,
        examples=[1, 2, 42],
    )

    name: str = Field(
        ...,
        description="Full name of the member",
        examples=["Jane Doe", "John Smith"],
    )

    email: str | None = Field(
        None,
        description="Contact email; None when the member has none",
        examples=["jane.doe@example.com", None],
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        """Store a blank email as no email at all."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def has_email(self) -> bool:
        return self.email is not None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
            }
        },
    )
