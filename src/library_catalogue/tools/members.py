"""
Member tools for the Library Catalogue MCP server.

1. register_member: Register a member under the next sequential ID
2. update_member_email: Change or clear a member's email
3. get_member: Member details with loan counts
4. list_members: All members by name with loan counts
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..database import (
    CirculationRepository,
    MemberCreateSchema,
    MemberRepository,
    NotFoundError,
    get_store,
)
from ..models import LoanStats, Member
from ..validators import InvalidInputError, normalize_email
from .common import error_result, parse_arguments, text_result

logger = logging.getLogger(__name__)


def email_field_validator(v: str | None) -> str | None:
    """Blank means no email; anything else must look like an address."""
    if v is None or not v.strip():
        return None
    try:
        return normalize_email(v)
    except InvalidInputError as e:
        raise ValueError(str(e)) from e


def member_data(member: Member, stats: LoanStats | None) -> dict[str, Any]:
    data = member.model_dump(mode="json")
    stats = stats or LoanStats()
    data["total_loans"] = stats.total
    data["active_loans"] = stats.active
    return data


def member_line(member: Member, stats: LoanStats | None) -> str:
    stats = stats or LoanStats()
    return (
        f"ID: {member.id} | Name: {member.name} | Email: {member.email or '(none)'}"
        f" | Total loans: {stats.total} | Active loans: {stats.active}"
    )


# =============================================================================
# REGISTER MEMBER
# =============================================================================


class RegisterMemberInput(BaseModel):
    """Input schema for the register_member tool."""

    name: str = Field(..., description="Member's full name", min_length=1, examples=["Jane Doe"])

    email: str | None = Field(
        default=None,
        description="Optional contact email",
        examples=["jane.doe@example.com"],
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return email_field_validator(v)


async def register_member_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the register_member tool."""
    params = parse_arguments(RegisterMemberInput, arguments, "register_member")
    if isinstance(params, dict):
        return params

    member = MemberRepository(get_store()).register(MemberCreateSchema(**params.model_dump()))
    return text_result(
        f"Member registered. ID: {member.id}",
        {"member": member_data(member, None)},
    )


# =============================================================================
# UPDATE EMAIL
# =============================================================================


class UpdateMemberEmailInput(BaseModel):
    """Input schema for the update_member_email tool."""

    member_id: int = Field(..., description="ID of the member", ge=1, examples=[1])

    email: str | None = Field(
        default=None,
        description="New email; omit or leave blank to clear it",
        examples=["jane@example.com", ""],
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return email_field_validator(v)


async def update_member_email_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the update_member_email tool."""
    params = parse_arguments(UpdateMemberEmailInput, arguments, "update_member_email")
    if isinstance(params, dict):
        return params

    try:
        member = MemberRepository(get_store()).update_email(params.member_id, params.email)
    except NotFoundError as e:
        logger.info("update_member_email rejected: %s", e)
        return error_result(str(e))

    message = "Email updated successfully!" if member.has_email else "Email cleared."
    return text_result(message, {"member": member.model_dump(mode="json")})


# =============================================================================
# MEMBER QUERIES
# =============================================================================


class GetMemberInput(BaseModel):
    """Input schema for the get_member tool."""

    member_id: int = Field(..., description="ID of the member", ge=1, examples=[1])


async def get_member_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the get_member tool."""
    params = parse_arguments(GetMemberInput, arguments, "get_member")
    if isinstance(params, dict):
        return params

    store = get_store()
    member = MemberRepository(store).get_by_id(params.member_id)
    if member is None:
        return error_result(f"Member {params.member_id} not found")

    stats = CirculationRepository(store).compute_stats_by_member().get(member.id)
    return text_result(member_line(member, stats), {"member": member_data(member, stats)})


async def list_members_handler(arguments: dict[str, Any] | None = None) -> dict[str, Any]:
    """Handler for the list_members tool. Takes no arguments."""
    store = get_store()
    members = MemberRepository(store).list_sorted_by_name()
    if not members:
        return text_result("No members found!", {"members": []})

    all_stats = CirculationRepository(store).compute_stats_by_member()
    return text_result(
        "\n".join(member_line(m, all_stats.get(m.id)) for m in members),
        {"members": [member_data(m, all_stats.get(m.id)) for m in members]},
    )


# =============================================================================
# TOOL DEFINITIONS
# =============================================================================

register_member = {
    "name": "register_member",
    "description": "Register a library member. IDs are assigned sequentially from 1.",
    "inputSchema": RegisterMemberInput.model_json_schema(),
    "handler": register_member_handler,
}

update_member_email = {
    "name": "update_member_email",
    "description": "Change a member's email address, or clear it by sending a blank value.",
    "inputSchema": UpdateMemberEmailInput.model_json_schema(),
    "handler": update_member_email_handler,
}

get_member = {
    "name": "get_member",
    "description": "Show a member's details with their total and active loan counts.",
    "inputSchema": GetMemberInput.model_json_schema(),
    "handler": get_member_handler,
}

list_members = {
    "name": "list_members",
    "description": "List members by name (case-insensitive) with loan counts.",
    "inputSchema": {"type": "object", "properties": {}},
    "handler": list_members_handler,
}
