"""
Member repository implementation for the Library Catalogue.

Registers members under sequential IDs and manages the one mutable member
field, the email address.
"""

import logging

from pydantic import BaseModel

from ..models import Member
from .repository import BaseRepository, NotFoundError

logger = logging.getLogger(__name__)


class MemberCreateSchema(BaseModel):
    """Schema for registering a member."""

    name: str
    email: str | None = None


class MemberRepository(BaseRepository[int, Member]):
    """Repository for library members."""

    @property
    def collection(self) -> dict[int, Member]:
        return self.store.members

    def register(self, member_data: MemberCreateSchema) -> Member:
        """
        Register a member under the next sequential ID.

        A blank or missing email is stored as None.
        """
        with self.store.transaction():
            member = Member(
                id=self.store.next_member_id(),
                name=member_data.name,
                email=member_data.email,
            )
            self.store.members[member.id] = member

        logger.debug("Registered member %d", member.id)
        return member

    def update_email(self, member_id: int, email: str | None) -> Member:
        """
        Replace a member's email.

        Email is optional: None or a blank string clears it.

        Raises:
            NotFoundError: If the member does not exist
        """
        with self.store.transaction():
            current = self.store.members.get(member_id)
            if current is None:
                raise NotFoundError(f"Member {member_id} not found")

            # Rebuilt rather than model_copy'd so the email validator runs
            updated = Member(id=current.id, name=current.name, email=email)
            self.store.members[member_id] = updated

        logger.debug("Updated email for member %d", member_id)
        return updated

    def list_sorted_by_name(self) -> list[Member]:
        """All members ordered by name, ignoring case; ties keep registration order."""
        return sorted(self.get_all(), key=lambda member: member.name.casefold())
