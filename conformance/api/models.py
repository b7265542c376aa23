"""Response and payload models for the users resource.

Field types are strict: the remote service must send a JSON number for
`id` on reads and a JSON string for `id` on writes. Extra fields the
service adds (such as `support`) are ignored.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from conformance.api.constants import EMAIL_PATTERN


class UserRecord(BaseModel):
    """One user as returned by a list or read."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: StrictInt
    email: Annotated[StrictStr, Field(pattern=EMAIL_PATTERN)]
    first_name: StrictStr
    last_name: StrictStr
    avatar: StrictStr


class UserPage(BaseModel):
    """Paginated list of users.

    Only `page` is compared against the request; the other pagination
    fields are checked for presence and type.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    page: StrictInt
    per_page: StrictInt
    total: StrictInt
    total_pages: StrictInt
    data: Annotated[list[UserRecord], Field(min_length=1)]

    def shape(self) -> tuple[int, int, int]:
        """Pagination fields that must not change between identical reads."""
        return (self.page, self.per_page, self.total_pages)


class UserPayload(BaseModel):
    """Request body for creating or updating a user."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1)]
    job: Annotated[str, Field(min_length=1)]


class CreatedUser(BaseModel):
    """Echo returned after creating a user."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: StrictStr
    job: StrictStr
    id: StrictStr
    created_at: StrictStr = Field(alias="createdAt")


class UpdatedUser(BaseModel):
    """Echo returned after updating a user."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: StrictStr
    job: StrictStr
    updated_at: StrictStr = Field(alias="updatedAt")
