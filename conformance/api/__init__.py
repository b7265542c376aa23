"""Users API model and Assertion Specifications."""

from conformance.api.models import (
    CreatedUser,
    UpdatedUser,
    UserPage,
    UserPayload,
    UserRecord,
)
from conformance.api.validators import (
    CreatedUserValidator,
    ResponseValidator,
    StatusValidator,
    UpdatedUserValidator,
    UserPageValidator,
    ValidationResult,
    expect_created_user,
    expect_same_page_shape,
    expect_status,
    expect_updated_user,
    expect_user_page,
)


__all__ = [
    "CreatedUser",
    "CreatedUserValidator",
    "ResponseValidator",
    "StatusValidator",
    "UpdatedUser",
    "UpdatedUserValidator",
    "UserPage",
    "UserPageValidator",
    "UserPayload",
    "UserRecord",
    "ValidationResult",
    "expect_created_user",
    "expect_same_page_shape",
    "expect_status",
    "expect_updated_user",
    "expect_user_page",
]
