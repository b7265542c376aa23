"""Assertion Specifications for the users API.

Provides validators for:
- status codes
- the paginated user list
- the create and update echoes

Design:
- ResponseValidator defines the common interface
- Concrete validators return typed ValidationResult objects
- `expect_*` helpers raise AssertionMismatchError on a failed result

Every validator reads the response it is given and nothing else; none of
them issue requests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from conformance.api.constants import (
    COMPONENT_API,
    HTTP_STATUS_CREATED,
    HTTP_STATUS_OK,
)
from conformance.api.models import CreatedUser, UpdatedUser, UserPage, UserPayload
from conformance.observability import bind_component
from conformance.session.errors import AssertionMismatchError


logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)

# Body excerpt length kept in failure details
BODY_EXCERPT_CHARS = 200


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        passed: Whether validation passed.
        message: Human-readable result message.
        details: Additional validation details.
    """

    passed: bool
    message: str
    details: dict[str, object] = field(default_factory=dict)


@dataclass
class UserPageValidationResult(ValidationResult):
    """Result of user list validation.

    Attributes:
        user_page: Parsed page, when the body matched the schema.
    """

    user_page: UserPage | None = None


@dataclass
class CreatedUserValidationResult(ValidationResult):
    """Result of create-echo validation."""

    created: CreatedUser | None = None


@dataclass
class UpdatedUserValidationResult(ValidationResult):
    """Result of update-echo validation."""

    updated: UpdatedUser | None = None


class ResponseValidator(ABC):
    """Abstract base class for response validators."""

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize the validator.

        Args:
            run_id: Run ID for logging context.
        """
        self._run_id = run_id
        self._log = bind_component(logger, COMPONENT_API, run_id)

    @abstractmethod
    def validate(self, response: httpx.Response) -> ValidationResult:
        """Validate a response.

        Args:
            response: Fully read HTTP response.

        Returns:
            ValidationResult with validation status.
        """

    @staticmethod
    def body_excerpt(response: httpx.Response) -> str:
        """Leading part of the response body for failure details."""
        return response.text[:BODY_EXCERPT_CHARS]

    @staticmethod
    def schema_errors(error: ValidationError) -> list[str]:
        """Flatten pydantic errors into `field: message` strings."""
        return [
            f"{'.'.join(str(part) for part in err['loc']) or '<body>'}: {err['msg']}"
            for err in error.errors(include_url=False)
        ]

    def status_mismatch(
        self, response: httpx.Response, expected: int
    ) -> dict[str, object] | None:
        """Details of a status mismatch, or None when the status matches."""
        if response.status_code == expected:
            return None
        return {
            "expected_status": expected,
            "observed_status": response.status_code,
            "body": self.body_excerpt(response),
        }


class StatusValidator(ResponseValidator):
    """Validates only the status code."""

    def __init__(self, expected: int, run_id: str | None = None) -> None:
        super().__init__(run_id)
        self._expected = expected

    def validate(self, response: httpx.Response) -> ValidationResult:
        mismatch = self.status_mismatch(response, self._expected)
        if mismatch:
            return ValidationResult(
                passed=False,
                message=(
                    f"Status mismatch: expected {self._expected}, "
                    f"got {response.status_code}"
                ),
                details=mismatch,
            )
        return ValidationResult(passed=True, message="Status matched")


class UserPageValidator(ResponseValidator):
    """Validates a page of the user list."""

    def __init__(self, page: int, run_id: str | None = None) -> None:
        """Initialize the validator.

        Args:
            page: Page number that was requested.
            run_id: Run ID for logging context.
        """
        super().__init__(run_id)
        self._page = page

    def validate(self, response: httpx.Response) -> UserPageValidationResult:
        self._log.info("validating_user_page", requested_page=self._page)

        mismatch = self.status_mismatch(response, HTTP_STATUS_OK)
        if mismatch:
            return UserPageValidationResult(
                passed=False,
                message=f"User list returned status {response.status_code}",
                details=mismatch,
            )

        try:
            user_page = UserPage.model_validate_json(response.content)
        except ValidationError as e:
            return UserPageValidationResult(
                passed=False,
                message="User list body does not match schema",
                details={
                    "errors": self.schema_errors(e),
                    "body": self.body_excerpt(response),
                },
            )

        if user_page.page != self._page:
            return UserPageValidationResult(
                passed=False,
                message=(
                    f"Page mismatch: requested {self._page}, got {user_page.page}"
                ),
                details={"requested_page": self._page, "observed_page": user_page.page},
                user_page=user_page,
            )

        self._log.info(
            "user_page_validation_passed",
            page=user_page.page,
            users_count=len(user_page.data),
        )

        return UserPageValidationResult(
            passed=True,
            message="User list validation passed",
            details={"users_count": len(user_page.data)},
            user_page=user_page,
        )


class CreatedUserValidator(ResponseValidator):
    """Validates the echo of a create request."""

    def __init__(self, payload: UserPayload, run_id: str | None = None) -> None:
        super().__init__(run_id)
        self._payload = payload

    def validate(self, response: httpx.Response) -> CreatedUserValidationResult:
        mismatch = self.status_mismatch(response, HTTP_STATUS_CREATED)
        if mismatch:
            return CreatedUserValidationResult(
                passed=False,
                message=f"Create returned status {response.status_code}",
                details=mismatch,
            )

        try:
            created = CreatedUser.model_validate_json(response.content)
        except ValidationError as e:
            return CreatedUserValidationResult(
                passed=False,
                message="Create body does not match schema",
                details={
                    "errors": self.schema_errors(e),
                    "body": self.body_excerpt(response),
                },
            )

        echo_errors = _echo_errors(self._payload, created)
        if echo_errors:
            return CreatedUserValidationResult(
                passed=False,
                message=f"Create echo mismatch: {echo_errors}",
                details={"errors": echo_errors},
                created=created,
            )

        self._log.info("created_user_validation_passed", user_id=created.id)
        return CreatedUserValidationResult(
            passed=True,
            message="Create validation passed",
            details={"user_id": created.id},
            created=created,
        )


class UpdatedUserValidator(ResponseValidator):
    """Validates the echo of an update request."""

    def __init__(self, payload: UserPayload, run_id: str | None = None) -> None:
        super().__init__(run_id)
        self._payload = payload

    def validate(self, response: httpx.Response) -> UpdatedUserValidationResult:
        mismatch = self.status_mismatch(response, HTTP_STATUS_OK)
        if mismatch:
            return UpdatedUserValidationResult(
                passed=False,
                message=f"Update returned status {response.status_code}",
                details=mismatch,
            )

        try:
            updated = UpdatedUser.model_validate_json(response.content)
        except ValidationError as e:
            return UpdatedUserValidationResult(
                passed=False,
                message="Update body does not match schema",
                details={
                    "errors": self.schema_errors(e),
                    "body": self.body_excerpt(response),
                },
            )

        echo_errors = _echo_errors(self._payload, updated)
        if echo_errors:
            return UpdatedUserValidationResult(
                passed=False,
                message=f"Update echo mismatch: {echo_errors}",
                details={"errors": echo_errors},
                updated=updated,
            )

        self._log.info("updated_user_validation_passed")
        return UpdatedUserValidationResult(
            passed=True,
            message="Update validation passed",
            updated=updated,
        )


def _echo_errors(payload: UserPayload, echo: BaseModel) -> list[str]:
    """Compare the payload fields with their echo."""
    return [
        f"{name}: sent {sent!r}, got {getattr(echo, name)!r}"
        for name, sent in payload.model_dump().items()
        if getattr(echo, name) != sent
    ]


def _raise_on_failure(result: ValidationResult, assertion: str) -> None:
    if not result.passed:
        raise AssertionMismatchError(
            result.message, assertion=assertion, details=result.details
        )


def _parsed_or_raise(
    result: ValidationResult, assertion: str, parsed: ModelT | None
) -> ModelT:
    """Return the parsed body of a passed result, raising otherwise."""
    _raise_on_failure(result, assertion)
    if parsed is None:
        raise AssertionMismatchError(
            f"{assertion} passed without a parsed body",
            assertion=assertion,
            details=result.details,
        )
    return parsed


def expect_status(response: httpx.Response, expected: int) -> None:
    """Response status equals `expected`."""
    _raise_on_failure(StatusValidator(expected).validate(response), "status")


def expect_user_page(response: httpx.Response, page: int) -> UserPage:
    """Response is the requested page of a well-formed user list.

    Returns:
        The parsed page.
    """
    result = UserPageValidator(page).validate(response)
    return _parsed_or_raise(result, "user_page", result.user_page)


def expect_same_page_shape(first: UserPage, second: UserPage) -> None:
    """Two reads of one page agree on page, per_page and total_pages.

    `total` is left out because other clients may change it between reads.
    """
    if first.shape() != second.shape():
        raise AssertionMismatchError(
            f"Pagination shape changed between reads: {first.shape()} != "
            f"{second.shape()}",
            assertion="same_page_shape",
            details={"first": first.shape(), "second": second.shape()},
        )


def expect_created_user(response: httpx.Response, payload: UserPayload) -> CreatedUser:
    """Response is a 201 echo of `payload` with a string id and createdAt."""
    result = CreatedUserValidator(payload).validate(response)
    return _parsed_or_raise(result, "created_user", result.created)


def expect_updated_user(response: httpx.Response, payload: UserPayload) -> UpdatedUser:
    """Response is a 200 echo of `payload` with a string updatedAt."""
    result = UpdatedUserValidator(payload).validate(response)
    return _parsed_or_raise(result, "updated_user", result.updated)
