"""Users API Flow Scenarios.

All flows share one explicitly passed ApiSession; none of them keeps
state between scenarios.
"""

from conformance.api.constants import (
    DEFAULT_USERS_PAGE,
    DELAY_SECONDS,
    DELAY_TIMEOUT_SECONDS,
    HTTP_STATUS_NOT_FOUND,
    MISSING_USER_ID,
    USERS_PATH,
    user_path,
)
from conformance.api.models import UserPayload
from conformance.api.validators import (
    expect_created_user,
    expect_same_page_shape,
    expect_status,
    expect_updated_user,
    expect_user_page,
)
from conformance.scenarios.runner import FlowScenario
from conformance.session.api import ApiSession
from conformance.session.errors import AssertionMismatchError, InteractionTimeoutError


def list_users_flow(api: ApiSession, page: int = DEFAULT_USERS_PAGE) -> FlowScenario:
    """Read one page of users and check its shape."""
    scenario = FlowScenario(f"list_users_page_{page}")
    scenario.step("get_users", api.get, USERS_PATH, params={"page": page})
    scenario.step(
        "expect_user_page",
        lambda: expect_user_page(scenario.output("get_users"), page),
    )
    return scenario


def list_users_idempotence_flow(
    api: ApiSession, page: int = DEFAULT_USERS_PAGE
) -> FlowScenario:
    """Read the same page twice; the pagination shape must not change."""
    scenario = FlowScenario(f"list_users_page_{page}_twice")
    for read in ("first", "second"):
        scenario.step(f"get_users_{read}", api.get, USERS_PATH, params={"page": page})
        scenario.step(
            f"expect_user_page_{read}",
            lambda read=read: expect_user_page(
                scenario.output(f"get_users_{read}"), page
            ),
        )
    scenario.step(
        "expect_same_shape",
        lambda: expect_same_page_shape(
            scenario.output("expect_user_page_first"),
            scenario.output("expect_user_page_second"),
        ),
    )
    return scenario


def create_user_flow(api: ApiSession, payload: UserPayload) -> FlowScenario:
    """Create a user; the echo must carry a string id and createdAt."""
    scenario = FlowScenario("create_user")
    scenario.step("post_user", api.post, USERS_PATH, json=payload.model_dump())
    scenario.step(
        "expect_created_user",
        lambda: expect_created_user(scenario.output("post_user"), payload),
    )
    return scenario


def update_user_flow(
    api: ApiSession, user_id: int, payload: UserPayload
) -> FlowScenario:
    """Replace a user; the echo must carry a string updatedAt."""
    scenario = FlowScenario(f"update_user_{user_id}")
    scenario.step("put_user", api.put, user_path(user_id), json=payload.model_dump())
    scenario.step(
        "expect_updated_user",
        lambda: expect_updated_user(scenario.output("put_user"), payload),
    )
    return scenario


def missing_user_flow(api: ApiSession, user_id: int = MISSING_USER_ID) -> FlowScenario:
    """Reading a user that does not exist returns 404."""
    scenario = FlowScenario(f"missing_user_{user_id}")
    scenario.step("get_user", api.get, user_path(user_id))
    scenario.step(
        "expect_not_found",
        lambda: expect_status(scenario.output("get_user"), HTTP_STATUS_NOT_FOUND),
    )
    return scenario


def timeout_flow(
    api: ApiSession,
    delay_seconds: int = DELAY_SECONDS,
    timeout_seconds: float = DELAY_TIMEOUT_SECONDS,
) -> FlowScenario:
    """A delayed read with a shorter client ceiling must time out.

    The step's output is the InteractionTimeoutError that was raised.
    """
    return FlowScenario("delayed_request_times_out").step(
        "expect_timeout", expect_timeout, api, delay_seconds, timeout_seconds
    )


def expect_timeout(
    api: ApiSession, delay_seconds: int, timeout_seconds: float
) -> InteractionTimeoutError:
    """Request a server-side delay and require a client timeout.

    Returns:
        The timeout error raised by the session.

    Raises:
        AssertionMismatchError: If the request completed in time.
    """
    try:
        response = api.get(
            USERS_PATH, params={"delay": delay_seconds}, timeout=timeout_seconds
        )
    except InteractionTimeoutError as e:
        return e

    raise AssertionMismatchError(
        f"Request with {delay_seconds}s server delay completed within "
        f"{timeout_seconds:g}s (status {response.status_code})",
        assertion="timeout",
        details={
            "delay_seconds": delay_seconds,
            "timeout_seconds": timeout_seconds,
            "observed_status": response.status_code,
        },
    )
