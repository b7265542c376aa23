"""Constants for the REST API under test."""

# Endpoints
USERS_PATH = "/api/users"

# HTTP status codes asserted by the suite
HTTP_STATUS_OK = 200
HTTP_STATUS_CREATED = 201
HTTP_STATUS_NOT_FOUND = 404

# Scenario inputs
DEFAULT_USERS_PAGE = 2
MISSING_USER_ID = 999999
UPDATE_USER_ID = 2
DELAY_SECONDS = 5
DELAY_TIMEOUT_SECONDS = 2.0

# Loose email shape: something@something.tld
EMAIL_PATTERN = r".+@.+\..+"

# Log component name
COMPONENT_API = "api"


def user_path(user_id: int | str) -> str:
    """Path of a single user resource."""
    return f"{USERS_PATH}/{user_id}"
