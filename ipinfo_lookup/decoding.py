from pydantic import ValidationError

from ipinfo_lookup.errors import DecodeError
from ipinfo_lookup.models.details import IPDetails


def decode_details(body: str | bytes) -> IPDetails:
    """Parse a success response body into IPDetails.

    Anything other than a JSON object with at least an `ip` string (invalid
    JSON, a list, wrong field types) raises DecodeError: the service answered
    with a success status but not with the payload we rely on.
    """
    try:
        return IPDetails.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(
            f"Failed to decode lookup service response: {exc.error_count()} validation error(s)",
            body,
        ) from exc
