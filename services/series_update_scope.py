"""Resolution of which occurrences of a series an update applies to."""

from typing import Any, Union

from domain.enums import SeriesUpdateScope


def resolve_series_update_scope(update_scope: Any) -> Union[SeriesUpdateScope, Any]:
    """
    Resolve a raw update scope.

    Recognized values resolve to their member and an omitted scope to the
    full series. Any other value is returned unchanged; rejecting it is the
    validator's job.

    Args:
        update_scope: Raw scope from the request (e.g. "this", "FutureInstances")

    Returns:
        SeriesUpdateScope member, or the unrecognized raw value
    """
    if update_scope is None or update_scope == "":
        return SeriesUpdateScope.FULL_SERIES
    return SeriesUpdateScope.coerce(update_scope)
