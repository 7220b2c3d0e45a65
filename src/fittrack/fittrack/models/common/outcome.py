# ABOUTME: Request outcome enumeration shared by the guard and document layers
# ABOUTME: Maps core results onto the statuses a handler layer reports

from enum import Enum

from fittrack.models.storage.versioned_document import MutationOutcome


class RequestOutcome(str, Enum):
    """
    Outcomes a handler must be able to tell apart.
    """

    OK = "ok"
    UNAUTHENTICATED = "unauthenticated"
    RATE_LIMITED = "rate-limited"
    NOT_FOUND = "not-found"
    CONFLICT = "conflict"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @classmethod
    def from_mutation(cls, outcome: MutationOutcome) -> "RequestOutcome":
        return {
            MutationOutcome.OK: cls.OK,
            MutationOutcome.NOT_FOUND: cls.NOT_FOUND,
            MutationOutcome.CONFLICT: cls.CONFLICT,
        }[outcome]


_HTTP_STATUS = {
    RequestOutcome.OK: 200,
    RequestOutcome.UNAUTHENTICATED: 401,
    RequestOutcome.RATE_LIMITED: 429,
    RequestOutcome.NOT_FOUND: 404,
    RequestOutcome.CONFLICT: 409,
}
