# ABOUTME: Client address resolution for rate limiting
# ABOUTME: Picks the originating client IP from proxy headers

from fittrack.models.auth.auth_request import AuthRequest

UNKNOWN_CLIENT = "unknown"


def resolve_client_ip(request: AuthRequest) -> str:
    """
    Originating client address of a request.

    ``x-forwarded-for`` may list ``client, proxy1, proxy2``; the first entry is
    the client. Falls back to the platform connection header, then
    ``x-real-ip``, then ``"unknown"``.
    """
    forwarded_for = request.get_header("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    return request.get_header("x-nf-client-connection-ip") or request.get_header("x-real-ip") or UNKNOWN_CLIENT
