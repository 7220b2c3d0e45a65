# ABOUTME: Per-request guard combining rate limiting and authentication
# ABOUTME: Admits or rejects a request before any handler touches the document store

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from fittrack.config.logging import bind_request_context, generate_correlation_id
from fittrack.exceptions import AuthenticationException, RateLimitExceededException
from fittrack.interfaces.auth.authenticator import AbstractAuthenticator
from fittrack.interfaces.common.rate_limiter import AbstractRateLimiter
from fittrack.models.auth.auth_request import AuthRequest
from fittrack.models.auth.identity import AuthenticatedIdentity
from fittrack.models.common.outcome import RequestOutcome
from fittrack.models.common.rate_limit import RateLimitPolicy

from .client_ip import resolve_client_ip


class GuardDecision(BaseModel):
    """
    Result of admitting a request.

    ``outcome`` is ``OK`` (with ``identity`` once authenticated),
    ``RATE_LIMITED`` (with ``retry_after`` seconds) or ``UNAUTHENTICATED``
    (with ``error``).
    """

    outcome: RequestOutcome
    identity: Optional[AuthenticatedIdentity] = None
    retry_after: Optional[int] = None
    reset_time: Optional[float] = Field(default=None, description="Epoch milliseconds")
    remaining: Optional[int] = None
    error: Optional[str] = None
    reason: Optional[str] = Field(default=None, description="Authentication failure code")
    correlation_id: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def admitted(self) -> bool:
        return self.outcome is RequestOutcome.OK

    @property
    def status_code(self) -> int:
        return self.outcome.http_status

    def headers(self) -> Dict[str, str]:
        """Response headers implied by the decision (``Retry-After`` when rate limited)."""
        if self.retry_after is None:
            return {}
        return {"Retry-After": str(self.retry_after)}

    def raise_for_outcome(self) -> Optional[AuthenticatedIdentity]:
        """
        Return the identity of an admitted request, or raise for callers that prefer exceptions.

        Raises:
            RateLimitExceededException: If the request was rate limited.
            AuthenticationException: If no valid credential was presented.
        """
        if self.outcome is RequestOutcome.RATE_LIMITED:
            raise RateLimitExceededException(
                self.error or "Rate limit exceeded",
                reset_time=self.reset_time or 0.0,
                details={"retry_after": self.retry_after, "correlation_id": self.correlation_id},
            )
        if self.outcome is RequestOutcome.UNAUTHENTICATED:
            raise AuthenticationException(
                self.error or "Authentication required",
                code=self.reason,
                details={"correlation_id": self.correlation_id},
            )
        return self.identity


class RequestGuard:
    """
    Rate limits, then authenticates, an incoming request.

    The rate limit is checked first because it is cheap and local. Requests
    are counted per ``"<scope>:<client ip>"`` so that token issuance and data
    migration keep windows separate from ordinary traffic.

    Authentication and rate-limit failures are terminal for the request and
    come back as decisions; they are never retried here. Other errors
    (a failing rate limiter backend, for one) propagate.
    """

    def __init__(self, rate_limiter: AbstractRateLimiter, authenticator: AbstractAuthenticator):
        self.rate_limiter = rate_limiter
        self.authenticator = authenticator

    async def check_rate_limit(
        self,
        request: AuthRequest,
        *,
        scope: str = "default",
        policy: Optional[RateLimitPolicy] = None,
        correlation_id: Optional[str] = None,
    ) -> GuardDecision:
        """
        Apply only the rate limit. For endpoints that mint identities and so
        cannot require one.
        """
        correlation_id = correlation_id or generate_correlation_id()
        client_ip = resolve_client_ip(request)
        log = bind_request_context(scope, correlation_id=correlation_id, client_ip=client_ip)

        if policy is None:
            decision = await self.rate_limiter.check(f"{scope}:{client_ip}")
        else:
            decision = await self.rate_limiter.check(f"{scope}:{client_ip}", policy.window_ms, policy.max_requests)
        if not decision.allowed:
            retry_after = decision.retry_after_seconds()
            log.bind(retry_after=retry_after).warning("Rate limit exceeded")
            return GuardDecision(
                outcome=RequestOutcome.RATE_LIMITED,
                retry_after=retry_after,
                reset_time=decision.reset_time,
                error="Too many requests. Please try again later.",
                correlation_id=correlation_id,
            )

        return GuardDecision(outcome=RequestOutcome.OK, remaining=decision.remaining, correlation_id=correlation_id)

    async def admit(
        self,
        request: AuthRequest,
        *,
        scope: str = "default",
        policy: Optional[RateLimitPolicy] = None,
        correlation_id: Optional[str] = None,
    ) -> GuardDecision:
        """
        Rate limit and authenticate ``request``.

        Args:
            request: Incoming request.
            scope: Rate limit bucket name.
            policy: Window and quota for ``scope``. The rate limiter's own
                defaults apply when omitted.
            correlation_id: Reused for logs and the decision; generated when omitted.

        Returns:
            GuardDecision: ``OK`` carries the caller identity.
        """
        rate_decision = await self.check_rate_limit(
            request, scope=scope, policy=policy, correlation_id=correlation_id
        )
        if not rate_decision.admitted:
            return rate_decision

        correlation_id = rate_decision.correlation_id
        log = bind_request_context(scope, correlation_id=correlation_id, client_ip=resolve_client_ip(request))

        try:
            identity = await self.authenticator.authenticate(request)
        except AuthenticationException as e:
            log.bind(reason=e.code).warning(f"Unauthorized request: {e.message}")
            return GuardDecision(
                outcome=RequestOutcome.UNAUTHENTICATED,
                error=e.message,
                reason=e.code,
                remaining=rate_decision.remaining,
                correlation_id=correlation_id,
            )

        log.bind(user_id=identity.user_id, is_legacy=identity.is_legacy).info("Request admitted")
        return GuardDecision(
            outcome=RequestOutcome.OK,
            identity=identity,
            remaining=rate_decision.remaining,
            correlation_id=correlation_id,
        )
