"""
Authorization gates.

A gate inspects an ``AccessContext`` and returns an ``AccessDecision``.
Routes declare an ordered list of gates; ``GateChain`` runs them left to
right and raises the first denial unchanged.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..domain.identity import IdentityClaim, normalize_email
from ..interfaces.repositories import UserDirectory
from ..security.tokens import IdentityTokenCodec, bearer_token
from ..errors import AccessError, Forbidden, Unauthenticated


@dataclass
class AccessContext:
    """Per-request state shared by the gates and the article policy."""

    codec: IdentityTokenCodec
    directory: UserDirectory
    authorization: str | None = None
    path_params: dict[str, Any] = field(default_factory=dict)
    claim: IdentityClaim | None = None
    user: Any | None = None

    @property
    def email(self) -> str | None:
        return self.claim.email if self.claim else None


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    error: AccessError | None = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, error: AccessError) -> "AccessDecision":
        return cls(allowed=False, error=error)


class Gate(ABC):
    """A predicate in the authorization chain."""

    @abstractmethod
    async def check(self, context: AccessContext) -> AccessDecision:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class Authenticated(Gate):
    """Requires a verifiable bearer token; stores the claim on the context."""

    async def check(self, context: AccessContext) -> AccessDecision:
        if context.claim is not None:
            return AccessDecision.allow()
        try:
            context.claim = context.codec.verify(bearer_token(context.authorization))
        except Unauthenticated as e:
            return AccessDecision.deny(e)
        return AccessDecision.allow()


class IsAdmin(Gate):
    """Requires the authenticated user to carry the admin flag."""

    async def check(self, context: AccessContext) -> AccessDecision:
        if context.claim is None:
            return AccessDecision.deny(Unauthenticated())
        user = await context.directory.find_by_email(context.claim.email)
        if user is None or not user.is_admin:
            return AccessDecision.deny(Forbidden("Admin access required"))
        context.user = user
        return AccessDecision.allow()


class IsSelf(Gate):
    """Requires the authenticated email to match a path parameter."""

    def __init__(self, param: str = "email"):
        self.param = param

    async def check(self, context: AccessContext) -> AccessDecision:
        if context.claim is None:
            return AccessDecision.deny(Unauthenticated())
        requested = normalize_email(context.path_params.get(self.param))
        if not requested or requested != context.claim.email:
            return AccessDecision.deny(Forbidden("You may only access your own data"))
        return AccessDecision.allow()

    def __repr__(self) -> str:
        return f"<IsSelf param={self.param}>"


class GateChain:
    """Ordered, short-circuiting composition of gates."""

    def __init__(self, gates: Iterable[Gate]):
        self.gates = tuple(gates)

    async def evaluate(self, context: AccessContext) -> AccessDecision:
        for gate in self.gates:
            decision = await gate.check(context)
            if not decision.allowed:
                return decision
        return AccessDecision.allow()

    async def enforce(self, context: AccessContext) -> AccessContext:
        """Run the chain, raising the first denial's error."""
        decision = await self.evaluate(context)
        if not decision.allowed:
            raise decision.error
        return context

    def __repr__(self) -> str:
        return f"<GateChain {list(self.gates)}>"
