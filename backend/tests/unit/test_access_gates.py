"""
Unit tests for the authorization gates.

Covers:
- Authenticated, IsAdmin and IsSelf individually
- Chain ordering and short-circuiting
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from core.access import (
    AccessContext,
    Authenticated,
    Forbidden,
    GateChain,
    InvalidToken,
    IsAdmin,
    IsSelf,
    Unauthenticated,
)
from core.domain import IdentityClaim
from core.security import IdentityTokenCodec
from infrastructure.database.models import User
from infrastructure.repositories import SqlAlchemyUserDirectory

pytestmark = pytest.mark.asyncio


@pytest.fixture
def directory(db_session: AsyncSession) -> SqlAlchemyUserDirectory:
    return SqlAlchemyUserDirectory(db_session)


@pytest.fixture
def context_for(codec: IdentityTokenCodec, directory):
    """Build a context carrying a bearer token for ``as_user`` (or none)."""

    def _context(as_user: str | None = None, authorization: str | None = None, **path_params):
        if as_user is not None:
            authorization = f"Bearer {codec.issue(IdentityClaim(email=as_user))}"
        return AccessContext(
            codec=codec,
            directory=directory,
            authorization=authorization,
            path_params=path_params,
        )

    return _context


class TestAuthenticated:
    """Tests for the Authenticated gate."""

    async def test_missing_header_denied(self, context_for):
        decision = await Authenticated().check(context_for())

        assert not decision.allowed
        assert type(decision.error) is Unauthenticated

    async def test_invalid_token_denied(self, context_for):
        decision = await Authenticated().check(context_for(authorization="Bearer nope"))

        assert not decision.allowed
        assert isinstance(decision.error, InvalidToken)

    async def test_valid_token_stores_claim(self, context_for):
        context = context_for("Reader@Example.com")

        decision = await Authenticated().check(context)

        assert decision.allowed
        assert context.claim.email == "reader@example.com"
        assert context.email == "reader@example.com"

    async def test_token_for_unknown_user_still_authenticates(self, context_for):
        decision = await Authenticated().check(context_for("ghost@example.com"))

        assert decision.allowed


class TestIsAdmin:
    """Tests for the IsAdmin gate."""

    async def test_without_claim_is_unauthenticated(self, context_for):
        decision = await IsAdmin().check(context_for())

        assert isinstance(decision.error, Unauthenticated)

    async def test_regular_user_forbidden(self, context_for, reader: User):
        context = context_for(reader.email)
        await Authenticated().check(context)

        decision = await IsAdmin().check(context)

        assert isinstance(decision.error, Forbidden)

    async def test_unknown_user_forbidden(self, context_for):
        context = context_for("ghost@example.com")
        await Authenticated().check(context)

        decision = await IsAdmin().check(context)

        assert isinstance(decision.error, Forbidden)

    async def test_admin_allowed_and_user_attached(self, context_for, admin_user: User):
        context = context_for(admin_user.email)
        await Authenticated().check(context)

        decision = await IsAdmin().check(context)

        assert decision.allowed
        assert context.user.id == admin_user.id


class TestIsSelf:
    """Tests for the IsSelf gate."""

    async def test_matching_email_allowed(self, context_for):
        context = context_for("reader@example.com", email="READER@example.com")
        await Authenticated().check(context)

        assert (await IsSelf().check(context)).allowed

    async def test_other_email_forbidden(self, context_for):
        context = context_for("reader@example.com", email="someone@example.com")
        await Authenticated().check(context)

        decision = await IsSelf().check(context)

        assert isinstance(decision.error, Forbidden)

    async def test_missing_param_forbidden(self, context_for):
        context = context_for("reader@example.com")
        await Authenticated().check(context)

        decision = await IsSelf().check(context)

        assert isinstance(decision.error, Forbidden)

    async def test_custom_param_name(self, context_for):
        context = context_for("reader@example.com", owner="reader@example.com")
        await Authenticated().check(context)

        assert (await IsSelf("owner").check(context)).allowed

    async def test_without_claim_is_unauthenticated(self, context_for):
        decision = await IsSelf().check(context_for(email="reader@example.com"))

        assert isinstance(decision.error, Unauthenticated)


class TestGateChain:
    """Ordering and short-circuiting of gate chains."""

    async def test_authentication_failure_reported_before_privilege(self, context_for):
        chain = GateChain([Authenticated(), IsAdmin()])

        with pytest.raises(Unauthenticated):
            await chain.enforce(context_for())

    async def test_first_denial_is_raised_verbatim(self, context_for, reader: User):
        chain = GateChain([Authenticated(), IsAdmin(), IsSelf()])
        context = context_for(reader.email, email="someone@example.com")

        with pytest.raises(Forbidden) as exc_info:
            await chain.enforce(context)

        assert exc_info.value.detail == "Admin access required"

    async def test_all_gates_pass(self, context_for, admin_user: User):
        chain = GateChain([Authenticated(), IsAdmin(), IsSelf()])
        context = context_for(admin_user.email, email=admin_user.email)

        result = await chain.enforce(context)

        assert result is context
        assert context.user.is_admin

    async def test_empty_chain_allows(self, context_for):
        decision = await GateChain([]).evaluate(context_for())

        assert decision.allowed
