"""
Integration tests for public and author article endpoints.
"""

import pytest
from fastapi import status
from httpx import AsyncClient

from infrastructure.database.models import User

pytestmark = pytest.mark.asyncio

SUBMISSION = {
    "title": "Tech stocks rally",
    "body": "Markets closed higher on Friday.",
    "publisher": "Daily Planet",
    "tags": ["Markets", " AI ", ""],
}


class TestListArticles:
    """Tests for GET /articles and friends."""

    async def test_lists_only_approved(self, async_client: AsyncClient, make_article):
        approved = await make_article(title="Visible")
        await make_article(title="Hidden", status="pending")

        response = await async_client.get("/api/v1/articles")

        assert response.status_code == status.HTTP_200_OK
        assert [a["id"] for a in response.json()] == [approved.id]

    async def test_listing_omits_body(self, async_client: AsyncClient, make_article):
        await make_article(is_premium=True)

        article = (await async_client.get("/api/v1/articles")).json()[0]

        assert "body" not in article
        assert article["is_premium"] is True

    async def test_title_and_tag_filters(self, async_client: AsyncClient, make_article):
        match = await make_article(title="Tech giants and AI", tags=["AI", "Business"])
        await make_article(title="Tech giants and chips", tags=["Hardware"])
        await make_article(title="Sports recap", tags=["AI"])

        response = await async_client.get("/api/v1/articles", params={"title": "Tech", "tag": "AI"})

        assert [a["id"] for a in response.json()] == [match.id]

    async def test_publisher_filter(self, async_client: AsyncClient, make_article):
        match = await make_article(publisher="The Gazette")
        await make_article(publisher="Daily Planet")

        response = await async_client.get("/api/v1/articles", params={"publisher": "gazette"})

        assert [a["id"] for a in response.json()] == [match.id]

    async def test_trending(self, async_client: AsyncClient, make_article):
        for views in (5, 50, 500):
            await make_article(view_count=views)

        response = await async_client.get("/api/v1/articles/trending", params={"limit": 2})

        assert [a["view_count"] for a in response.json()] == [500, 50]

    async def test_premium_listing_gated(
        self,
        async_client: AsyncClient,
        make_article,
        reader_headers: dict,
        subscriber_headers: dict,
    ):
        premium = await make_article(is_premium=True)
        await make_article()

        anonymous = await async_client.get("/api/v1/articles/premium")
        free = await async_client.get("/api/v1/articles/premium", headers=reader_headers)
        paid = await async_client.get("/api/v1/articles/premium", headers=subscriber_headers)

        assert anonymous.status_code == status.HTTP_401_UNAUTHORIZED
        assert free.status_code == status.HTTP_402_PAYMENT_REQUIRED
        assert [a["id"] for a in paid.json()] == [premium.id]


class TestReadArticle:
    """Tests for GET /articles/{id}."""

    async def test_free_article_public(self, async_client: AsyncClient, make_article):
        article = await make_article()

        response = await async_client.get(f"/api/v1/articles/{article.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["body"] == article.body

    async def test_free_article_with_garbage_token(self, async_client: AsyncClient, make_article):
        article = await make_article()

        response = await async_client.get(
            f"/api/v1/articles/{article.id}", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == status.HTTP_200_OK

    async def test_missing_article(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/articles/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "not_found"

    async def test_premium_anonymous(self, async_client: AsyncClient, make_article):
        article = await make_article(is_premium=True)

        response = await async_client.get(f"/api/v1/articles/{article.id}")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["code"] == "unauthenticated"

    async def test_premium_garbage_token(self, async_client: AsyncClient, make_article):
        article = await make_article(is_premium=True)

        response = await async_client.get(
            f"/api/v1/articles/{article.id}", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["code"] == "invalid_token"

    async def test_premium_free_user(self, async_client: AsyncClient, make_article, reader_headers: dict):
        article = await make_article(is_premium=True)

        response = await async_client.get(f"/api/v1/articles/{article.id}", headers=reader_headers)

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
        assert response.json()["code"] == "premium_required"

    async def test_premium_subscriber(
        self, async_client: AsyncClient, make_article, subscriber_headers: dict
    ):
        article = await make_article(is_premium=True)

        response = await async_client.get(f"/api/v1/articles/{article.id}", headers=subscriber_headers)

        assert response.status_code == status.HTTP_200_OK

    async def test_premium_lapsed_subscriber(
        self, async_client: AsyncClient, make_article, token_headers, lapsed_subscriber: User
    ):
        article = await make_article(is_premium=True)

        response = await async_client.get(
            f"/api/v1/articles/{article.id}", headers=token_headers(lapsed_subscriber.email)
        )

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED

    async def test_declined_article_hidden_from_public(
        self, async_client: AsyncClient, make_article, reader: User, reader_headers: dict
    ):
        article = await make_article(
            author_email=reader.email, status="declined", decline_reason="Needs sources"
        )

        anonymous = await async_client.get(f"/api/v1/articles/{article.id}")
        author = await async_client.get(f"/api/v1/articles/{article.id}", headers=reader_headers)

        assert anonymous.status_code == status.HTTP_404_NOT_FOUND
        assert anonymous.json()["code"] == "not_found"
        assert author.status_code == status.HTTP_200_OK
        assert author.json()["decline_reason"] == "Needs sources"


class TestSubmitArticle:
    """Tests for POST /articles."""

    async def test_requires_login(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/articles", json=SUBMISSION)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_first_submission(self, async_client: AsyncClient, reader_headers: dict, reader: User):
        response = await async_client.post("/api/v1/articles", json=SUBMISSION, headers=reader_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["status"] == "pending"
        assert data["is_premium"] is False
        assert data["view_count"] == 0
        assert data["author_email"] == reader.email
        assert data["tags"] == ["Markets", "AI"]

    async def test_pending_submission_not_listed(self, async_client: AsyncClient, reader_headers: dict):
        await async_client.post("/api/v1/articles", json=SUBMISSION, headers=reader_headers)

        response = await async_client.get("/api/v1/articles")

        assert response.json() == []

    async def test_quota_for_free_user(self, async_client: AsyncClient, reader_headers: dict):
        first = await async_client.post("/api/v1/articles", json=SUBMISSION, headers=reader_headers)
        second = await async_client.post("/api/v1/articles", json=SUBMISSION, headers=reader_headers)

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_403_FORBIDDEN
        assert second.json()["code"] == "quota_exceeded"

    async def test_subscriber_not_limited(self, async_client: AsyncClient, subscriber_headers: dict):
        for _ in range(3):
            response = await async_client.post(
                "/api/v1/articles", json=SUBMISSION, headers=subscriber_headers
            )
            assert response.status_code == status.HTTP_201_CREATED

    async def test_validation(self, async_client: AsyncClient, reader_headers: dict):
        response = await async_client.post(
            "/api/v1/articles", json={"title": "", "body": "x"}, headers=reader_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["code"] == "validation_error"


class TestUpdateArticle:
    """Tests for PUT /articles/{id}."""

    async def test_author_update_resets_moderation(
        self, async_client: AsyncClient, make_article, reader_headers: dict, reader: User
    ):
        article = await make_article(author_email=reader.email, status="declined", decline_reason="Typos")

        response = await async_client.put(
            f"/api/v1/articles/{article.id}",
            json={"title": "Fixed the typos"},
            headers=reader_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "Fixed the typos"
        assert data["body"] == article.body
        assert data["status"] == "pending"
        assert data["decline_reason"] is None

    async def test_other_author_forbidden(
        self, async_client: AsyncClient, make_article, reader_headers: dict
    ):
        article = await make_article(author_email="someone@example.com")

        response = await async_client.put(
            f"/api/v1/articles/{article.id}", json={"title": "Hijack"}, headers=reader_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_requires_login(self, async_client: AsyncClient, make_article):
        article = await make_article()

        response = await async_client.put(f"/api/v1/articles/{article.id}", json={"title": "x"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestViews:
    """Tests for PATCH /articles/{id}/views."""

    async def test_increments(self, async_client: AsyncClient, make_article):
        article = await make_article(view_count=9)

        first = await async_client.patch(f"/api/v1/articles/{article.id}/views")
        second = await async_client.patch(f"/api/v1/articles/{article.id}/views")

        assert first.json() == {"id": article.id, "view_count": 10}
        assert second.json()["view_count"] == 11

    async def test_unknown_article(self, async_client: AsyncClient):
        response = await async_client.patch("/api/v1/articles/missing/views")

        assert response.status_code == status.HTTP_404_NOT_FOUND
