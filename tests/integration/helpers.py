"""Helpers shared by integration tests."""

import uuid

from httpx import AsyncClient
from sqlalchemy import text

from src.uni_common.database import async_session_factory


async def register_and_login(
    client: AsyncClient, prefix: str, is_admin: bool = False, deposit: int = 0
) -> dict[str, str]:
    """Create a fresh user and return Authorization headers for it."""
    email = f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"
    password = "TestPass123"
    resp = await client.post("/api/v1/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text

    if is_admin:
        async with async_session_factory() as session:
            await session.execute(
                text("UPDATE users SET is_admin = TRUE WHERE email = :email"), {"email": email}
            )
            await session.commit()

    login = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    headers = {"Authorization": f"Bearer {login.json()['data']['access_token']}"}
    if deposit:
        dep = await client.post(
            "/api/v1/account/deposit", json={"amount_cents": deposit}, headers=headers
        )
        assert dep.status_code == 200, dep.text
    return headers
