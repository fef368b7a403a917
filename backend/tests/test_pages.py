"""
DayNotes Backend: Page Guard Tests
====================================

What:  The dashboard session guard, both as a plain function and over HTTP.
"""

import datetime as dt
import uuid

import pytest
from sqlalchemy import delete

from conftest import register_and_login
from daynotes.models import User
from daynotes.routes.pages import render_dashboard
from daynotes.session import AuthSession


class TestRenderDashboard:

    def test_no_session_redirects_to_login(self):
        response = render_dashboard(None)

        assert response.status_code == 307
        assert response.headers["location"] == "/login"

    def test_session_renders_dashboard(self):
        session = AuthSession(user_id=uuid.uuid4(), email="ada@example.com", name="Ada")

        response = render_dashboard(session, today=dt.date(2024, 1, 15))

        assert response.status_code == 200
        page = response.body.decode()
        assert "Hello, Ada" in page
        assert 'data-date="2024-01-15"' in page
        assert str(session.user_id) in page

    def test_display_name_is_escaped(self):
        session = AuthSession(user_id=uuid.uuid4(), email="x@example.com", name="<script>")

        page = render_dashboard(session).body.decode()

        assert "<script>" not in page
        assert "&lt;script&gt;" in page

    def test_falls_back_to_email_without_name(self):
        session = AuthSession(user_id=uuid.uuid4(), email="grace@example.com")

        page = render_dashboard(session).body.decode()

        assert "Hello, grace@example.com" in page


class TestPagesOverHttp:

    @pytest.mark.asyncio
    async def test_dashboard_without_session_redirects(self, test_client):
        response = await test_client.get("/dashboard")

        assert response.status_code == 307
        assert response.headers["location"] == "/login"

    @pytest.mark.asyncio
    async def test_root_redirects_to_dashboard(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 307
        assert response.headers["location"] == "/dashboard"

    @pytest.mark.asyncio
    async def test_dashboard_with_session(self, auth_client):
        response = await auth_client.get("/dashboard")

        assert response.status_code == 200
        assert "Hello, Ada" in response.text

    @pytest.mark.asyncio
    async def test_login_page_without_session(self, test_client):
        response = await test_client.get("/login")

        assert response.status_code == 200
        assert 'id="login"' in response.text

    @pytest.mark.asyncio
    async def test_login_page_with_session_redirects(self, auth_client):
        response = await auth_client.get("/login")

        assert response.status_code == 307
        assert response.headers["location"] == "/dashboard"

    @pytest.mark.asyncio
    async def test_deleted_user_session_redirects(self, test_client, session_factory):
        user = await register_and_login(test_client)
        async with session_factory() as db:
            await db.execute(delete(User).where(User.id == uuid.UUID(user["id"])))
            await db.commit()

        response = await test_client.get("/dashboard")

        assert response.status_code == 307
        assert response.headers["location"] == "/login"
