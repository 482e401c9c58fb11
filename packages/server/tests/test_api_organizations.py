"""
Integration tests for organization, membership, user and admin endpoints.

Covers the request → approve flow end to end: a user requests an org,
a super admin approves it, and the creator can then manage topics in it.
"""

from __future__ import annotations

import uuid

import pytest

from app.core.auth import create_jwt
from timeline_shared.schemas.common import OrgRole
from timeline_shared.schemas.organizations import OrgStatus


class TestOrgRequestFlow:
    @pytest.mark.asyncio
    async def test_request_approve_and_use(self, client, bearer, alice, root):
        response = await client.post(
            "/api/v1/orgs",
            json={"name": "Field Notes", "slug": "field-notes"},
            headers=bearer(alice),
        )
        assert response.status_code == 201
        org = response.json()
        assert org["status"] == "pending"

        # Pending orgs grant nothing yet
        response = await client.post(
            "/api/v1/topics",
            json={"name": "Notes", "organization_id": org["id"]},
            headers=bearer(alice),
        )
        assert response.status_code == 403

        response = await client.get("/api/v1/admin/organizations/pending", headers=bearer(root))
        pending = response.json()["data"]
        assert [p["id"] for p in pending] == [org["id"]]
        assert pending[0]["creator_email"].endswith("@example.com")

        response = await client.post(
            f"/api/v1/admin/organizations/{org['id']}/approve", headers=bearer(root)
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        response = await client.get("/api/v1/orgs", headers=bearer(alice))
        assert response.json()["data"][0]["role"] == "org_admin"

        response = await client.post(
            "/api/v1/topics",
            json={"name": "Notes", "organization_id": org["id"]},
            headers=bearer(alice),
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_duplicate_slug_conflicts(self, client, bearer, alice):
        body = {"name": "Dup", "slug": "dup-org"}
        await client.post("/api/v1/orgs", json=body, headers=bearer(alice))
        response = await client.post("/api/v1/orgs", json=body, headers=bearer(alice))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATE"

    @pytest.mark.asyncio
    async def test_invalid_slug_rejected(self, client, bearer, alice):
        response = await client.post(
            "/api/v1/orgs", json={"name": "Bad", "slug": "Bad Slug"}, headers=bearer(alice)
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_standard_user_cannot_approve(self, client, bearer, seed, alice):
        org = await seed.org(status=OrgStatus.PENDING)
        response = await client.post(
            f"/api/v1/admin/organizations/{org.id}/approve", headers=bearer(alice)
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_reject_after_approve_keeps_status(self, client, bearer, seed, root):
        org = await seed.org(status=OrgStatus.PENDING)
        await client.post(f"/api/v1/admin/organizations/{org.id}/approve", headers=bearer(root))
        response = await client.post(
            f"/api/v1/admin/organizations/{org.id}/reject", headers=bearer(root)
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"


class TestOrgEndpoints:
    @pytest.mark.asyncio
    async def test_outsider_gets_not_found(self, client, bearer, seed, bob):
        org = await seed.org()
        response = await client.get(f"/api/v1/orgs/{org.id}", headers=bearer(bob))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_anonymous_requires_auth(self, client, seed):
        org = await seed.org()
        response = await client.get(f"/api/v1/orgs/{org.id}")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_admin_updates_org(self, client, bearer, seed, alice):
        org = await seed.org()
        await seed.member(org, alice, OrgRole.ORG_ADMIN)
        response = await client.patch(
            f"/api/v1/orgs/{org.id}", json={"name": "Renamed"}, headers=bearer(alice)
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"

    @pytest.mark.asyncio
    async def test_member_management(self, client, bearer, seed, alice, bob):
        org = await seed.org()
        await seed.member(org, alice, OrgRole.ORG_ADMIN)

        response = await client.post(
            f"/api/v1/orgs/{org.id}/members",
            json={"user_id": str(bob.user_id), "role": "org_editor"},
            headers=bearer(alice),
        )
        assert response.status_code == 201
        assert response.json()["role"] == "org_editor"

        response = await client.patch(
            f"/api/v1/orgs/{org.id}/members/{bob.user_id}",
            json={"role": "org_viewer"},
            headers=bearer(alice),
        )
        assert response.json()["role"] == "org_viewer"

        response = await client.get(f"/api/v1/orgs/{org.id}/members", headers=bearer(bob))
        assert [m["user_id"] for m in response.json()["data"]] == [str(bob.user_id)]

        response = await client.delete(
            f"/api/v1/orgs/{org.id}/members/{bob.user_id}", headers=bearer(bob)
        )
        assert response.status_code == 200
        assert await seed.store.get_membership(org.id, bob.user_id) is None

    @pytest.mark.asyncio
    async def test_delete_org(self, client, bearer, seed, alice):
        org = await seed.org()
        await seed.member(org, alice, OrgRole.ORG_ADMIN)
        response = await client.delete(f"/api/v1/orgs/{org.id}", headers=bearer(alice))
        assert response.status_code == 200
        assert await seed.store.get_organization(org.id) is None


class TestUserEndpoints:
    @pytest.mark.asyncio
    async def test_first_request_creates_profile(self, client, store):
        user_id = uuid.uuid4()
        token, _ = create_jwt(user_id)
        response = await client.get(
            "/api/v1/users/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200
        assert response.json()["role"] == "standard_user"
        assert await store.get_profile(user_id) is not None

    @pytest.mark.asyncio
    async def test_other_profiles_hidden(self, client, bearer, alice, bob):
        response = await client.get(f"/api/v1/users/{alice.user_id}", headers=bearer(bob))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_super_admin_promotes_user(self, client, bearer, alice, root):
        response = await client.put(
            f"/api/v1/admin/users/{alice.user_id}/role",
            json={"role": "super_admin"},
            headers=bearer(root),
        )
        assert response.status_code == 200
        assert response.json()["role"] == "super_admin"

        # Next request resolves the new role
        response = await client.get("/api/v1/admin/organizations/pending", headers=bearer(alice))
        assert response.status_code == 200
