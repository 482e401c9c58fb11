"""
Tests for topic access decisions: the pure decision table, ownership
classification, and TopicAccess against a seeded store.
"""

from __future__ import annotations

import uuid

import pytest

from app.policy import (
    ANONYMOUS,
    Actor,
    Legacy,
    NotFound,
    OrganizationOwned,
    PermissionDenied,
    Personal,
    Public,
    TopicAccess,
    decide,
)
from app.policy.ownership import classify
from timeline_shared.schemas.common import Operation, OrgRole
from timeline_shared.schemas.organizations import OrgStatus

WRITES = [Operation.UPDATE, Operation.DELETE]


# ---------------------------------------------------------------------------
# Ownership classification
# ---------------------------------------------------------------------------

class TestClassify:
    def test_org_wins_over_creator_and_public(self):
        org_id, user_id = uuid.uuid4(), uuid.uuid4()
        result = classify(organization_id=org_id, created_by=user_id, is_public=True)
        assert result == OrganizationOwned(org_id)

    def test_public_without_org(self):
        user_id = uuid.uuid4()
        assert classify(organization_id=None, created_by=user_id, is_public=True) == Public()

    def test_personal(self):
        user_id = uuid.uuid4()
        assert classify(organization_id=None, created_by=user_id, is_public=False) == Personal(user_id)

    def test_legacy(self):
        assert classify(organization_id=None, created_by=None, is_public=False) == Legacy()


# ---------------------------------------------------------------------------
# Decision table
# ---------------------------------------------------------------------------

class TestDecide:
    owner = Actor(user_id=uuid.uuid4())

    @pytest.mark.parametrize("op", [Operation.READ, *WRITES])
    @pytest.mark.parametrize(
        "ownership",
        [OrganizationOwned(uuid.uuid4()), Personal(uuid.uuid4()), Public(), Legacy()],
    )
    def test_super_admin_permits_everything(self, op, ownership):
        assert decide(op, ownership, actor=None, is_public=False, is_super_admin=True)

    def test_public_read_needs_nothing(self):
        assert decide(Operation.READ, Public(), actor=None, is_public=True, is_super_admin=False)

    def test_public_org_topic_readable_without_access(self):
        ownership = OrganizationOwned(uuid.uuid4())
        assert decide(Operation.READ, ownership, actor=None, is_public=True, is_super_admin=False)

    @pytest.mark.parametrize("op", WRITES)
    def test_public_no_org_topic_is_write_locked_for_creator(self, op):
        ownership = Public()
        assert not decide(op, ownership, actor=self.owner, is_public=True, is_super_admin=False)

    def test_org_read_follows_access(self):
        ownership = OrganizationOwned(uuid.uuid4())
        kwargs = dict(actor=self.owner, is_public=False, is_super_admin=False)
        assert decide(Operation.READ, ownership, has_org_access=True, **kwargs)
        assert not decide(Operation.READ, ownership, has_org_access=False, **kwargs)

    @pytest.mark.parametrize("op", WRITES)
    def test_org_write_follows_edit_rights(self, op):
        ownership = OrganizationOwned(uuid.uuid4())
        kwargs = dict(actor=self.owner, is_public=False, is_super_admin=False)
        assert decide(op, ownership, can_edit_org=True, **kwargs)
        assert not decide(op, ownership, has_org_access=True, **kwargs)

    @pytest.mark.parametrize("op", [Operation.READ, *WRITES])
    def test_personal_topic_belongs_to_creator(self, op):
        ownership = Personal(self.owner.user_id)
        stranger = Actor(user_id=uuid.uuid4())
        assert decide(op, ownership, actor=self.owner, is_public=False, is_super_admin=False)
        assert not decide(op, ownership, actor=stranger, is_public=False, is_super_admin=False)
        assert not decide(op, ownership, actor=ANONYMOUS, is_public=False, is_super_admin=False)

    @pytest.mark.parametrize("op", [Operation.READ, *WRITES])
    def test_legacy_topic_is_super_admin_only(self, op):
        assert not decide(op, Legacy(), actor=self.owner, is_public=False, is_super_admin=False)

    def test_create_is_not_decided_here(self):
        assert not decide(
            Operation.CREATE, Personal(self.owner.user_id),
            actor=self.owner, is_public=False, is_super_admin=False,
        )


# ---------------------------------------------------------------------------
# TopicAccess
# ---------------------------------------------------------------------------

class TestTopicAccess:
    async def test_missing_topic_denies(self, store, root):
        access = TopicAccess(store)
        assert not await access.can_read(None, root)

    async def test_super_admin_permits_all_operations(self, store, seed, root):
        org = await seed.org(status=OrgStatus.PENDING)
        topic = await seed.topic(organization_id=org.id)
        access = TopicAccess(store)
        for op in Operation:
            assert await access.permits(op, topic, root)

    async def test_viewer_reads_but_cannot_write(self, store, seed, alice):
        org = await seed.org()
        await seed.member(org, alice, OrgRole.ORG_VIEWER)
        topic = await seed.topic(organization_id=org.id)
        access = TopicAccess(store)
        assert await access.can_read(topic, alice)
        assert not await access.can_update(topic, alice)
        assert not await access.can_delete(topic, alice)

    async def test_editor_writes(self, store, seed, alice):
        org = await seed.org()
        await seed.member(org, alice, OrgRole.ORG_EDITOR)
        topic = await seed.topic(organization_id=org.id)
        access = TopicAccess(store)
        assert await access.can_update(topic, alice)
        assert await access.can_delete(topic, alice)

    async def test_pending_org_denies_members(self, store, seed, alice):
        org = await seed.org(status=OrgStatus.PENDING)
        await seed.member(org, alice, OrgRole.ORG_ADMIN)
        topic = await seed.topic(organization_id=org.id)
        access = TopicAccess(store)
        for op in Operation:
            assert not await access.permits(op, topic, alice)

    async def test_public_org_topic_readable_by_anonymous(self, store, seed):
        org = await seed.org()
        topic = await seed.topic(is_public=True, organization_id=org.id)
        access = TopicAccess(store)
        assert await access.can_read(topic, ANONYMOUS)
        assert not await access.can_update(topic, ANONYMOUS)

    async def test_public_no_org_topic_write_locked(self, store, seed, alice, bob, root):
        topic = await seed.topic(is_public=True, created_by=alice.user_id)
        access = TopicAccess(store)
        for actor in (ANONYMOUS, alice, bob, root):
            assert await access.can_read(topic, actor)
        for actor in (ANONYMOUS, alice, bob):
            assert not await access.can_update(topic, actor)
            assert not await access.can_delete(topic, actor)
        assert await access.can_update(topic, root)

    async def test_personal_topic(self, store, seed, alice, bob):
        topic = await seed.topic(created_by=alice.user_id)
        access = TopicAccess(store)
        assert await access.can_update(topic, alice)
        assert not await access.can_read(topic, bob)
        assert not await access.can_read(topic, ANONYMOUS)

    async def test_legacy_topic_only_super_admin(self, store, seed, alice, root):
        topic = await seed.topic()
        access = TopicAccess(store)
        assert not await access.can_read(topic, alice)
        assert await access.can_read(topic, root)

    async def test_topic_of_deleted_org_is_denied(self, store, seed, alice):
        topic = await seed.topic(organization_id=uuid.uuid4())
        assert not await TopicAccess(store).can_read(topic, alice)

    async def test_org_role_is_resolved_by_id(self, store, seed, alice, monkeypatch):
        org = await seed.org()
        await seed.member(org, alice, OrgRole.ORG_EDITOR)
        topic = await seed.topic(organization_id=org.id)
        access = TopicAccess(store)

        seen = []
        by_id = access.roles.org_role_by_id

        async def recording(org_id, actor):
            seen.append(org_id)
            return await by_id(org_id, actor)

        monkeypatch.setattr(access.roles, "org_role_by_id", recording)
        assert await access.can_read(topic, alice)
        assert await access.can_update(topic, alice)
        assert seen == [org.id, org.id]


class TestTopicCreate:
    async def test_authenticated_user_creates_personal_topic(self, store, alice):
        assert await TopicAccess(store).can_create(alice)

    async def test_anonymous_cannot_create(self, store):
        access = TopicAccess(store)
        assert not await access.can_create(ANONYMOUS)
        assert not await access.can_create(None)

    async def test_org_topic_needs_edit_rights(self, store, seed, alice, bob):
        org = await seed.org()
        await seed.member(org, alice, OrgRole.ORG_EDITOR)
        await seed.member(org, bob, OrgRole.ORG_VIEWER)
        access = TopicAccess(store)
        assert await access.can_create(alice, organization_id=org.id)
        assert not await access.can_create(bob, organization_id=org.id)

    async def test_org_topic_in_deleted_org_is_denied(self, store, alice):
        assert not await TopicAccess(store).can_create(alice, organization_id=uuid.uuid4())

    async def test_super_admin_creates_anywhere(self, store, root):
        assert await TopicAccess(store).can_create(root, organization_id=uuid.uuid4())

    async def test_check_create_raises(self, store, seed, alice):
        org = await seed.org()
        with pytest.raises(PermissionDenied):
            await TopicAccess(store).check_create(alice, organization_id=org.id)


class TestTopicResolve:
    async def test_missing_topic(self, store, alice):
        with pytest.raises(NotFound):
            await TopicAccess(store).resolve(uuid.uuid4(), alice)

    async def test_unreadable_topic_looks_missing(self, store, seed, alice, bob):
        topic = await seed.topic(created_by=alice.user_id)
        with pytest.raises(NotFound) as missing:
            await TopicAccess(store).resolve(uuid.uuid4(), bob)
        with pytest.raises(NotFound) as hidden:
            await TopicAccess(store).resolve(topic.id, bob, Operation.UPDATE)
        assert hidden.value.message == missing.value.message

    async def test_readable_but_not_writable_is_denied(self, store, seed, alice):
        topic = await seed.topic(is_public=True, created_by=alice.user_id)
        access = TopicAccess(store)
        assert (await access.resolve(topic.id, alice)).id == topic.id
        with pytest.raises(PermissionDenied):
            await access.resolve(topic.id, alice, Operation.UPDATE)
