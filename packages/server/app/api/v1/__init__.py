"""
API v1 Router

Content (topics/events) is readable anonymously where policy allows; all
writes require an authenticated actor.
"""

from fastapi import APIRouter
from . import admin, events, organizations, topics, users

router = APIRouter()

router.include_router(topics.router, prefix="/topics", tags=["Topics"])
router.include_router(events.router, prefix="/events", tags=["Events"])
router.include_router(organizations.router, prefix="/orgs", tags=["Organizations"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/topics",
            "/topics/{topic_id}/events",
            "/events/{event_id}",
            "/orgs",
            "/orgs/{org_id}/members",
            "/users/me",
            "/admin/organizations/pending",
        ],
    }
