"""
hotel_desk.api.routers.admin.guard

Shared `/admin` guard dependency for every admin sub-router.
"""

from __future__ import annotations

from hotel_desk.auth.deps import guard_route

# One dependency object so FastAPI resolves it once per request.
admin_only = guard_route("/admin")
