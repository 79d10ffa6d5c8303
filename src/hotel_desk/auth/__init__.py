"""
hotel_desk.auth

Session and access-control package.

Responsibilities:
- Resolve access codes into identities (ordered resolution strategies).
- Hold the authenticated identity in an expiring, client-held session.
- Decide allow/redirect for protected routes by role.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here imports FastAPI except `auth.deps`; the rest is unit-testable without an app.
