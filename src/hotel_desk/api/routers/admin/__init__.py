"""
hotel_desk.api.routers.admin

Administrator back-office routers.

Responsibilities:
- Users (profiles), employees, tasks, rooms/chambers and dashboard endpoints.
"""

# Package marker.
