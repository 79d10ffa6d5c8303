"""
hotel_desk.observability

Logging setup and per-request log context.

Responsibilities:
- Configure structlog once per process.
- Tag every log line of a request with its request id, path and method.
"""

# Package marker.
