"""Client Layer: HTTP wrapper and list state controller for the investments API.

Invariants:
    - client/ talks to the server only over HTTP (never imports services/ or models/)
    - Every failure surfaced to callers is an ApiError (NetworkError for transport)
"""
