"""
Wire Status Codes

Provider-agnostic status codes used when a failure has to travel between
internal services (the "net error" code of the job, worker and API tiers).
The external HTTP rendering of each code lives in status.py.
"""

from __future__ import annotations

from enum import Enum


class WireStatusCode(str, Enum):
    """Closed set of inter-service failure codes."""

    TIMEOUT = "TIMEOUT"
    REMOTE_REJECTED = "REMOTE_REJECTED"
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    ENTITY_CONFLICT = "ENTITY_CONFLICT"
    ACCESS_DENIED = "ACCESS_DENIED"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    BAD_REMOTE_REPLY = "BAD_REMOTE_REPLY"
    SECRET_KEY_FETCH = "SECRET_KEY_FETCH"
    VCS_CLONE = "VCS_CLONE"
    NO_SHARD = "NO_SHARD"
    SOCK = "SOCK"
    REMOTE_UNAVAILABLE = "REMOTE_UNAVAILABLE"
    BAD_TOKEN = "BAD_TOKEN"
    GROUP_NOT_COMPLETE = "GROUP_NOT_COMPLETE"
    BUILD = "BUILD"
    EXPORT = "EXPORT"
    POST_PROCESSOR = "POST_PROCESSOR"
    SECRET_KEY_IMPORT = "SECRET_KEY_IMPORT"
    INVALID_INTEGRATIONS = "INVALID_INTEGRATIONS"
    PARTIAL_JOB_GROUP_PROMOTE = "PARTIAL_JOB_GROUP_PROMOTE"
    BUG = "BUG"
    SYS = "SYS"
    DATA_STORE = "DATA_STORE"
    WORKSPACE_SETUP = "WORKSPACE_SETUP"
    REG_CONFLICT = "REG_CONFLICT"
    REG_NOT_FOUND = "REG_NOT_FOUND"
