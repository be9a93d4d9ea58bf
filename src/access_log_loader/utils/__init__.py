"""Utility functions for the access log loader."""

from .bot_classifier import BOT_SIGNATURES, matches_bot_signature
from .user_agent import (
    UNKNOWN_USER_AGENT,
    UserAgentInfo,
    classify_user_agent,
    detect_device_type,
    is_bot,
)

__all__ = [
    # Bot detection
    "BOT_SIGNATURES",
    "matches_bot_signature",
    # User-agent decomposition
    "UserAgentInfo",
    "UNKNOWN_USER_AGENT",
    "classify_user_agent",
    "detect_device_type",
    "is_bot",
]
