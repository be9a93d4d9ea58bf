"""
User-agent decomposition.

Derives the bot flag, browser, device type and operating system
stored alongside each access log entry.
"""

import re
from dataclasses import dataclass
from typing import Optional

from user_agents import parse as parse_user_agent

from ..config.constants import MAX_FIELD_LENGTH, NO_VALUE
from .bot_classifier import matches_bot_signature

# ua-parser's placeholder for an unrecognized family
_UNKNOWN_FAMILY = "Other"

# Device classes ua-parser does not report; checked before tablet/mobile
# since most of these devices also claim to be one or the other.
_DEVICE_TYPE_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    (
        "console",
        re.compile(r"playstation|xbox|nintendo|ouya|shield portable", re.IGNORECASE),
    ),
    (
        "smarttv",
        re.compile(
            r"smart-?tv|hbbtv|appletv|googletv|android ?tv|crkey|roku|bravia|"
            r"web0s|netcast|tizen.+tv|\baft[a-z]{1,2}\b|tv safari",
            re.IGNORECASE,
        ),
    ),
    (
        "wearable",
        re.compile(r"watch ?os|wear ?os|\bwatch\b|glass\b|\bsm-r\d", re.IGNORECASE),
    ),
    (
        "embedded",
        re.compile(r"qtcarbrowser|tesla|\baeo[a-z]{2}\b|echo|kindle/[12]", re.IGNORECASE),
    ),
)


@dataclass(frozen=True)
class UserAgentInfo:
    """Fields derived from a user-agent string."""

    user_agent: Optional[str]
    bot: bool
    browser: Optional[str]
    device_type: str
    os: Optional[str]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "user_agent": self.user_agent,
            "bot": self.bot,
            "browser": self.browser,
            "device_type": self.device_type,
            "os": self.os,
        }


UNKNOWN_USER_AGENT = UserAgentInfo(
    user_agent=None,
    bot=False,
    browser=None,
    device_type="unknown",
    os=None,
)


def _family(value: Optional[str]) -> Optional[str]:
    if not value or value == _UNKNOWN_FAMILY:
        return None
    return value


def _format_os(family: Optional[str], version: str) -> Optional[str]:
    """Return ``"<name> <version>"``, ``"<name>"`` or None."""
    name = _family(family)
    if not name:
        return None
    return f"{name} {version}" if version else name


def detect_device_type(user_agent: str, parsed=None) -> str:
    """
    Derive the device type of a (non-bot) user agent.

    Args:
        user_agent: Raw user-agent string
        parsed: Result of ``user_agents.parse`` if already available

    Returns:
        One of console, smarttv, wearable, embedded, tablet, mobile, other
    """
    for device_type, pattern in _DEVICE_TYPE_PATTERNS:
        if pattern.search(user_agent):
            return device_type

    if parsed is None:
        parsed = parse_user_agent(user_agent)
    if parsed.is_tablet:
        return "tablet"
    if parsed.is_mobile:
        return "mobile"
    return "other"


def is_bot(user_agent: str, parsed=None) -> bool:
    """Signature match, or the parser's own spider detection."""
    if matches_bot_signature(user_agent):
        return True
    if parsed is None:
        parsed = parse_user_agent(user_agent)
    return parsed.is_bot


def classify_user_agent(user_agent: Optional[str]) -> UserAgentInfo:
    """
    Decompose a user-agent string.

    Empty and ``-`` user agents give ``UNKNOWN_USER_AGENT``. Bots are always
    reported with device type ``unknown``, whatever the parser detects.

    Args:
        user_agent: The HTTP User-Agent header value

    Returns:
        UserAgentInfo with the derived fields

    Examples:
        >>> info = classify_user_agent("Mozilla/5.0 (compatible; Googlebot/2.1)")
        >>> info.bot, info.device_type
        (True, 'unknown')
    """
    if not user_agent or user_agent == NO_VALUE:
        return UNKNOWN_USER_AGENT

    parsed = parse_user_agent(user_agent)
    bot = is_bot(user_agent, parsed)

    return UserAgentInfo(
        user_agent=user_agent[:MAX_FIELD_LENGTH],
        bot=bot,
        browser=_family(parsed.browser.family),
        device_type="unknown" if bot else detect_device_type(user_agent, parsed),
        os=_format_os(parsed.os.family, parsed.os.version_string),
    )
