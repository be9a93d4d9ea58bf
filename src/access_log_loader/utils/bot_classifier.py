"""
Bot detection from user-agent strings.

Matches user-agent strings against a list of generic crawler, tool and
headless-browser signatures.
"""

import re
from typing import Optional

# Generic signatures shared by crawlers, HTTP libraries and monitoring tools.
# Matched case-insensitively anywhere in the user-agent string.
BOT_SIGNATURES = (
    r"(?<!cu)bot",  # Cubot is a phone brand
    r"crawl",
    r"spider",
    r"slurp",
    r"scrap(?:er|y|ing)",
    r"archiv(?:er|e\.org)",
    r"https?://",
    r"@\w+\.\w+",
    r"headless",
    r"phantomjs",
    r"lighthouse",
    r"pingdom",
    r"uptime",
    r"monitor",
    r"validator",
    r"preview",
    r"facebookexternalhit",
    r"embedly",
    r"feed(?:fetcher|parser|reader)",
    r"\bcurl\b",
    r"\bwget\b",
    r"python-(?:requests|urllib|httpx)",
    r"python/\d",
    r"aiohttp",
    r"go-http-client",
    r"java/\d",
    r"okhttp",
    r"axios",
    r"node-fetch",
    r"libwww-perl",
    r"apache-httpclient",
    r"httpclient",
    r"postmanruntime",
    r"insomnia",
    r"^mozilla/\d\.\d$",
    r"^[\w-]+/[\d.]+$",
)

_BOT_PATTERN: re.Pattern = re.compile("|".join(BOT_SIGNATURES), re.IGNORECASE)


def matches_bot_signature(user_agent: Optional[str]) -> bool:
    """
    Check a user-agent string against the known bot signatures.

    Args:
        user_agent: The HTTP User-Agent header value

    Returns:
        True if any signature matches

    Examples:
        >>> matches_bot_signature("Mozilla/5.0 (compatible; Googlebot/2.1)")
        True
        >>> matches_bot_signature("curl/8.4.0")
        True
        >>> matches_bot_signature("Mozilla/5.0 (Windows NT 10.0) Chrome/120")
        False
    """
    if not user_agent:
        return False
    return _BOT_PATTERN.search(user_agent) is not None
