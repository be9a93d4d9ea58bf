"""
Field validators for raw access log lines.

Each validator takes the current normalization state (a dict of the raw
record with the fields validated so far replaced by their normalized
values) and returns a new state, or raises ValidationError. Validators run
in the fixed order of VALIDATOR_CHAIN and the first failure stops the
chain; later validators rely on the earlier ones having passed.
"""

import ipaddress
import json
import math
import re
from datetime import datetime
from typing import Any, Callable, Optional

from dateutil import parser as date_parser

from ..config.constants import (
    MAX_COUNTRY_LENGTH,
    MAX_FIELD_LENGTH,
    NO_VALUE,
    REQUIRED_FIELDS,
    VALID_HTTP_METHODS,
    VALID_HTTP_STATUSES,
)
from ..utils.user_agent import classify_user_agent
from .base import ValidatedEntry
from .exceptions import ParseError, ValidationError

State = dict[str, Any]
Validator = Callable[[State], State]

# The upstream log writer escapes non-ASCII bytes as \xHH, which is not
# valid JSON; rewritten as URI escapes they survive decoding and are
# restored by the path/query URI decoding.
_HEX_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")
_PERCENT_ESCAPE = re.compile(r"%(?![0-9a-fA-F]{2})")
_ESCAPE_RUN = re.compile(r"(?:%[0-9a-fA-F]{2})+")
_HEX_NUMBER = re.compile(r"^0[xX][0-9a-fA-F]+$")
_DECIMAL_NUMBER = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")

# Characters whose escapes are kept when decoding a URI
_URI_RESERVED = frozenset(";/?:@&=+$,#")

# Two defaults differing only in the year; a timestamp parsing to
# different values with each is missing part of its date.
_TIME_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 1, 1))


# =============================================================================
# Coercion Helpers
# =============================================================================


def to_number(value: str) -> Optional[float | int]:
    """
    Coerce a string to a number the way the log writer formats them.

    Surrounding whitespace is ignored, an empty string is 0 and hexadecimal
    literals are accepted. Only ASCII digits count, without ``_`` separators.
    Returns None when the value is not a finite number.
    """
    text = value.strip()
    if not text:
        return 0
    if _HEX_NUMBER.match(text):
        return int(text, 16)
    if not _DECIMAL_NUMBER.match(text):
        return None
    number = float(text)
    if math.isinf(number):
        return None
    return int(number) if number.is_integer() else number


def _decode_escape_run(match: re.Match) -> str:
    escapes = match.group(0)
    # Strict decoding: raises UnicodeDecodeError on invalid UTF-8
    decoded = bytes.fromhex(escapes.replace("%", "")).decode("utf-8")

    parts = []
    offset = 0
    for char in decoded:
        if char in _URI_RESERVED:
            parts.append(escapes[offset * 3 : offset * 3 + 3])
        else:
            parts.append(char)
        offset += len(char.encode("utf-8"))
    return "".join(parts)


def decode_uri(value: str) -> str:
    """
    Decode percent-escapes, failing on malformed or non-UTF-8 sequences.

    Escapes of reserved characters (``;/?:@&=+$,#``) are left as they
    are, so an escaped ``&`` in a query value stays distinct from a
    separator.

    Raises:
        ValueError: If the value holds an invalid escape sequence
    """
    if _PERCENT_ESCAPE.search(value):
        raise ValueError("malformed percent-escape")
    return _ESCAPE_RUN.sub(_decode_escape_run, value)


# =============================================================================
# Validators
# =============================================================================


def fix_escaping(line: str) -> str:
    """Rewrite every ``\\xHH`` escape as ``%HH``."""
    return _HEX_ESCAPE.sub(r"%\1", line)


def parse_json(line: str) -> State:
    """Decode the line into a record."""
    try:
        record = json.loads(line)
    except ValueError:
        raise ParseError(line_content=line) from None
    if not isinstance(record, dict):
        raise ParseError(line_content=line)
    return record


def check_fields_are_strings(state: State) -> State:
    for key, value in state.items():
        if not isinstance(value, str):
            raise ValidationError(f"Field '{key}' is not a string.", field=key, value=value)
    for key in REQUIRED_FIELDS:
        if key not in state:
            raise ValidationError(f"Missing field '{key}'.", field=key)
    return state


def check_valid_utf8(state: State) -> State:
    # JSON \uXXXX escapes can produce lone surrogates, which the store
    # cannot encode
    for key, value in state.items():
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValidationError(f"Field '{key}' is not valid UTF-8.", field=key) from None
    return state


def check_valid_ip(state: State) -> State:
    try:
        ipaddress.ip_address(state["host"])
    except ValueError:
        raise ValidationError(
            f"Invalid IP address: {state['host']}", field="host", value=state["host"]
        ) from None
    return state


def check_valid_time(state: State) -> State:
    try:
        time, other = (
            date_parser.parse(state["time"], default=default) for default in _TIME_DEFAULTS
        )
        if time != other:
            raise ValueError("incomplete date")
    except (ValueError, OverflowError):
        raise ValidationError(
            f"Invalid time: {state['time']}", field="time", value=state["time"]
        ) from None
    return {**state, "time": time}


def check_valid_method(state: State) -> State:
    method = state["method"].upper()
    if method == NO_VALUE:
        return {**state, "method": None}
    if method not in VALID_HTTP_METHODS:
        raise ValidationError(f"Invalid HTTP method: {method}", field="method", value=method)
    return {**state, "method": method}


def check_path_query(state: State) -> State:
    decoded = {}
    for key in ("path", "query"):
        try:
            decoded[key] = decode_uri(state[key])[:MAX_FIELD_LENGTH]
        except ValueError:
            raise ValidationError(
                f"Invalid URI: {state[key]}", field=key, value=state[key]
            ) from None
    return {
        **state,
        "path": None if decoded["path"] == NO_VALUE else decoded["path"],
        "query": decoded["query"] or None,
    }


def check_status(state: State) -> State:
    status = to_number(state["status"])
    if status not in VALID_HTTP_STATUSES:
        raise ValidationError(
            f"Invalid HTTP status: {state['status']}", field="status", value=state["status"]
        )
    return {**state, "status": int(status)}


def check_response_size(state: State) -> State:
    response_size = to_number(state["responseSize"])
    if response_size is None:
        raise ValidationError(
            f"Invalid response size: {state['responseSize']}",
            field="responseSize",
            value=state["responseSize"],
        )
    return {**state, "responseSize": response_size}


def check_process_time(state: State) -> State:
    process_time = to_number(state["processTime"])
    if process_time is None:
        raise ValidationError(
            f"Invalid process time: {state['processTime']}",
            field="processTime",
            value=state["processTime"],
        )
    return {**state, "processTime": process_time}


def trim_referer(state: State) -> State:
    return {**state, "referer": state["referer"][:MAX_FIELD_LENGTH]}


def trim_user(state: State) -> State:
    user = state["user"][:MAX_FIELD_LENGTH]
    return {**state, "user": None if user == NO_VALUE else user}


def check_country(state: State) -> State:
    country = state["country"]
    return {
        **state,
        "country": None if country == NO_VALUE else country[:MAX_COUNTRY_LENGTH].upper(),
    }


def decompose_user_agent(state: State) -> State:
    info = classify_user_agent(state["userAgent"])
    return {
        **state,
        "userAgent": info.user_agent,
        "bot": info.bot,
        "browser": info.browser,
        "deviceType": info.device_type,
        "os": info.os,
    }


# Order matters: each validator may assume all earlier ones succeeded.
VALIDATOR_CHAIN: tuple[Validator, ...] = (
    check_fields_are_strings,
    check_valid_utf8,
    check_valid_ip,
    check_valid_time,
    check_valid_method,
    check_path_query,
    check_status,
    check_response_size,
    check_process_time,
    trim_referer,
    trim_user,
    check_country,
    decompose_user_agent,
)


def run_chain(line: str, validators: tuple[Validator, ...] = VALIDATOR_CHAIN) -> State:
    """
    Run a raw line through escaping fix, JSON decoding and the validators.

    Returns:
        Final normalization state

    Raises:
        ValidationError: From the first validator that fails
    """
    state = parse_json(fix_escaping(line))
    for validator in validators:
        state = validator(state)
    return state


def validate_line(line: str) -> ValidatedEntry:
    """
    Validate one raw access log line.

    Args:
        line: One JSON-encoded record, without the line terminator

    Returns:
        ValidatedEntry built from the normalized record

    Raises:
        ValidationError: If any field is invalid
    """
    state = run_chain(line)
    return ValidatedEntry(
        host=state["host"],
        user=state["user"],
        time=state["time"],
        method=state["method"],
        path=state["path"],
        query=state["query"],
        status=state["status"],
        response_size=state["responseSize"],
        process_time=state["processTime"],
        referer=state["referer"],
        user_agent=state["userAgent"],
        bot=state["bot"],
        browser=state["browser"],
        device_type=state["deviceType"],
        os=state["os"],
        country=state["country"],
    )
