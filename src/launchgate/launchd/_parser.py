"""Parser for `launchctl print` output.

launchctl prints job state as loosely structured text. The argument vector
shows up in more than one shape depending on the macOS release, e.g.::

    program arguments = (
        "/Applications/Clawdbot.app/Contents/Resources/Relay/clawdbot",
        "--port",
        "18789",
    )

or::

    argv[] = { /usr/local/bin/clawdbot, gateway-daemon, --port, 19999 }

Rather than parsing either grammar, values are found by scanning forward
from a flag and skipping the punctuation both shapes use.
"""

import re
import string

from ._models import JobSnapshot

# Characters skipped between a flag and its value
_LEADING_DELIMITERS: frozenset[str] = frozenset(",()=\"'")

# Characters that end a flag value
_VALUE_TERMINATORS: frozenset[str] = frozenset(",()\"'\n\r")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _is_delimiter(ch: str) -> bool:
    return ch.isspace() or ch in _LEADING_DELIMITERS


def _is_terminator(ch: str) -> bool:
    return ch.isspace() or ch in _VALUE_TERMINATORS


def _parse_int(token: str) -> int | None:
    if _INTEGER_PATTERN.fullmatch(token) is None:
        return None
    return int(token)


def extract_int_value(output: str, key: str) -> int | None:
    """Extract the integer following the first ``<key> =`` in the output.

    Args:
        output: Raw launchctl output.
        key: Key name, e.g. ``"pid"``.

    Returns:
        The run of decimal digits after the key and any whitespace, or None
        when the key is absent or no digits follow it.
    """
    start = output.find(f"{key} =")
    if start < 0:
        return None

    idx = start + len(key) + 2
    end_of_output = len(output)
    while idx < end_of_output and output[idx].isspace():
        idx += 1

    end = idx
    while end < end_of_output and output[end] in string.digits:
        end += 1

    if end == idx:
        return None
    return int(output[idx:end])


def extract_flag_value(output: str, flag: str) -> str | None:
    """Extract the value that follows the first occurrence of a flag.

    Args:
        output: Raw launchctl output.
        flag: Flag name including dashes, e.g. ``"--port"``.

    Returns:
        The flag's value with quotes, commas, parentheses and whitespace
        stripped, or None if the flag is absent or has no value.
    """
    start = output.find(flag)
    if start < 0:
        return None

    idx = start + len(flag)
    end_of_output = len(output)
    while idx < end_of_output and _is_delimiter(output[idx]):
        idx += 1

    if idx >= end_of_output:
        return None

    end = idx
    while end < end_of_output and not _is_terminator(output[end]):
        end += 1

    token = output[idx:end].strip()
    return token or None


def extract_flag_int_value(output: str, flag: str) -> int | None:
    """Extract a flag value and parse it as an integer.

    Returns:
        The integer value, or None if the flag is absent or not numeric.
    """
    raw = extract_flag_value(output, flag)
    if raw is None:
        return None
    return _parse_int(raw)


def parse_snapshot(output: str) -> JobSnapshot:
    """Parse `launchctl print` output into a JobSnapshot.

    Never raises; fields that cannot be found are None.

    Args:
        output: Raw launchctl output.

    Returns:
        Snapshot with pid, ``--port`` and lowercased ``--bind`` values.
    """
    bind = extract_flag_value(output, "--bind")
    return JobSnapshot(
        pid=extract_int_value(output, "pid"),
        port=extract_flag_int_value(output, "--port"),
        bind=bind.lower() if bind is not None else None,
    )
