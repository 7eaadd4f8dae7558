"""Task identifiers.

A task id is a random UUID. On the wire it is always the 32-character
hexadecimal form; every operation that looks up a record parses the wire
form through parse_task_id() and uses the resulting UUID as the store key.
"""

import re
import uuid

from taskapi.exceptions import ValidationError


TaskId = uuid.UUID

_HEX_ID = re.compile(r"[0-9a-fA-F]{32}")


def new_task_id() -> TaskId:
    """Generate a fresh task identifier."""
    return uuid.uuid4()


def parse_task_id(value: object) -> TaskId:
    """Parse the wire form of a task identifier.

    Args:
        value: Identifier as received from the client.

    Returns:
        Parsed identifier.

    Raises:
        ValidationError: If value is not exactly 32 hexadecimal characters.
    """
    if not isinstance(value, str) or not _HEX_ID.fullmatch(value):
        raise ValidationError("malformed identifier")
    return uuid.UUID(hex=value)


def format_task_id(task_id: TaskId) -> str:
    """Return the wire form of a task identifier."""
    return task_id.hex
