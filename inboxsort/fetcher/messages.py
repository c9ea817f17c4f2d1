"""Turn Gmail API message resources and exported records into Messages."""

import json
from email.utils import parseaddr
from pathlib import Path
from typing import Any

from inboxsort.models import Message, as_label_ids, as_message_id


def parse_email_address(raw: str) -> str:
    """Extract email address from a raw header value."""
    _, email = parseaddr(raw)
    return email.lower() if email else raw.lower()


def get_header_value(headers: list[dict], name: str) -> str:
    """Get a header value by name."""
    name_lower = name.lower()
    for header in headers:
        if header.get("name", "").lower() == name_lower:
            return header.get("value", "")
    return ""


def is_gmail_resource(record: dict[str, Any]) -> bool:
    """Check whether a record looks like a Gmail API message resource."""
    return isinstance(record.get("payload"), dict)


def message_from_gmail(resource: dict[str, Any]) -> Message:
    """
    Build a Message from a Gmail API message resource.

    Works with both ``format=metadata`` and ``format=full`` responses.

    Args:
        resource: Raw message from the Gmail API.

    Returns:
        Message with subject, snippet, sender address, label IDs and ID.
    """
    payload = resource.get("payload") or {}
    headers = payload.get("headers") or []
    sender = get_header_value(headers, "From")

    return Message(
        subject=get_header_value(headers, "Subject"),
        snippet=resource.get("snippet") or "",
        sender=parse_email_address(sender) if sender else "",
        label_ids=as_label_ids(resource.get("labelIds")),
        message_id=as_message_id(resource.get("id")),
    )


def to_message(record: dict[str, Any]) -> Message:
    """Convert either a Gmail resource or a flat record into a Message."""
    if is_gmail_resource(record):
        return message_from_gmail(record)
    return Message.from_record(record)


def load_messages(path: Path) -> list[Message]:
    """
    Load messages from a JSON export.

    The file holds either a list of records or an object with a
    ``messages`` list. Each record is a Gmail API resource or a flat
    ``{subject, snippet, from, labelIds, id}`` record.

    Args:
        path: JSON file to read.

    Returns:
        List of Messages in file order.

    Raises:
        ValueError: If the file is not valid JSON or has the wrong shape.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("messages")

    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of messages")

    messages = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValueError(f"Message #{i} in {path} is not an object")
        messages.append(to_message(record))

    return messages
