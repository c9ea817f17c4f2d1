"""Input view of a message as seen by the classifier."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Message:
    """
    Minimal message fields the classifier needs.

    ``message_id`` is only required to consult or record overrides.
    """

    subject: str = ""
    snippet: str = ""
    sender: str = ""
    label_ids: tuple[str, ...] = field(default_factory=tuple)
    message_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Message":
        """
        Build a Message from a flat record.

        Accepts the provider shape (``from``, ``labelIds``, ``id``) as well as
        the cache shape (``sender``, ``labels``, ``message_id``). Missing or
        null text fields become empty strings.
        """
        sender = record.get("from")
        if sender is None:
            sender = record.get("sender")

        label_ids = record.get("labelIds")
        if label_ids is None:
            label_ids = record.get("labels")

        message_id = record.get("id")
        if message_id is None:
            message_id = record.get("message_id")

        return cls(
            subject=_text(record.get("subject")),
            snippet=_text(record.get("snippet")),
            sender=_text(sender),
            label_ids=as_label_ids(label_ids),
            message_id=as_message_id(message_id),
        )


def as_label_ids(value: Any) -> tuple[str, ...]:
    """Normalize a label list; a bare string is a single label."""
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(label) for label in value)


def as_message_id(value: Any) -> Optional[str]:
    """Normalize a message ID to a string, or None when absent or empty."""
    if value is None or value == "":
        return None
    return str(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)
