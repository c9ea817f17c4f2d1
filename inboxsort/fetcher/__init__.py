"""Fetcher module for turning provider data into classifier input."""

from .messages import (
    get_header_value,
    load_messages,
    message_from_gmail,
    parse_email_address,
    to_message,
)

__all__ = [
    "get_header_value",
    "load_messages",
    "message_from_gmail",
    "parse_email_address",
    "to_message",
]
