"""Recipient list lookup and validation."""

import logging
import re

from common.errors import StoreError
from row_store.base import RowStore

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s,]+@[^@\s,]+\.[^@\s,]+$")


def validate_emails(email_string: str) -> list[str]:
    """Split a comma-separated address list and keep the ones shaped like local@domain.tld."""
    valid = []
    invalid = []
    for email in email_string.split(","):
        trimmed = email.strip()
        if not trimmed:
            continue
        if _EMAIL_RE.match(trimmed):
            valid.append(trimmed)
        else:
            invalid.append(trimmed)

    if invalid:
        logger.warning("Skipped invalid email addresses: %s", ", ".join(invalid))
    return valid


def get_email_list(store: RowStore, table: str, list_name: str) -> str:
    """Return the raw comma-separated addresses stored for a named list.

    The recipients table has the list name in its first column and the
    addresses in its second.
    """
    if not store.has_table(table):
        logger.error("Recipients table '%s' not found", table)
        return ""
    try:
        values = store.read_values(table)
    except StoreError as e:
        logger.error("Could not read recipients table '%s': %s", table, e)
        return ""

    for row in values:
        if row and row[0].strip() == list_name:
            return row[1] if len(row) > 1 else ""
    logger.warning("No recipient list named '%s' in %s", list_name, table)
    return ""
