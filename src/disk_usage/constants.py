"""Shared constants for the disk usage report.

For environment-based configuration (API URL, token, etc.), use the env module:
    from common.env import env
    token = env.joplin_token()
"""

# Listing endpoints are drained this many records at a time (Joplin's maximum)
PAGE_SIZE = 100

RESOURCE_FIELDS = ("id", "size", "title")
NOTE_FIELDS = ("id", "title", "parent_id")
NOTEBOOK_FIELDS = ("id", "title")

DEFAULT_RESOURCE_TITLE = "Untitled"
DEFAULT_NOTE_TITLE = "Untitled Note"
# Title used when a note carries no parent reference
UNFILED_NOTEBOOK_TITLE = "No Notebook"

REPORT_TITLE = "Joplin Disk Usage Report"
PLACEHOLDER_TITLE = REPORT_TITLE
PLACEHOLDER_BODY = "Generating disk usage report, please wait..."

BYTES_PER_MB = 1024 * 1024

PENDING_LEDGER_FILENAME = "pending_placeholders.json"
