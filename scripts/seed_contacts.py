"""
Insert demo contacts into the configured contact store.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from contacts_api.app import configure_logging
from contacts_api.dependencies import get_db_client
from contacts_api.schemas import ContactPayload
from contacts_api.validation import ContactValidationError, validate_contact_payload

logger = logging.getLogger(__name__)

DEMO_CONTACTS = [
    ("Agnieszka Szymańska", "888-999-000"),
    ("Anna Nowak", "+48 22 654 32 10"),
    ("Jan Kowalski", "+48 601 234 567"),
    ("Piotr Wiśniewski", "+48 12 345 67 89"),
]


def seed(db, contacts=DEMO_CONTACTS, dry_run: bool = False) -> int:
    """Insert contacts that pass validation; return how many were written."""
    inserted = 0
    for name, phone in contacts:
        try:
            validate_contact_payload(ContactPayload(name=name, phone=phone))
        except ContactValidationError as exc:
            logger.warning("Skipping %s: %s", name, exc)
            continue
        if dry_run:
            logger.info("Would insert %s (%s)", name, phone)
        else:
            contact = db.create_contact(name, phone)
            logger.info("Inserted contact %d (%s)", contact.id, contact.name)
        inserted += 1
    return inserted


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed demo contacts")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and log the demo rows without writing them",
    )
    args = parser.parse_args()

    configure_logging()
    inserted = seed(get_db_client(), dry_run=args.dry_run)
    logger.info("Inserted %d contacts", inserted)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
