import logging

from classes.records import LAST_SECTION, ProgressRecord, SectionRecord
from classes.validators import validate_acknowledged, validate_section_id
from utils.helpers import utcnow

logger = logging.getLogger(__name__)

STATUS_NOT_STARTED = "not_started"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"


def onboarding_status(record):
    """Dashboard bucket for a record; ``None`` counts as not started.

    The last section needs no acknowledgment, so six acknowledged sections
    is a finished onboarding.
    """
    if record is None or record.completed_sections == 0:
        return STATUS_NOT_STARTED
    if record.completed_sections >= LAST_SECTION:
        return STATUS_COMPLETED
    return STATUS_IN_PROGRESS


def recompute(record):
    """Derive the counters from the full section set."""
    record.completed_sections = sum(1 for s in record.sections.values() if s.acknowledged)
    record.current_section = min(record.completed_sections, LAST_SECTION)
    return record


class ProgressManager:
    """Per-user onboarding progress on top of an injected store."""

    def __init__(self, store):
        self.store = store

    def get_progress(self, user_id):
        """Return the user's record, creating and saving a fresh one on first read."""
        record = self.store.get_progress(user_id)
        if record is None:
            record = self.store.create_progress_if_absent(ProgressRecord.fresh(user_id))
            logger.info("Created progress record for user %s", user_id)
        return record

    def acknowledge_section(self, user_id, section_id, acknowledged):
        """Set a section's acknowledged flag and recompute the counters.

        Order between sections is not enforced; the client only offers the
        next section once the current one is acknowledged.
        """
        validate_section_id(section_id)
        validate_acknowledged(acknowledged)

        record = self.get_progress(user_id)
        now = utcnow()

        section = record.sections.get(section_id)
        if section:
            section.acknowledged = acknowledged
            section.completed_at = now
        else:
            record.sections[section_id] = SectionRecord(
                id=section_id,
                acknowledged=acknowledged,
                completed_at=now
            )

        recompute(record)
        record.last_updated = now

        saved = self.store.upsert_progress(record)
        logger.info("User %s set section %s acknowledged=%s (%s/%s done)",
                    user_id, section_id, acknowledged, saved.completed_sections, LAST_SECTION)
        return saved
