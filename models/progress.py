from models import db
from classes.records import ProgressRecord, SectionRecord
from utils.helpers import parse_datetime


class ProgressRecordModel(db.Model):
    __tablename__ = "progress"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True)
    # [{"id": 0, "acknowledged": true, "completedAt": "..."}]
    sections = db.Column(db.JSON, nullable=False, default=list)
    current_section = db.Column(db.Integer, nullable=False, default=0)
    completed_sections = db.Column(db.Integer, nullable=False, default=0)
    last_updated = db.Column(db.DateTime(timezone=True), nullable=False, default=db.func.now())

    user = db.relationship("User", back_populates="progress")

    def __repr__(self):
        return f"<Progress User {self.user_id} ({self.completed_sections} done)>"

    def to_record(self):
        sections = {}
        for raw in self.sections or []:
            section = SectionRecord.from_dict(raw)
            sections[section.id] = section
        return ProgressRecord(
            user_id=self.user_id,
            sections=sections,
            current_section=self.current_section,
            completed_sections=self.completed_sections,
            last_updated=parse_datetime(self.last_updated),
        )

    def apply(self, record):
        # Assign a new list so the JSON column is flagged as modified.
        self.sections = [record.sections[sid].to_dict() for sid in sorted(record.sections)]
        self.current_section = record.current_section
        self.completed_sections = record.completed_sections
        self.last_updated = record.last_updated
