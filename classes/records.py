"""Plain data records shared by the managers and every storage backend.

Stores hand these out instead of ORM rows so the progress and admin logic
does not care where the data lives.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Optional

from utils.helpers import format_datetime, parse_datetime, utcnow

ROLE_ADMIN = "admin"
ROLE_STAFF = "staff"

TOTAL_SECTIONS = 7
LAST_SECTION = TOTAL_SECTIONS - 1


@dataclass
class UserRecord:
    id: int
    email: str
    password_hash: str
    name: str
    role: str = ROLE_STAFF
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def identity(self):
        """Fields that may leave the server; never the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }


@dataclass
class SectionRecord:
    id: int
    acknowledged: bool
    completed_at: Optional[datetime] = None

    def to_dict(self):
        return {
            "id": self.id,
            "acknowledged": self.acknowledged,
            "completedAt": format_datetime(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data["id"],
            acknowledged=bool(data.get("acknowledged", False)),
            completed_at=parse_datetime(data.get("completedAt")),
        )


@dataclass
class ProgressRecord:
    user_id: int
    sections: Dict[int, SectionRecord] = field(default_factory=dict)
    current_section: int = 0
    completed_sections: int = 0
    last_updated: datetime = field(default_factory=utcnow)

    @classmethod
    def fresh(cls, user_id):
        return cls(user_id=user_id)

    def copy(self):
        return replace(
            self,
            sections={sid: replace(s) for sid, s in self.sections.items()},
        )

    def to_dict(self):
        return {
            "userId": self.user_id,
            "sections": [self.sections[sid].to_dict() for sid in sorted(self.sections)],
            "currentSection": self.current_section,
            "completedSections": self.completed_sections,
            "lastUpdated": format_datetime(self.last_updated),
        }

    @classmethod
    def from_dict(cls, data, user_id=None):
        sections = {}
        for raw in data.get("sections") or []:
            section = SectionRecord.from_dict(raw)
            sections[section.id] = section
        return cls(
            user_id=data["userId"] if user_id is None else user_id,
            sections=sections,
            current_section=data.get("currentSection", 0),
            completed_sections=data.get("completedSections", 0),
            last_updated=parse_datetime(data.get("lastUpdated")) or utcnow(),
        )
