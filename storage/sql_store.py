import logging

from sqlalchemy.exc import IntegrityError

from models import db
from models.users import User
from models.progress import ProgressRecordModel
from storage.base import OnboardingStore
from utils.errors import AlreadyExists

logger = logging.getLogger(__name__)


class SqlAlchemyStore(OnboardingStore):
    """Flask-SQLAlchemy backend. Must be used inside an app context."""

    name = "sqlalchemy"

    def __init__(self, database=db):
        self.db = database

    def get_progress(self, user_id):
        row = ProgressRecordModel.query.filter_by(user_id=user_id).first()
        return row.to_record() if row else None

    def upsert_progress(self, record):
        row = ProgressRecordModel.query.filter_by(user_id=record.user_id).first()
        if not row:
            row = ProgressRecordModel(user_id=record.user_id)
            self.db.session.add(row)
        row.apply(record)
        self.db.session.commit()
        return row.to_record()

    def create_progress_if_absent(self, record):
        row = ProgressRecordModel.query.filter_by(user_id=record.user_id).first()
        if row:
            return row.to_record()

        row = ProgressRecordModel(user_id=record.user_id)
        row.apply(record)
        self.db.session.add(row)
        try:
            self.db.session.commit()
        except IntegrityError:
            # Another request created it first; the unique user_id wins.
            self.db.session.rollback()
            logger.info("Progress for user %s created concurrently, re-reading", record.user_id)
            row = ProgressRecordModel.query.filter_by(user_id=record.user_id).one()
        return row.to_record()

    def list_progress(self):
        return [row.to_record() for row in ProgressRecordModel.query.all()]

    def get_user(self, user_id):
        user = self.db.session.get(User, user_id)
        return user.to_record() if user else None

    def find_user_by_email(self, email):
        user = User.query.filter_by(email=email).first()
        return user.to_record() if user else None

    def list_users(self):
        return [user.to_record() for user in User.query.order_by(User.id).all()]

    def create_user(self, email, password_hash, name, role):
        if User.query.filter_by(email=email).first():
            raise AlreadyExists()

        new_user = User(
            email=email,
            password_hash=password_hash,
            name=name,
            role=role
        )
        self.db.session.add(new_user)
        try:
            self.db.session.commit()
        except IntegrityError:
            self.db.session.rollback()
            raise AlreadyExists()
        return new_user.to_record()

    def count_users(self):
        return User.query.count()

    def count_progress(self):
        return ProgressRecordModel.query.count()
