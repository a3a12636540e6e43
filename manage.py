import click
from flask import current_app

from classes.records import ROLE_ADMIN, ROLE_STAFF
from models import db
from storage.factory import get_store
from storage.json_store import JsonFileStore
from utils.errors import AlreadyExists
from utils.helpers import hash_password

DEFAULT_USERS = [
    {"email": "admin@maytech.com", "password": "admin123", "name": "Admin User", "role": ROLE_ADMIN},
    {"email": "staff@maytech.com", "password": "staff123", "name": "Demo Staff", "role": ROLE_STAFF},
]


def seed_default_users(store, users=DEFAULT_USERS):
    """Create the bootstrap accounts; emails already present are skipped."""
    created, skipped = [], []
    for data in users:
        if store.find_user_by_email(data["email"]):
            skipped.append(data["email"])
            continue
        store.create_user(
            email=data["email"],
            password_hash=hash_password(data["password"]),
            name=data["name"],
            role=data["role"]
        )
        created.append(data["email"])
    return created, skipped


def import_legacy_data(source, target):
    """Copy users and progress from one store into another.

    Users are matched by email; progress follows its owner to the new id.
    Nothing already present in ``target`` is overwritten.
    """
    stats = {"users_migrated": 0, "users_skipped": 0, "progress_migrated": 0, "progress_skipped": 0}
    new_ids = {}

    for user in source.list_users():
        existing = target.find_user_by_email(user.email)
        if existing:
            new_ids[user.id] = existing.id
            stats["users_skipped"] += 1
            continue
        # Hashes are copied as-is.
        created = target.create_user(user.email, user.password_hash, user.name, user.role)
        new_ids[user.id] = created.id
        stats["users_migrated"] += 1

    for record in source.list_progress():
        new_id = new_ids.get(record.user_id)
        if new_id is None or target.get_progress(new_id) is not None:
            stats["progress_skipped"] += 1
            continue
        migrated = record.copy()
        migrated.user_id = new_id
        target.upsert_progress(migrated)
        stats["progress_migrated"] += 1

    return stats


def _create_tables():
    if current_app.config.get("STORAGE_BACKEND") == "sqlalchemy":
        db.create_all()


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create tables and the default admin and staff accounts."""
        _create_tables()
        store = get_store()
        created, skipped = seed_default_users(store)
        for email in created:
            click.echo(f"Created user: {email}")
        for email in skipped:
            click.echo(f"User already exists: {email}")
        click.echo(f"Total users: {store.count_users()}")

    @app.cli.command("import-json")
    @click.argument("data_dir", type=click.Path(exists=True, file_okay=False))
    def import_json(data_dir):
        """Migrate users.json and progress.json from DATA_DIR."""
        _create_tables()
        store = get_store()
        stats = import_legacy_data(JsonFileStore(data_dir), store)
        click.echo(f"Users: {stats['users_migrated']} migrated, {stats['users_skipped']} skipped")
        click.echo(f"Progress: {stats['progress_migrated']} migrated, {stats['progress_skipped']} skipped")
        click.echo(f"Totals: {store.count_users()} users, {store.count_progress()} progress records")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("name")
    @click.password_option()
    def create_admin(email, name, password):
        """Create an admin account."""
        _create_tables()
        try:
            user = get_store().create_user(
                email=email.strip(),
                password_hash=hash_password(password),
                name=name,
                role=ROLE_ADMIN
            )
        except AlreadyExists:
            raise click.ClickException(f"User already exists: {email}")
        click.echo(f"Created admin {user.email} (id {user.id})")
