"""SQLAlchemy Core table definitions.

Column names match the record keys produced by the domain models'
``to_record``. Unique constraints back the services' uniqueness guards.
Foreign keys are deliberately absent: task references to users and
projects are weak and may dangle after deletes.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)

from taskhub.application.ports.entity_store import Collection

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("username", String(50), nullable=False),
    Column("email", String(255), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(16), nullable=False, server_default="user"),
    Column("created_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("username", name="uq_users_username"),
    UniqueConstraint("email", name="uq_users_email"),
)

projects = Table(
    "projects",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("title", name="uq_projects_title"),
)

tasks = Table(
    "tasks",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("heading", String(200), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("status", String(16), nullable=False, server_default="TO_DO"),
    Column("created_by", Uuid, nullable=False),
    Column("assigned_to", Uuid, nullable=True),
    Column("project_id", Uuid, nullable=True),
    Column("project_label", String(255), nullable=True),
    Column("file_path", String(512), nullable=True),
    Column("created_date", DateTime(timezone=True), nullable=False),
    Column("in_progress_date", DateTime(timezone=True), nullable=True),
    Column("completion_date", DateTime(timezone=True), nullable=True),
    Index("ix_tasks_created_by", "created_by"),
    Index("ix_tasks_assigned_to", "assigned_to"),
    Index("ix_tasks_project_id", "project_id"),
)

TABLES: dict[Collection, Table] = {
    Collection.USERS: users,
    Collection.PROJECTS: projects,
    Collection.TASKS: tasks,
}
