# modules/databases/models.py
from sqlalchemy import Column, Integer, String, Text, JSON, ForeignKey

from database.base import Base, RecordMixin
from modules.databases.permissions import DatabasePermissions


class Database(RecordMixin, Base):
    """User-defined database: a named group of tables with its own permission sets"""
    __tablename__ = "custom_databases"

    name = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(Integer, index=True, nullable=False)

    # one ordered id list per capability
    view_user_ids = Column(JSON, default=list, nullable=False)
    edit_user_ids = Column(JSON, default=list, nullable=False)
    delete_user_ids = Column(JSON, default=list, nullable=False)

    @property
    def permissions(self) -> DatabasePermissions:
        return DatabasePermissions(
            view=self.view_user_ids or [],
            edit=self.edit_user_ids or [],
            delete=self.delete_user_ids or [],
        )

    @staticmethod
    def permission_columns(perms: DatabasePermissions) -> dict:
        return {
            "view_user_ids": list(perms.view),
            "edit_user_ids": list(perms.edit),
            "delete_user_ids": list(perms.delete),
        }


class DatabaseTable(RecordMixin, Base):
    __tablename__ = "custom_database_tables"

    # the cascade delete removes tables explicitly, ON DELETE is not relied on
    database_id = Column(Integer, ForeignKey("custom_databases.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    # [{"name": ..., "type": ...}, ...]
    columns = Column(JSON, default=list, nullable=False)


class DatabaseRow(RecordMixin, Base):
    __tablename__ = "custom_database_rows"

    table_id = Column(Integer, ForeignKey("custom_database_tables.id"), index=True, nullable=False)
    # column name -> value
    data = Column(JSON, default=dict, nullable=False)
