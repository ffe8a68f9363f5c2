from sqlalchemy.orm import declared_attr
from ..extensions import db

class GroupScopedMixin:
    @declared_attr
    def company_group_id(cls):
        return db.Column(db.Integer, db.ForeignKey("company_groups.id"), nullable=False, index=True)

class TimestampMixin:
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())
