from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin
from werkzeug.security import generate_password_hash, check_password_hash

class CompanyGroup(db.Model, TimestampMixin):
    __tablename__ = "company_groups"
    id = db.Column(db.Integer, primary_key=True)
    company_name = db.Column(db.String(200), nullable=False)
    group_name = db.Column(db.String(120), nullable=False)

    def __repr__(self) -> str:
        return f"<CompanyGroup id={self.id} group_name={self.group_name!r}>"


class CompanyUser(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "company_users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    full_name = db.Column(db.String(120))
    password_hash = db.Column(db.String(255), nullable=False)

    permissions = db.relationship("CompanyUserGroupPermission", backref="company_user", lazy="selectin")

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    def group_ids(self):
        return {p.company_group_id for p in self.permissions}

    def can_access(self, company_group_id) -> bool:
        return company_group_id in self.group_ids()


class CompanyUserGroupPermission(db.Model, TimestampMixin):
    __tablename__ = "company_user_group_permissions"
    id = db.Column(db.Integer, primary_key=True)
    company_user_id = db.Column(db.Integer, db.ForeignKey("company_users.id"), nullable=False, index=True)
    company_group_id = db.Column(db.Integer, db.ForeignKey("company_groups.id"), nullable=False, index=True)
    permission_level = db.Column(db.String(20), default="member")  # admin/member

    group = db.relationship("CompanyGroup", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("company_user_id", "company_group_id", name="uq_permission_user_group"),
    )
