from ..extensions import db
from .base import TimestampMixin

class SearchHistory(db.Model, TimestampMixin):
    __tablename__ = "search_history"
    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey("company_groups.id"), nullable=False, index=True)
    searcher_id = db.Column(db.Integer, db.ForeignKey("company_users.id"), nullable=False)
    search_title = db.Column(db.String(200), nullable=False, default="")
    search_conditions = db.Column(db.JSON, nullable=False)
    is_saved = db.Column(db.Boolean, nullable=False, default=False, index=True)
    searched_at = db.Column(db.DateTime, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<SearchHistory id={self.id} title={self.search_title!r} saved={self.is_saved}>"
