from .database import Base, db, db_context, filter_by, select


__all__ = ["Base", "db", "db_context", "filter_by", "select"]
