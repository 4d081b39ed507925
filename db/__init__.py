from db.database import get_engine, get_session, init_db
from db.models import Article, ArticleSubmission, Section, Writer

__all__ = ["get_engine", "get_session", "init_db", "Article", "ArticleSubmission", "Section", "Writer"]
