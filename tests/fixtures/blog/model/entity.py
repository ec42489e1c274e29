from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    title: Mapped[str] = mapped_column(String(200), default="")


class Comment:
    def __init__(self, author_id: int | None = None) -> None:
        self.author_id = author_id


class Tag:
    """No policy exists for tags."""


class Broken:
    """Its policy module fails to import."""
