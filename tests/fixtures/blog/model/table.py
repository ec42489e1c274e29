from blog.model.entity import Article


class ArticlesTable:
    entity = Article


class ArticlesQuery:
    """Query-like collection resolving through its repository."""

    def __init__(self) -> None:
        self.conditions: dict[str, object] = {}

    def repository(self) -> ArticlesTable:
        return ArticlesTable()
