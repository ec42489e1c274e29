from typing import Any


class ArticlesTablePolicy:
    def scope_index(self, identity: Any, query: Any) -> Any:
        query.conditions["user_id"] = identity["id"]
        return query
