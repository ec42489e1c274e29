from typing import Any


class CommentPolicy:
    def can_edit(self, identity: Any, comment: Any) -> bool:
        return comment.author_id == identity.get("id")
