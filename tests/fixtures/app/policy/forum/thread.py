from typing import Any


class ThreadPolicy:
    origin = "app"

    def can_view(self, identity: Any, thread: Any) -> bool:
        return identity.get("role") == "member"
