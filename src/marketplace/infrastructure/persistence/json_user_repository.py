"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

import json
from pathlib import Path

from marketplace.domain.model.user import User
from marketplace.domain.repository.user_repository import UserRepository


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_identity_id(self, identity_id: str) -> User | None:
        for user in self.list_all():
            if user.identity_id == identity_id:
                return user
        return None

    def list_all(self) -> list[User]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return [
            User(
                id=item["id"],
                identity_id=item["identity_id"],
                email=item["email"],
                name=item.get("name", ""),
            )
            for item in raw
        ]

    def save(self, user: User) -> None:
        users = {u.id: u for u in self.list_all()}
        users[user.id] = user
        raw = [
            {"id": u.id, "identity_id": u.identity_id, "email": u.email, "name": u.name}
            for u in users.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
