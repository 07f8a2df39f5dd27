"""Most-recently-used route history, kept per user in memory."""

from typing import Optional

from pydantic import BaseModel, Field

from navbud.models import Place

MAX_HISTORY_ITEMS = 10


class HistoryItem(BaseModel):
    key: str
    start_text: str
    end_text: str
    start_place: Place
    end_place: Place


def history_key(start_text: str, end_text: str) -> str:
    return f"{start_text}||{end_text}"


class RouteHistory(BaseModel):
    """Newest first. Re-adding a known start/end pair moves it to the front."""
    max_items: int = Field(default=MAX_HISTORY_ITEMS, gt=0)
    entries: list[HistoryItem] = Field(default_factory=list)

    def add(self, start_text: str, end_text: str, start_place: Place, end_place: Place) -> HistoryItem:
        key = history_key(start_text, end_text)
        existing = next((i for i, item in enumerate(self.entries) if item.key == key), None)
        if existing is not None:
            item = self.entries.pop(existing)
        else:
            item = HistoryItem(
                key=key,
                start_text=start_text,
                end_text=end_text,
                start_place=start_place,
                end_place=end_place,
            )
        self.entries.insert(0, item)
        del self.entries[self.max_items:]
        return item

    def get(self, number: int) -> HistoryItem:
        """1-based lookup, as shown by list_history."""
        if number < 1 or number > len(self.entries):
            raise ValueError(
                f"Invalid selection {number}. Choose a number between 1 and {len(self.entries)}."
            )
        return self.entries[number - 1]

    def items(self) -> list[HistoryItem]:
        return list(self.entries)

    def clear(self) -> None:
        self.entries = []

    def __len__(self) -> int:
        return len(self.entries)


class HistoryStore(BaseModel):
    """One RouteHistory per user id. Anonymous users (None) keep no history."""
    max_items: int = Field(default=MAX_HISTORY_ITEMS, gt=0)
    users: dict[str, RouteHistory] = Field(default_factory=dict)

    def for_user(self, user_id: Optional[str]) -> Optional[RouteHistory]:
        if not user_id:
            return None
        if user_id not in self.users:
            self.users[user_id] = RouteHistory(max_items=self.max_items)
        return self.users[user_id]

    def add(
        self, user_id: Optional[str],
        start_text: str, end_text: str, start_place: Place, end_place: Place,
    ) -> Optional[HistoryItem]:
        history = self.for_user(user_id)
        if history is None:
            return None
        return history.add(start_text, end_text, start_place, end_place)

    def items(self, user_id: Optional[str]) -> list[HistoryItem]:
        history = self.for_user(user_id)
        return history.items() if history is not None else []
