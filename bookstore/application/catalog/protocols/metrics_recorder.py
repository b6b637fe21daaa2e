from typing import Protocol


class MetricsRecorderProtocol(Protocol):
    def record_book_created(self, genre: str) -> None: ...

    def record_book_viewed(self, genre: str | None) -> None: ...

    def record_inventory_reserved(self, quantity: int) -> None: ...
