from typing import Protocol

from ..schemas import JobPosting

class Provider(Protocol):
    name: str

    async def fetch_page(self, *, offset: int, limit: int) -> list[JobPosting]:
        ...

    async def aclose(self) -> None:
        ...
