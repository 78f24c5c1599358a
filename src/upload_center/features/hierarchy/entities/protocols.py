"""Protocol interfaces for hierarchy operations."""

from abc import abstractmethod
from typing import List, Protocol, runtime_checkable

from .application import Application
from .location import Location


@runtime_checkable
class HierarchyApi(Protocol):
    """Backend operations on Applications and Locations."""

    @abstractmethod
    async def list_applications(self) -> List[Application]:
        ...

    @abstractmethod
    async def create_application(self, name: str) -> Application:
        ...

    @abstractmethod
    async def list_locations(self, application_id: int) -> List[Location]:
        ...

    @abstractmethod
    async def create_location(self, application_id: int, location_name: str, path: str) -> Location:
        ...
