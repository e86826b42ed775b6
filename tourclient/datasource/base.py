"""
Base data source interface.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from tourclient.services.client import ServiceClient
from tourclient.services.retry import RetryExecutor

T = TypeVar("T", bound=BaseModel)


class BaseDataSource(ABC, Generic[T]):
    """
    Abstract base class for all data sources.

    All data sources should:
    - Use ServiceClient for HTTP requests, one attempt per call
    - Wrap each logical call in RetryExecutor
    - Return Pydantic models
    - Raise classified ServiceError subclasses, never partial results
    """

    def __init__(self, client: ServiceClient, executor: RetryExecutor | None = None):
        self.client = client
        self.executor = executor or RetryExecutor(name=client.service_id)

    @property
    @abstractmethod
    def service_id(self) -> str:
        """Unique identifier for this data source."""
        ...

    @abstractmethod
    async def fetch(self) -> list[T]:
        """Fetch the default listing from the source."""
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the data source is properly configured."""
        ...

    async def close(self) -> None:
        await self.client.close()
