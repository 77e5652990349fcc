"""
Base component abstract class.

Evidence components (semantic classifier, narrative adapter) inherit from
this class so the orchestrator can treat them uniformly.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Dict, Any
from pydantic import BaseModel

# Generic type variables for request/response
TRequest = TypeVar("TRequest", bound=BaseModel)
TResponse = TypeVar("TResponse", bound=BaseModel)


class BaseComponent(ABC, Generic[TRequest, TResponse]):
    """
    Abstract base class for all service components.

    Each component must implement:
    - process(): Main processing logic
    - health_check(): Health status check
    - component_name: Unique identifier

    Usage:
        class MyService(BaseComponent[MyRequest, MyResponse]):
            async def process(self, request: MyRequest) -> MyResponse:
                ...
    """

    @abstractmethod
    async def process(self, request: TRequest) -> TResponse:
        """
        Process a request and return a response.

        Evidence components never raise for provider failures: they return
        a degraded response instead.

        Args:
            request: Pydantic model containing input data

        Returns:
            Pydantic model containing output data
        """
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """
        Check component health status.

        Returns:
            Dict with at least:
            - status: "healthy" | "unhealthy" | "degraded"
            - component: Component name
        """
        pass

    @property
    @abstractmethod
    def component_name(self) -> str:
        """
        Return unique component identifier.

        Used for logging and for the `source` field of evidence items.
        """
        pass

    async def __call__(self, request: TRequest) -> TResponse:
        """Allow component to be called directly: response = await component(request)."""
        return await self.process(request)
