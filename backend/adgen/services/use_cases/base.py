"""
Base use case class.

Each use case encapsulates one business operation and knows nothing about
HTTP. Routes translate requests into use case calls and domain errors into
HTTP responses.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class UseCase(ABC, Generic[RequestT, ResponseT]):
    """
    Base use case abstract class.

    Type Parameters:
        RequestT: Type of the input request object
        ResponseT: Type of the output response object
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """
        Execute the use case and return a response.

        Raises:
            Domain exceptions (AdGenError subclasses, ValueError). HTTP
            exceptions are the route's responsibility.
        """
        pass
