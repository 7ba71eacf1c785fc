"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Request/response model serialized with camelCase keys.

    Fields are populated by their Python name inside the application and by
    their camelCase alias when parsed from a client payload.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
