"""Responses returned for queries."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ResponseKind(Enum):
    """The kind of query a response answers."""

    INSERT = "insert"
    GET = "get"
    DELETE = "delete"
    UPDATE = "update"


@dataclass(frozen=True)
class ResponseAction:
    """The payload of a response.

    Get responses carry a list of rows or None; the others carry a success flag.
    """

    kind: ResponseKind
    value: Optional[Any]

    def __post_init__(self) -> None:
        if self.kind is ResponseKind.GET:
            if self.value is not None and not isinstance(self.value, list):
                raise TypeError("a get response holds a list of rows or None")
        elif not isinstance(self.value, bool):
            raise TypeError(f"a {self.kind.value} response holds a bool")


@dataclass
class Response:
    """A response to one query of a bundle."""

    id: uuid.UUID
    index: int
    data: ResponseAction
    end: bool = False

    def mark_end(self) -> None:
        """Mark this response as the last one for its bundle."""
        self.end = True


@dataclass
class Responses:
    """The responses to a bundle of queries."""

    responses: list[Response] = field(default_factory=list)

    def add(self, response: Response) -> None:
        """Append a response."""
        self.responses.append(response)