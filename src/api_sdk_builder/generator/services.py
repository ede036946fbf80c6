"""Groups endpoints into services and settles their method names."""

import logging

from pydantic import BaseModel

from api_sdk_builder.generator.naming import method_words, name_key, split_words
from api_sdk_builder.parser.base import EndpointDescriptor, Param

logger = logging.getLogger(__name__)


class Operation(BaseModel):
    """One generated method: the endpoint plus its resolved name words."""

    endpoint: EndpointDescriptor
    words: list[str]

    @property
    def http_method(self) -> str:
        return self.endpoint.method.upper()

    @property
    def path(self) -> str:
        return self.endpoint.path

    @property
    def path_params(self) -> list[Param]:
        return self.endpoint.path_params

    @property
    def has_query(self) -> bool:
        return bool(self.endpoint.query_params)

    @property
    def has_body(self) -> bool:
        return self.endpoint.has_request_body


class ServiceGroup(BaseModel):
    """Endpoints sharing a first tag, rendered as one service class."""

    key: str  # raw tag as it appeared in the input
    words: list[str]
    operations: list[Operation]


def group_endpoints(endpoints: list[EndpointDescriptor]) -> list[ServiceGroup]:
    """Partition endpoints by first tag.

    Groups keep the order their key was first seen; endpoints keep input
    order within a group.
    """
    buckets: dict[str, list[EndpointDescriptor]] = {}
    for ep in endpoints:
        buckets.setdefault(ep.service_key, []).append(ep)

    groups = []
    taken: set[str] = set()
    for key, members in buckets.items():
        words = split_words(key) or ["service"]
        words = _unique(words, taken)
        groups.append(ServiceGroup(key=key, words=words, operations=_operations(members)))

    logger.debug("Grouped %d endpoints into %d services", len(endpoints), len(groups))
    return groups


def _operations(endpoints: list[EndpointDescriptor]) -> list[Operation]:
    taken: set[str] = set()
    ops = []
    for ep in endpoints:
        words = method_words(ep.method, ep.path)
        if name_key(words) in taken:
            by_words = _by_params(ep)
            if by_words:
                words = words + by_words
            resolved = _unique(words, taken)
            logger.debug(
                "Method name for %s %s collides, renamed to %s",
                ep.method.upper(), ep.path, "".join(resolved),
            )
            words = resolved
        taken.add(name_key(words))
        ops.append(Operation(endpoint=ep, words=words))
    return ops


def _by_params(ep: EndpointDescriptor) -> list[str]:
    """['by', 'id', 'and', 'order', 'id'] for path params id and order_id."""
    words: list[str] = []
    for param in ep.path_params:
        words.extend(["and"] if words else ["by"])
        words.extend(split_words(param.name))
    return words


def _unique(words: list[str], taken: set[str]) -> list[str]:
    """Append a numeric suffix until the name is free, then claim it."""
    candidate = words
    n = 2
    while name_key(candidate) in taken:
        candidate = words + [str(n)]
        n += 1
    taken.add(name_key(candidate))
    return candidate
