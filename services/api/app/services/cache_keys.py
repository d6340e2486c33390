"""Cache key construction for the student cache-aside layer.

Key = student:{operation}:{operand}

- Integer operands (ids): id:{n}
- Structured operands (DTOs, dicts): sha256:{hex of canonical JSON}

The operation tag is mandatory: a read and a delete of the same id must not
share an entry.
"""

from enum import Enum
import hashlib
import json
from typing import Any

from pydantic import BaseModel

from app.stores.redis import PREFIX_STUDENT


class CacheOp(str, Enum):
    """Operation kinds that own separate cache entries."""

    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def compute_cache_key(op: CacheOp, operand: int | BaseModel | dict[str, Any]) -> str:
    """Compute the cache key for an operation on an operand.

    Args:
        op: Operation kind.
        operand: The input that identifies the result (id or request body).

    Returns:
        Deterministic key string.

    Example:
        >>> compute_cache_key(CacheOp.GET, 42)
        'student:get:id:42'
    """
    return f"{PREFIX_STUDENT}{op.value}:{_serialize_operand(operand)}"


def _serialize_operand(operand: int | BaseModel | dict[str, Any]) -> str:
    if isinstance(operand, bool):
        raise TypeError("bool is not a valid cache operand")
    if isinstance(operand, int):
        return f"id:{operand}"
    if isinstance(operand, BaseModel):
        operand = operand.model_dump(mode="json")
    if isinstance(operand, dict):
        return f"sha256:{_canonical_digest(operand)}"
    raise TypeError(f"Unsupported cache operand: {type(operand).__name__}")


def _canonical_digest(payload: dict[str, Any]) -> str:
    """SHA-256 of the payload as sorted, compact JSON."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode()).hexdigest()
