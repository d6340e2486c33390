"""Student service: cache-aside in front of the student store.

Reads (read-through):
1. Compute key from (get, id) and check Redis -> hit returns without the DB
2. Miss -> read the DB; cache the result only when the read succeeded

Writes (write-through):
1. Compute key from (operation, input operand) and check Redis -> a hit means
   this exact write already ran, return its recorded result
2. Miss -> perform the write; cache the result under the same key on success

Successful writes also refresh the read entry of the affected id (add/update
overwrite it, delete evicts it), so a following read sees the write. A
recorded add only counts while the read entry of its id is still there, so
re-adding a deleted student inserts it again.
Entries are never invalidated otherwise; they expire after the configured TTL.
"""

import logging

from app.schemas import StudentDto
from app.services.cache_keys import CacheOp, compute_cache_key
from app.settings import get_settings
from app.stores.postgres import get_session
from app.stores.redis import cache_evict, cache_get_as, cache_set_as
from app.stores.results import StoreResult
from app.stores.students import StudentRepository

logger = logging.getLogger("uvicorn.error")


async def get_student(student_id: int) -> StoreResult[StudentDto]:
    """Get a student by id, from cache when possible."""
    key = compute_cache_key(CacheOp.GET, student_id)
    cached = await cache_get_as(key, StudentDto)
    if cached is not None:
        logger.debug(f"Student {student_id} served from cache")
        return StoreResult.ok(cached)

    async with get_session() as session:
        result = await StudentRepository(session).get_by_id(student_id)
        found = result.map(StudentDto.from_model)

    if found.is_ok:
        await cache_set_as(key, found.value, get_settings().cache_ttl_seconds)
    return found


async def add_student(student: StudentDto) -> StoreResult[StudentDto]:
    """Add a student, deduplicated by natural key.

    Re-adding an identical student returns the stored record.
    """
    key = compute_cache_key(CacheOp.CREATE, student)
    cached = await cache_get_as(key, StudentDto)
    # The read entry is written with the create entry; only a delete removes it early.
    if cached is not None and await cache_get_as(compute_cache_key(CacheOp.GET, cached.id), StudentDto) is not None:
        logger.debug(f"Add of student {cached.id} already recorded in cache")
        return StoreResult.ok(cached)

    async with get_session() as session:
        result = await StudentRepository(session).add(student.to_model())
        added = result.map(StudentDto.from_model)

    if added.is_ok:
        await _remember_write(key, added.value)
    else:
        logger.error(f"Cannot add student {student.first_name} {student.last_name}: {added.outcome.value}")
    return added


async def update_student(student: StudentDto) -> StoreResult[StudentDto]:
    """Replace the stored student that has `student.id`."""
    key = compute_cache_key(CacheOp.UPDATE, student)
    cached = await cache_get_as(key, StudentDto)
    if cached is not None:
        logger.debug(f"Update of student {cached.id} already recorded in cache")
        return StoreResult.ok(cached)

    async with get_session() as session:
        result = await StudentRepository(session).update(student.to_model())
        updated = result.map(StudentDto.from_model)

    if updated.is_ok:
        await _remember_write(key, updated.value)
    else:
        logger.error(f"Cannot change the student with student id: {student.id}: {updated.outcome.value}")
    return updated


async def delete_student(student_id: int) -> StoreResult[bool]:
    """Delete a student by id.

    Returns:
        ok(True) when removed (or already recorded as removed), ok(False)
        when there is no such student, backend_error on failure.
    """
    ttl = get_settings().cache_ttl_seconds
    key = compute_cache_key(CacheOp.DELETE, student_id)
    cached = await cache_get_as(key, bool)
    if cached is not None:
        return StoreResult.ok(cached)

    async with get_session() as session:
        deleted = await StudentRepository(session).delete_by_id(student_id)

    if deleted.is_ok and deleted.value:
        await cache_set_as(key, True, ttl)
        await cache_evict(compute_cache_key(CacheOp.GET, student_id))
    elif not deleted.is_ok:
        logger.error(f"Cannot remove the student with the id: {student_id}: {deleted.outcome.value}")
    return deleted


async def _remember_write(key: str, student: StudentDto) -> None:
    ttl = get_settings().cache_ttl_seconds
    await cache_set_as(key, student, ttl)
    await cache_set_as(compute_cache_key(CacheOp.GET, student.id), student, ttl)
