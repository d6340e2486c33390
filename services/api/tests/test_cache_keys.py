"""Tests for cache key construction."""

import pytest

from app.schemas import SchoolDto, StudentDto
from app.services.cache_keys import CacheOp, compute_cache_key


def _ana(**overrides) -> StudentDto:
    fields = {
        "first_name": "Ana",
        "last_name": "Diaz",
        "gpa": 3.8,
        "school": SchoolDto(name="Lincoln High", address="1 Main St"),
    }
    fields.update(overrides)
    return StudentDto(**fields)


def test_id_key_format():
    assert compute_cache_key(CacheOp.GET, 42) == "student:get:id:42"


def test_same_id_different_operations_do_not_collide():
    keys = {compute_cache_key(op, 7) for op in CacheOp}
    assert len(keys) == len(CacheOp)
    assert compute_cache_key(CacheOp.GET, 7) != compute_cache_key(CacheOp.DELETE, 7)


def test_equal_dtos_produce_identical_keys():
    assert compute_cache_key(CacheOp.CREATE, _ana()) == compute_cache_key(CacheOp.CREATE, _ana())


def test_dto_built_from_aliases_matches_dto_built_from_names():
    by_alias = StudentDto.model_validate(
        {
            "firstName": "Ana",
            "lastName": "Diaz",
            "gpa": 3.8,
            "school": {"name": "Lincoln High", "address": "1 Main St"},
        }
    )
    assert compute_cache_key(CacheOp.CREATE, by_alias) == compute_cache_key(CacheOp.CREATE, _ana())


def test_different_operands_produce_different_keys():
    base = compute_cache_key(CacheOp.CREATE, _ana())
    assert compute_cache_key(CacheOp.CREATE, _ana(gpa=3.9)) != base
    assert compute_cache_key(CacheOp.CREATE, _ana(first_name="ana")) != base
    assert (
        compute_cache_key(CacheOp.CREATE, _ana(school=SchoolDto(name="Lincoln High", address="2 Main St")))
        != base
    )


def test_create_and_update_of_same_body_do_not_collide():
    body = _ana(id=3)
    assert compute_cache_key(CacheOp.CREATE, body) != compute_cache_key(CacheOp.UPDATE, body)


def test_dict_operand_key_ignores_insertion_order():
    a = compute_cache_key(CacheOp.UPDATE, {"id": 1, "gpa": 3.5})
    b = compute_cache_key(CacheOp.UPDATE, {"gpa": 3.5, "id": 1})
    assert a == b
    assert a.startswith("student:update:sha256:")


def test_bool_operand_rejected():
    with pytest.raises(TypeError):
        compute_cache_key(CacheOp.GET, True)
