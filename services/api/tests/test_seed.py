from scripts.seed import STUDENTS, seed_students


async def test_seed_is_idempotent(db):
    first = await seed_students()
    second = await seed_students()

    assert first == {"added": len(STUDENTS), "existing": 0, "failed": 0}
    assert second == {"added": 0, "existing": len(STUDENTS), "failed": 0}
