from app.models import School, Student
from app.schemas import SchoolDto, StudentDto


def test_student_dto_accepts_camel_case_and_field_names():
    by_alias = StudentDto.model_validate({"firstName": "Ana", "lastName": "Diaz", "gpa": 3.8, "schoolId": 2})
    by_name = StudentDto(first_name="Ana", last_name="Diaz", gpa=3.8, school_id=2)

    assert by_alias == by_name
    assert by_alias.id == 0
    assert by_alias.model_dump(by_alias=True)["firstName"] == "Ana"


def test_from_model_embeds_school():
    school = School(id=2, name="Lincoln High", address="1 Main St")
    student = Student(id=7, first_name="Ana", last_name="Diaz", gpa=3.8, age=16, school_id=2, school=school)

    dto = StudentDto.from_model(student)

    assert dto == StudentDto(
        id=7,
        first_name="Ana",
        last_name="Diaz",
        gpa=3.8,
        age=16,
        school_id=2,
        school=SchoolDto(id=2, name="Lincoln High", address="1 Main St"),
    )


def test_from_model_without_school():
    student = Student(id=3, first_name="Eli", last_name="Moreau", gpa=3.4, school=None)

    dto = StudentDto.from_model(student)

    assert dto.school is None
    assert dto.school_id is None


def test_to_model_leaves_id_unassigned_for_new_students():
    dto = StudentDto(first_name="Ana", last_name="Diaz", gpa=3.8, school=SchoolDto(name="Lincoln High", address="1 Main St"))

    student = dto.to_model()

    assert student.id is None
    assert student.school_id is None
    assert student.school.name == "Lincoln High"
    assert student.school.id is None


def test_to_model_takes_school_id_from_embedded_school():
    dto = StudentDto(
        id=4,
        first_name="Ana",
        last_name="Diaz",
        gpa=3.8,
        school=SchoolDto(id=9, name="Lincoln High", address="1 Main St"),
    )

    student = dto.to_model()

    assert student.id == 4
    assert student.school_id == 9


def test_round_trip_through_model_preserves_dto():
    dto = StudentDto(
        id=4,
        first_name="Ana",
        last_name="Diaz",
        gpa=3.8,
        age=16,
        school_id=9,
        school=SchoolDto(id=9, name="Lincoln High", address="1 Main St"),
    )

    assert StudentDto.from_model(dto.to_model()) == dto
