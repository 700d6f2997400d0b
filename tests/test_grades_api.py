import pytest

from models.grades import Grade
from conftest import LETTER_BOUNDARIES


def _calc_payload(setup, subject, **extra):
    return {
        "student_id": setup.student.id,
        "class_id": setup.klass.id,
        "subject_id": subject.id,
        "academic_year_id": setup.year.id,
        "term_type": "TERM_1",
        **extra,
    }


def test_calculate_grade_blends_and_resolves_letter(client, setup, teacher_headers):
    setup.add_scheme(LETTER_BOUNDARIES)
    setup.add_graded_submission(setup.student, setup.math, 80)
    setup.add_graded_submission(setup.student, setup.math, 90)
    setup.add_exam_result(setup.student, setup.math, 70)

    res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    grade = body["data"]
    assert grade["assignment_score"] == pytest.approx(85.0)
    assert grade["exam_score"] == pytest.approx(70.0)
    assert grade["total_score"] == pytest.approx(76.0)
    assert grade["percentage"] == pytest.approx(76.0)
    assert grade["letter_grade"] == "C"
    assert grade["grade_point"] == 2.0
    assert grade["is_passed"] is True
    assert grade["subject"]["name"] == "Mathematics"


def test_recalculation_keeps_single_row(client, db, setup, teacher_headers):
    setup.add_scheme(LETTER_BOUNDARIES)
    setup.add_exam_result(setup.student, setup.math, 60)

    for _ in range(3):
        res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers)
        assert res.status_code == 201

    setup.add_exam_result(setup.student, setup.math, 100)
    res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers)

    rows = db.query(Grade).filter(Grade.student_id == setup.student.id).all()
    assert len(rows) == 1
    # 시험 평균 80 → 0.6 * 80
    assert res.json()["data"]["total_score"] == pytest.approx(48.0)


def test_no_default_scheme_leaves_grade_unresolved(client, setup, teacher_headers):
    setup.add_exam_result(setup.student, setup.math, 95)

    res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers)

    grade = res.json()["data"]
    assert res.status_code == 201
    assert grade["letter_grade"] is None
    assert grade["grade_point"] is None
    assert grade["is_passed"] is False
    assert grade["scheme_id"] is None


def test_explicit_missing_scheme_is_404(client, setup, teacher_headers):
    res = client.post(
        "/v1/grades/calculate", json=_calc_payload(setup, setup.math, scheme_id=999), headers=teacher_headers
    )
    assert res.status_code == 404
    assert res.json()["error"] == "NOT_FOUND"


def test_unknown_student_is_404(client, setup, teacher_headers):
    payload = _calc_payload(setup, setup.math)
    payload["student_id"] = 999
    res = client.post("/v1/grades/calculate", json=payload, headers=teacher_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Student not found"


def test_locked_grade_refuses_recalculation_unless_forced(client, setup, teacher_headers):
    setup.add_exam_result(setup.student, setup.math, 50)
    grade_id = client.post(
        "/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers
    ).json()["data"]["id"]

    res = client.patch(f"/v1/grades/{grade_id}/lock", json={"is_locked": True}, headers=teacher_headers)
    assert res.json()["data"]["is_locked"] is True

    res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "GRADE_LOCKED"

    res = client.post(
        "/v1/grades/calculate", json=_calc_payload(setup, setup.math, force=True), headers=teacher_headers
    )
    assert res.status_code == 201
    assert res.json()["data"]["is_locked"] is True


def test_remarks_survive_recalculation(client, setup, teacher_headers):
    grade_id = client.post(
        "/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers
    ).json()["data"]["id"]
    client.patch(f"/v1/grades/{grade_id}/remarks", json={"remarks": "Improving"}, headers=teacher_headers)

    res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=teacher_headers)
    assert res.json()["data"]["remarks"] == "Improving"


def test_calculate_all_covers_every_class_subject(client, setup, teacher_headers):
    setup.add_exam_result(setup.student, setup.math, 80)
    setup.add_exam_result(setup.student, setup.english, 60)

    res = client.post(
        f"/v1/students/{setup.student.id}/grades/calculate-all",
        json={"class_id": setup.klass.id, "academic_year_id": setup.year.id, "term_type": "TERM_1"},
        headers=teacher_headers,
    )

    assert res.status_code == 201
    grades = res.json()["data"]
    assert len(grades) == 2
    totals = {g["subject_id"]: g["total_score"] for g in grades}
    assert totals[setup.math.id] == pytest.approx(48.0)
    assert totals[setup.english.id] == pytest.approx(36.0)


def test_student_and_class_grade_listing(client, setup, teacher_headers, student_headers):
    setup.add_exam_result(setup.student, setup.math, 40)
    setup.add_exam_result(setup.other_student, setup.math, 90)
    for student in (setup.student, setup.other_student):
        payload = _calc_payload(setup, setup.math)
        payload["student_id"] = student.id
        client.post("/v1/grades/calculate", json=payload, headers=teacher_headers)

    res = client.get(f"/v1/students/{setup.student.id}/grades", headers=student_headers)
    assert [g["student_id"] for g in res.json()["data"]] == [setup.student.id]

    res = client.get(
        f"/v1/classes/{setup.klass.id}/grades",
        params={"academic_year_id": setup.year.id, "term_type": "TERM_1"},
        headers=student_headers,
    )
    # 총점 내림차순
    assert [g["student_id"] for g in res.json()["data"]] == [setup.other_student.id, setup.student.id]


def test_missing_grade_is_404(client, setup, student_headers):
    res = client.get("/v1/grades/999", headers=student_headers)
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Grade not found", "error": "NOT_FOUND"}


def test_calculation_requires_token(client, setup):
    res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math))
    assert res.status_code == 401
    assert res.json()["error"] == "UNAUTHORIZED"


def test_students_cannot_calculate(client, setup, student_headers):
    res = client.post("/v1/grades/calculate", json=_calc_payload(setup, setup.math), headers=student_headers)
    assert res.status_code == 403
    assert res.json()["error"] == "FORBIDDEN"


def test_missing_fields_are_400(client, setup, teacher_headers):
    res = client.post("/v1/grades/calculate", json={"student_id": setup.student.id}, headers=teacher_headers)
    body = res.json()
    assert res.status_code == 400
    assert body["error"] == "VALIDATION_ERROR"
    assert "subject_id" in body["message"]


def test_unknown_academic_year_is_404(client, db, setup, teacher_headers):
    res = client.post(
        "/v1/grades/calculate", json=_calc_payload(setup, setup.math, academic_year_id=999), headers=teacher_headers
    )

    assert res.status_code == 404
    assert res.json()["message"] == "Academic year not found"
    assert db.query(Grade).count() == 0


def test_unknown_term_is_404(client, setup, teacher_headers):
    res = client.post(
        "/v1/grades/calculate", json=_calc_payload(setup, setup.math, term_id=999), headers=teacher_headers
    )
    assert res.status_code == 404
    assert res.json()["message"] == "Term not found"
