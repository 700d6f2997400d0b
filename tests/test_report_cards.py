import pytest

from models.report_cards import ReportCard
from conftest import LETTER_BOUNDARIES


def _generate(client, setup, headers, student=None, **extra):
    payload = {
        "student_id": (student or setup.student).id,
        "class_id": setup.klass.id,
        "academic_year_id": setup.year.id,
        "term_type": "TERM_1",
        **extra,
    }
    return client.post("/v1/report-cards/generate", json=payload, headers=headers)


@pytest.fixture
def scored(setup):
    setup.add_scheme(LETTER_BOUNDARIES)
    # 수학 100 (A), 영어 80 (B)
    setup.add_graded_submission(setup.student, setup.math, 100)
    setup.add_exam_result(setup.student, setup.math, 100)
    setup.add_graded_submission(setup.student, setup.english, 80)
    setup.add_exam_result(setup.student, setup.english, 80)
    return setup


def test_generate_aggregates_term_grades(client, scored, teacher_headers):
    res = _generate(client, scored, teacher_headers, class_teacher_comment="Well done")

    assert res.status_code == 201
    data = res.json()["data"]
    card = data["report_card"]
    assert card["total_marks"] == pytest.approx(180.0)
    assert card["max_marks"] == pytest.approx(200.0)
    assert card["average_score"] == pytest.approx(90.0)
    assert card["overall_grade"] == "A"
    assert card["overall_gpa"] == pytest.approx(3.5)
    assert card["position"] == 1
    assert card["out_of"] == 1
    assert card["class_teacher_comment"] == "Well done"
    assert card["is_published"] is False
    # 과목명 오름차순
    assert [g["subject"]["name"] for g in data["grades"]] == ["English", "Mathematics"]


def test_position_uses_each_students_own_subject_count(client, scored, teacher_headers):
    # 다른 학생은 수학 1과목만 100점 → 평균 100
    scored.add_exam_result(scored.other_student, scored.math, 100)
    scored.add_graded_submission(scored.other_student, scored.math, 100)
    client.post("/v1/grades/calculate", json={
        "student_id": scored.other_student.id,
        "class_id": scored.klass.id,
        "subject_id": scored.math.id,
        "academic_year_id": scored.year.id,
        "term_type": "TERM_1",
    }, headers=teacher_headers)

    card = _generate(client, scored, teacher_headers).json()["data"]["report_card"]

    assert card["position"] == 2
    assert card["out_of"] == 2


def test_regeneration_replaces_single_report_card(client, db, scored, teacher_headers):
    first = _generate(client, scored, teacher_headers, principal_comment="Keep it up").json()["data"]
    scored.add_exam_result(scored.student, scored.english, 0)
    second = _generate(client, scored, teacher_headers).json()["data"]

    assert first["report_card"]["id"] == second["report_card"]["id"]
    assert db.query(ReportCard).count() == 1
    # 영어: 과제 80, 시험 (80+0)/2 = 40 → 32 + 24 = 56
    assert second["report_card"]["total_marks"] == pytest.approx(156.0)
    assert second["report_card"]["principal_comment"] == "Keep it up"


def test_attendance_snapshot_uses_latest_summary(client, scored, teacher_headers):
    for day, status in (("2026-03-02", "PRESENT"), ("2026-03-03", "LATE"), ("2026-03-04", "ABSENT")):
        res = client.post("/v1/attendance", json={
            "student_id": scored.student.id,
            "class_id": scored.klass.id,
            "date": day,
            "status": status,
        }, headers=teacher_headers)
        assert res.status_code == 201

    res = client.post("/v1/attendance/summaries", json={
        "student_id": scored.student.id,
        "class_id": scored.klass.id,
        "month": 3,
        "year": 2026,
    }, headers=teacher_headers)
    summary = res.json()["data"]
    assert summary["present_days"] == 2
    assert summary["late_days"] == 1
    assert summary["attendance_rate"] == pytest.approx(200 / 3)

    card = _generate(client, scored, teacher_headers).json()["data"]["report_card"]
    assert card["total_days"] == 3
    assert card["days_present"] == 2
    assert card["days_absent"] == 1
    assert card["attendance_rate"] == pytest.approx(200 / 3)


def test_report_card_without_scheme_has_no_overall_grade(client, setup, teacher_headers):
    setup.add_exam_result(setup.student, setup.math, 90)

    card = _generate(client, setup, teacher_headers).json()["data"]["report_card"]

    assert card["overall_grade"] is None
    assert card["overall_gpa"] is None


def test_publish_and_regenerate_keeps_published(client, scored, teacher_headers, student_headers):
    card_id = _generate(client, scored, teacher_headers).json()["data"]["report_card"]["id"]

    res = client.patch(f"/v1/report-cards/{card_id}/publish", headers=teacher_headers)
    published = res.json()["data"]
    assert published["is_published"] is True
    assert published["published_at"] is not None
    assert published["generated_by"] == scored.teacher.id

    card = _generate(client, scored, teacher_headers).json()["data"]["report_card"]
    assert card["is_published"] is True

    res = client.get(f"/v1/students/{scored.student.id}/report-cards", headers=student_headers)
    assert [r["id"] for r in res.json()["data"]] == [card_id]


def test_report_card_html(client, scored, teacher_headers, student_headers):
    card_id = _generate(client, scored, teacher_headers).json()["data"]["report_card"]["id"]

    res = client.get(f"/v1/report-cards/{card_id}/html", headers=student_headers)

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert "Amina Test" in res.text
    assert "Mathematics" in res.text
    assert "DRAFT" in res.text


def test_missing_report_card_is_404(client, setup, student_headers):
    for path in ("/v1/report-cards/999", "/v1/report-cards/999/html"):
        res = client.get(path, headers=student_headers)
        assert res.status_code == 404
        assert res.json()["message"] == "Report card not found"


def test_students_cannot_generate(client, setup, student_headers):
    assert _generate(client, setup, student_headers).status_code == 403


def test_unknown_academic_year_is_404(client, db, setup, teacher_headers):
    res = _generate(client, setup, teacher_headers, academic_year_id=999)

    assert res.status_code == 404
    assert res.json()["message"] == "Academic year not found"
    assert db.query(ReportCard).count() == 0
