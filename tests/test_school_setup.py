from models.enums import UserRole
from conftest import auth_header


def _admin_headers(setup):
    admin = setup.add_user("admin@ghs.test", UserRole.SCHOOL_ADMIN)
    setup.db.commit()
    return auth_header(admin)


def test_create_school_subject_and_class(client, setup):
    headers = _admin_headers(setup)

    school = client.post("/v1/schools", json={
        "name": "Lake View", "code": "LVS", "email": "info@lvs.test",
        "address": "2 Lake Road", "city": "Kisumu", "country": "Kenya",
    }, headers=headers)
    assert school.status_code == 201
    school_id = school.json()["data"]["id"]

    year = client.post("/v1/academic-years", json={
        "name": "2025/2026", "start_date": "2025-09-01", "end_date": "2026-07-31", "school_id": school_id,
    }, headers=headers).json()["data"]

    subject = client.post("/v1/subjects", json={
        "name": "Biology", "code": "BIO", "school_id": school_id,
    }, headers=headers).json()["data"]
    klass = client.post("/v1/classes", json={
        "name": "Form 1 West", "code": "F1W", "grade_level": "Form 1",
        "school_id": school_id, "academic_year_id": year["id"],
    }, headers=headers).json()["data"]

    res = client.post(f"/v1/classes/{klass['id']}/subjects", json={"subject_id": subject["id"]}, headers=headers)
    assert res.status_code == 201

    res = client.post(f"/v1/classes/{klass['id']}/subjects", json={"subject_id": subject["id"]}, headers=headers)
    assert res.status_code == 409


def test_duplicate_school_code_is_conflict(client, setup):
    res = client.post("/v1/schools", json={
        "name": "Copy", "code": "GHS", "email": "x@ghs.test",
        "address": "x", "city": "x", "country": "x",
    }, headers=_admin_headers(setup))
    assert res.status_code == 409


def test_current_year_and_term_are_unique(client, db, setup):
    headers = _admin_headers(setup)
    new_year = client.post("/v1/academic-years", json={
        "name": "2026/2027", "start_date": "2026-09-01", "end_date": "2027-07-31",
        "school_id": setup.school.id, "is_current": True,
    }, headers=headers).json()["data"]

    current = client.get(f"/v1/schools/{setup.school.id}/academic-years/current", headers=headers).json()["data"]
    assert current["id"] == new_year["id"]
    assert current["current_term"] is None

    t1 = client.post(f"/v1/academic-years/{new_year['id']}/terms", json={
        "name": "Term 1", "term_number": 1, "start_date": "2026-09-01", "end_date": "2026-12-15", "is_current": True,
    }, headers=headers).json()["data"]
    t2 = client.post(f"/v1/academic-years/{new_year['id']}/terms", json={
        "name": "Term 2", "term_number": 2, "start_date": "2027-01-05", "end_date": "2027-04-01",
    }, headers=headers).json()["data"]
    client.patch(f"/v1/terms/{t2['id']}/current", headers=headers)

    current = client.get(f"/v1/schools/{setup.school.id}/academic-years/current", headers=headers).json()["data"]
    assert current["current_term"]["id"] == t2["id"]
    assert current["current_term"]["id"] != t1["id"]

    # 이전 학년도로 되돌리기
    client.patch(f"/v1/academic-years/{setup.year.id}/current", headers=headers)
    current = client.get(f"/v1/schools/{setup.school.id}/academic-years/current", headers=headers).json()["data"]
    assert current["id"] == setup.year.id


def test_no_current_year_is_404(client, db, setup):
    headers = _admin_headers(setup)
    setup.year.is_current = False
    db.commit()

    res = client.get(f"/v1/schools/{setup.school.id}/academic-years/current", headers=headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Current academic year not found"


def test_invalid_date_range_is_400(client, setup):
    res = client.post("/v1/academic-years", json={
        "name": "bad", "start_date": "2026-09-01", "end_date": "2026-01-01", "school_id": setup.school.id,
    }, headers=_admin_headers(setup))
    assert res.status_code == 400
