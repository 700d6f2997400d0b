import pytest

from models.grading import GradeBoundary
from services.grade_boundary import GradeBoundaryResolver, find_overlaps, match_boundary
from utils.exceptions import NotFoundError
from conftest import LETTER_BOUNDARIES


def _boundaries(rows):
    return [GradeBoundary(grade=g, min_score=lo, max_score=hi, grade_point=gp, pass_status=p)
            for g, lo, hi, gp, p in rows]


@pytest.mark.parametrize("score, expected", [
    (100, "A"),
    (90, "A"),
    (89.99, "B"),
    (80, "B"),
    (49.99, "F"),
    (0, "F"),
])
def test_match_boundary_inclusive_edges(score, expected):
    assert match_boundary(_boundaries(LETTER_BOUNDARIES), score).grade == expected


def test_score_in_gap_has_no_boundary():
    rows = [("A", 90, 100, 4.0, True), ("B", 80, 89, 3.0, True)]
    assert match_boundary(_boundaries(rows), 89.5) is None
    assert match_boundary(_boundaries(rows), 120) is None


def test_overlapping_boundaries_prefer_higher_minimum():
    rows = [("B", 70, 90, 3.0, True), ("A", 85, 100, 4.0, True)]
    assert match_boundary(_boundaries(rows), 88).grade == "A"
    assert find_overlaps(_boundaries(rows)) == [("B", "A")]


def test_wide_band_overlaps_every_band_it_covers():
    rows = [("X", 0, 100, None, True), ("Y", 10, 20, None, True), ("Z", 30, 40, None, True)]
    assert find_overlaps(_boundaries(rows)) == [("X", "Y"), ("X", "Z")]


def test_resolver_uses_school_default_scheme(db, setup):
    setup.add_scheme(LETTER_BOUNDARIES)
    resolver = GradeBoundaryResolver(db)

    scheme_id = resolver.resolve_scheme_id(setup.klass.id)
    resolved = resolver.resolve(scheme_id, 76.0)

    assert resolved.letter_grade == "C"
    assert resolved.grade_point == 2.0
    assert resolved.is_passed is True
    # 같은 점수 재조회 시 동일 결과
    assert resolver.resolve(scheme_id, 76.0) == resolved


def test_failing_boundary_is_not_passed(db, setup):
    scheme = setup.add_scheme(LETTER_BOUNDARIES)
    resolved = GradeBoundaryResolver(db).resolve(scheme.id, 12)
    assert resolved.letter_grade == "F"
    assert resolved.is_passed is False


def test_no_default_scheme_resolves_to_nothing(db, setup):
    setup.add_scheme(LETTER_BOUNDARIES, is_default=False)
    resolver = GradeBoundaryResolver(db)

    scheme_id = resolver.resolve_scheme_id(setup.klass.id)
    resolved = resolver.resolve(scheme_id, 95)

    assert scheme_id is None
    assert resolved.letter_grade is None
    assert resolved.grade_point is None
    assert resolved.is_passed is False


def test_explicit_missing_scheme_is_not_found(db, setup):
    with pytest.raises(NotFoundError):
        GradeBoundaryResolver(db).resolve_scheme_id(setup.klass.id, scheme_id=999)
