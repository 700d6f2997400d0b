import enum


# ==========================================================
# [공통] DB Enum 정의 (문자열 값 그대로 저장)
# ==========================================================

class UserRole(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    SCHOOL_ADMIN = "SCHOOL_ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    PARENT = "PARENT"
    GUEST = "GUEST"


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING = "PENDING"


class SubjectCategory(str, enum.Enum):
    CORE = "CORE"
    ELECTIVE = "ELECTIVE"
    CO_CURRICULAR = "CO_CURRICULAR"


class AssignmentStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"
    ARCHIVED = "ARCHIVED"


class SubmissionStatus(str, enum.Enum):
    NOT_SUBMITTED = "NOT_SUBMITTED"
    SUBMITTED = "SUBMITTED"
    LATE = "LATE"
    GRADED = "GRADED"


class ExamType(str, enum.Enum):
    CAT = "CAT"
    MIDTERM = "MIDTERM"
    FINAL = "FINAL"
    PRACTICAL = "PRACTICAL"
    QUIZ = "QUIZ"


class ExamStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    GRADED = "GRADED"


class AttendanceStatus(str, enum.Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"
    SICK = "SICK"


class GradingScale(str, enum.Enum):
    LETTER = "LETTER"
    PERCENTAGE = "PERCENTAGE"
    GPA = "GPA"
    POINTS = "POINTS"


class TermType(str, enum.Enum):
    TERM_1 = "TERM_1"
    TERM_2 = "TERM_2"
    TERM_3 = "TERM_3"
    SEMESTER_1 = "SEMESTER_1"
    SEMESTER_2 = "SEMESTER_2"
    ANNUAL = "ANNUAL"
