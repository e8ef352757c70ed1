from enum import Enum


class Role(str, Enum):
    SUPERADMIN = "SUPERADMIN"
    SCHOOL_ADMIN = "SCHOOL_ADMIN"
    TEACHER = "TEACHER"


class EditorStatus(str, Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    SUBMITTING = "SUBMITTING"


class EditorKind(str, Enum):
    CLASS = "class"
    TUTOR = "tutor"
    ASSIGNMENT = "assignment"


class ToastType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class DeleteTarget(str, Enum):
    CLASS = "class"
    TUTOR = "tutor"
    ASSIGNMENT = "assignment"


# Section labels offered by "add section", in allocation order
SECTION_LABELS = ["A", "B", "C", "D", "E", "F", "G", "H"]

DEFAULT_SUBJECTS = [
    "English",
    "Maths",
    "Science",
    "History",
    "Geography",
    "Social Studies",
    "Hindi",
    "Computer Science",
    "Physical Education",
    "Art",
    "Music",
]
