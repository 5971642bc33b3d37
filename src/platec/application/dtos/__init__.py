from platec.application.dtos.reconciliation_dtos import AdminSeed, ReconciliationReport
from platec.application.dtos.teacher_dtos import (
    FlashCategory,
    FlashMessage,
    TeacherCreationResult,
    TeacherForm,
    TeacherProfile,
)

__all__ = [
    "AdminSeed",
    "FlashCategory",
    "FlashMessage",
    "ReconciliationReport",
    "TeacherCreationResult",
    "TeacherForm",
    "TeacherProfile",
]
