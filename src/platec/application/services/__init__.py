from platec.application.services.startup_reconciler import StartupReconciler
from platec.application.services.teacher_lifecycle_service import (
    TeacherLifecycleService,
)

__all__ = ["StartupReconciler", "TeacherLifecycleService"]
