"""
Admin for Enrollment management.
"""

from django.contrib import admin, messages
from django_object_actions import DjangoObjectActions, action

from ..authorization import authorize
from ..lifecycle import Action, apply_transition, legal_actions
from ..models import Course, Enrollment, RegistrationHistory
from ..roles import OPERATION_PERMISSIONS


class RegistrationHistoryInline(admin.TabularInline):
    """Inline admin for RegistrationHistory records."""

    model = RegistrationHistory
    extra = 0
    readonly_fields = [
        "old_status",
        "new_status",
        "changed_by",
        "changed_at",
    ]

    def has_add_permission(self, request, obj=None):
        """Disable manual creation of history records."""
        return False

    def has_change_permission(self, request, obj=None):
        """History records are immutable."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Disable deletion of history records."""
        return False


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    """Admin for courses."""

    list_display = ["id", "key", "title", "is_active", "created"]
    list_filter = ["is_active"]
    search_fields = ["key", "title"]


@admin.register(Enrollment)
class EnrollmentAdmin(DjangoObjectActions, admin.ModelAdmin):
    """
    Admin for enrollments.

    Enrollments are requested through the API, so they cannot be added or deleted here.
    The registration status is changed only with the lifecycle actions.
    """

    model = Enrollment
    inlines = [RegistrationHistoryInline]

    list_display = [
        "id",
        "student",
        "course",
        "registration_status",
        "created",
    ]

    list_filter = [
        "registration_status",
        "course__key",
        "created",
    ]

    search_fields = [
        "id",
        "student__user__email",
        "student__last_name",
        "course__key",
        "course__title",
    ]

    readonly_fields = ["student", "course", "registration_status", "created", "modified"]

    change_actions = ("validate", "reject", "mark_paid", "finish")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_change_actions(self, request, object_id, form_url):
        """Only offer the actions the user may apply to the enrollment's current state."""
        actions = super().get_change_actions(request, object_id, form_url)
        if not authorize(request.user, OPERATION_PERMISSIONS["apply_transition"]).ok:
            return []
        enrollment = Enrollment.objects.filter(pk=object_id).first()
        if enrollment is None:
            return []
        allowed = {value.replace("-", "_") for value in legal_actions(enrollment.registration_status)}
        return [name for name in actions if name in allowed]

    def _apply(self, request, obj: Enrollment, lifecycle_action: str):
        access = authorize(request.user, OPERATION_PERMISSIONS["apply_transition"])
        if not access.ok:
            messages.error(request, access.detail)
            return

        result = apply_transition(obj.pk, lifecycle_action, actor=request.user)
        if result.ok:
            messages.success(
                request,
                f"Enrollment of {obj.student} in {obj.course} is now {result.value.get_registration_status_display()}.",
            )
        else:
            messages.error(request, result.detail)

    @action(label="Validate", description="Validate this pending enrollment")
    def validate(self, request, obj: Enrollment):
        self._apply(request, obj, Action.VALIDATE)

    @action(label="Reject", description="Reject this pending enrollment")
    def reject(self, request, obj: Enrollment):
        self._apply(request, obj, Action.REJECT)

    @action(label="Mark paid", description="Record the payment of this validated enrollment")
    def mark_paid(self, request, obj: Enrollment):
        self._apply(request, obj, Action.MARK_PAID)

    @action(label="Finish", description="Mark this paid enrollment as finished")
    def finish(self, request, obj: Enrollment):
        self._apply(request, obj, Action.FINISH)


@admin.register(RegistrationHistory)
class RegistrationHistoryAdmin(admin.ModelAdmin):
    """Read-only admin for the registration history ledger."""

    list_display = [
        "id",
        "enrollment",
        "old_status",
        "new_status",
        "changed_by",
        "changed_at",
    ]

    list_filter = [
        "new_status",
        "changed_at",
    ]

    search_fields = [
        "enrollment__student__user__email",
        "enrollment__course__key",
        "changed_by__email",
    ]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
