"""
Admin for users, student and teacher profiles, and student documents.
"""

from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django_object_actions import DjangoObjectActions, action

from ..authorization import authorize
from ..gates import review_document
from ..models import Document, Student, Teacher, User
from ..roles import OPERATION_PERMISSIONS


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for accounts, exposing the role."""

    list_display = ["username", "email", "role", "is_active", "is_staff"]
    list_filter = ["role", "is_active", "is_staff"]
    fieldsets = BaseUserAdmin.fieldsets + (("Role", {"fields": ("role",)}),)
    add_fieldsets = BaseUserAdmin.add_fieldsets + (("Role", {"fields": ("email", "role")}),)


class DocumentInline(admin.TabularInline):
    """Inline admin for the documents of a student."""

    model = Document
    extra = 0
    readonly_fields = ["type", "status", "file_url", "reviewed_by", "reviewed_at", "created"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    """Admin for student profiles."""

    raw_id_fields = ("user",)
    inlines = [DocumentInline]
    list_display = ["id", "user", "first_name", "last_name", "nationality", "created"]
    search_fields = ["user__email", "first_name", "last_name", "phone_number"]


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    """Admin for teacher profiles."""

    raw_id_fields = ("user",)
    list_display = ["id", "user", "first_name", "last_name", "specialization"]
    search_fields = ["user__email", "first_name", "last_name"]


@admin.register(Document)
class DocumentAdmin(DjangoObjectActions, admin.ModelAdmin):
    """Admin for student documents; reviews go through the one-shot review actions."""

    list_display = ["id", "student", "type", "status", "reviewed_by", "reviewed_at"]
    list_filter = ["status", "type"]
    search_fields = ["student__user__email", "student__last_name"]
    readonly_fields = ["status", "reviewed_by", "reviewed_at", "created", "modified"]

    change_actions = ("approve", "reject")

    def get_readonly_fields(self, request, obj=None):
        """The student and type of an existing document are fixed."""
        readonly_fields = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            readonly_fields += ["student", "type"]
        return readonly_fields

    def get_change_actions(self, request, object_id, form_url):
        """Hide the review actions from users who may not review and from reviewed documents."""
        actions = super().get_change_actions(request, object_id, form_url)
        if not authorize(request.user, OPERATION_PERMISSIONS["review_document"]).ok:
            return []
        if not Document.objects.filter(pk=object_id, status=Document.Status.PENDING).exists():
            return []
        return actions

    def _review(self, request, obj: Document, status: str):
        access = authorize(request.user, OPERATION_PERMISSIONS["review_document"])
        if not access.ok:
            messages.error(request, access.detail)
            return

        result = review_document(obj.pk, status, reviewer=request.user)
        if result.ok:
            messages.success(request, f"{obj.get_type_display()} of {obj.student} is now {status.lower()}.")
        else:
            messages.error(request, result.detail)

    @action(label="Approve", description="Approve this document")
    def approve(self, request, obj: Document):
        self._review(request, obj, Document.Status.APPROVED)

    @action(label="Reject", description="Reject this document")
    def reject(self, request, obj: Document):
        self._review(request, obj, Document.Status.REJECTED)
