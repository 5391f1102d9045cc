"""
Views for enrollments: requests, lifecycle transitions and history.
"""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from registrations.authorization import authorize
from registrations.lifecycle import apply_transition, create_enrollment, get_history
from registrations.models import Enrollment, Student
from registrations.results import NotFound
from registrations.roles import OPERATION_PERMISSIONS

from ..permissions import HasRolePermissions, IsSelfOrHasRolePermissions
from ..utils import error_response
from .serializers import (
    EnrollmentCreateSerializer,
    EnrollmentFilterSerializer,
    EnrollmentSerializer,
    RegistrationHistorySerializer,
    TransitionSerializer,
)


class EnrollmentListCreateView(APIView):
    """
    List enrollments and request new ones.

    Enrollment managers can list and create enrollments of any student.
    Students can list their own enrollments and enroll themselves.
    """

    permission_classes = [IsSelfOrHasRolePermissions]
    required_permissions = OPERATION_PERMISSIONS["create_enrollment"]

    def get_owner_id(self, student: Student):
        return student.user_id

    def get(self, request):
        """List enrollments, the most recent first.

        Query params:
            student_id (optional): For enrollment managers, only list the
                enrollments of this student.
        """
        filters = EnrollmentFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        enrollments = Enrollment.objects.select_related("student", "course").order_by("-created", "-id")
        access = authorize(request.user, OPERATION_PERMISSIONS["list_enrollments"])
        if access.ok:
            if student_id := filters.validated_data.get("student_id"):
                enrollments = enrollments.filter(student_id=student_id)
        else:
            student = Student.objects.for_user(request.user).first()
            if student is None:
                return error_response(access)
            enrollments = enrollments.filter(student=student)

        return Response(EnrollmentSerializer(enrollments, many=True).data)

    def post(self, request):
        """Request an enrollment in a course.

        Both admission gates are checked: the student profile must be complete and
        every required document type must have an approved document.

        Example payload::

            {
                "course_id": 12,
                "student_id": 3
            }

        """
        serializer = EnrollmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        student_id = serializer.validated_data.get("student_id")
        if student_id is None:
            student = Student.objects.for_user(request.user).first()
            if student is None:
                # Only students can enroll without naming the student.
                access = authorize(request.user, self.required_permissions)
                if not access.ok:
                    return error_response(access)
                raise ValidationError({"student_id": ["This field is required."]})
        else:
            student = Student.objects.filter(pk=student_id).first()
            if student is None or student.user_id != request.user.pk:
                access = authorize(request.user, self.required_permissions)
                if not access.ok:
                    return error_response(access)
            if student is None:
                return error_response(NotFound("student", student_id))

        self.check_object_permissions(request, student)

        result = create_enrollment(student.pk, serializer.validated_data["course_id"], actor=request.user)
        if not result.ok:
            return error_response(result)
        return Response(EnrollmentSerializer(result.value).data, status=status.HTTP_201_CREATED)


class EnrollmentTransitionView(APIView):
    """Apply a lifecycle action to an enrollment."""

    permission_classes = [HasRolePermissions]
    required_permissions = OPERATION_PERMISSIONS["apply_transition"]

    def post(self, request, enrollment_id: int):
        """Move an enrollment to its next state.

        Example payload::

            {
                "action": "validate"
            }

        Actions: ``validate`` and ``reject`` apply to pending enrollments,
        ``mark-paid`` to validated ones and ``finish`` to paid ones.
        """
        serializer = TransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = apply_transition(enrollment_id, serializer.validated_data["action"], actor=request.user)
        if not result.ok:
            return error_response(result)
        return Response(EnrollmentSerializer(result.value).data)


class EnrollmentHistoryView(APIView):
    """Registration history of an enrollment, for its student or enrollment managers."""

    permission_classes = [IsSelfOrHasRolePermissions]
    required_permissions = OPERATION_PERMISSIONS["view_enrollment_history"]

    def get_owner_id(self, enrollment: Enrollment):
        return enrollment.student.user_id

    def get(self, request, enrollment_id: int):
        enrollment = Enrollment.objects.select_related("student").filter(pk=enrollment_id).first()
        if enrollment is None:
            return error_response(NotFound("enrollment", enrollment_id))

        self.check_object_permissions(request, enrollment)

        result = get_history(enrollment.pk)
        if not result.ok:
            return error_response(result)
        return Response(RegistrationHistorySerializer(result.value, many=True).data)
