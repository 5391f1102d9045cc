"""
Views for student profiles.
"""

from rest_framework.response import Response
from rest_framework.views import APIView

from registrations.models import Student
from registrations.results import NotFound
from registrations.roles import OPERATION_PERMISSIONS

from ..permissions import IsSelfOrHasRolePermissions
from ..utils import error_response
from .serializers import StudentProfileSerializer


class StudentProfileView(APIView):
    """
    A student's profile, with what is still missing before an enrollment can be requested.

    Students can read their own profile; student managers can read any profile.
    """

    permission_classes = [IsSelfOrHasRolePermissions]
    required_permissions = OPERATION_PERMISSIONS["view_student_profile"]

    def get_owner_id(self, student: Student):
        return student.user_id

    def get(self, request, student_id: int):
        student = Student.objects.select_related("user").prefetch_related("documents").filter(pk=student_id).first()
        if student is None:
            return error_response(NotFound("student", student_id))

        self.check_object_permissions(request, student)
        return Response(StudentProfileSerializer(student).data)
