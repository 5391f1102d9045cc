"""
Serializers for enrollments and their registration history.
"""

from rest_framework import serializers

from registrations.lifecycle import Action
from registrations.models import Enrollment, RegistrationHistory


class EnrollmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Enrollment
        fields = ("id", "student", "course", "registration_status", "created")
        read_only_fields = fields


class EnrollmentCreateSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """Input of an enrollment request. Students omit ``student_id`` to enroll themselves."""

    student_id = serializers.IntegerField(required=False, min_value=1)
    course_id = serializers.IntegerField(min_value=1)


class EnrollmentFilterSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    student_id = serializers.IntegerField(required=False, min_value=1)


class TransitionSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    action = serializers.ChoiceField(choices=Action.choices)


class RegistrationHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = RegistrationHistory
        fields = ("id", "enrollment", "old_status", "new_status", "changed_by", "changed_at")
        read_only_fields = fields
