"""
Serializers for student profiles.
"""

from rest_framework import serializers

from registrations.gates import missing_document_types
from registrations.models import Document, Student


class DocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Document
        fields = ("id", "type", "status", "file_url", "reviewed_by", "reviewed_at", "created")
        read_only_fields = fields


class StudentProfileSerializer(serializers.ModelSerializer):
    """A student's profile together with the state of both admission gates."""

    email = serializers.EmailField(source="user.email", read_only=True)
    documents = DocumentSerializer(many=True, read_only=True)
    is_profile_complete = serializers.BooleanField(read_only=True)
    missing_profile_fields = serializers.SerializerMethodField()
    is_documents_complete = serializers.SerializerMethodField()
    missing_documents = serializers.SerializerMethodField()

    class Meta:
        model = Student
        fields = (
            "id",
            "email",
            "first_name",
            "last_name",
            "date_of_birth",
            "gender",
            "phone_number",
            "nationality",
            "address",
            "language",
            "education_level",
            "study_location",
            "documents",
            "is_profile_complete",
            "missing_profile_fields",
            "is_documents_complete",
            "missing_documents",
        )
        read_only_fields = fields

    def get_missing_profile_fields(self, obj: Student) -> list[str]:
        return obj.missing_profile_fields()

    def get_missing_documents(self, obj: Student) -> list[str]:
        return missing_document_types(obj)

    def get_is_documents_complete(self, obj: Student) -> bool:
        return not missing_document_types(obj)
