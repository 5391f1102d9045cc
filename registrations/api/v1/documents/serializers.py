"""
Serializers for document review.
"""

from rest_framework import serializers

from registrations.gates import REVIEW_STATUSES


class DocumentReviewSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    status = serializers.ChoiceField(choices=[(status.value, status.label) for status in REVIEW_STATUSES])
