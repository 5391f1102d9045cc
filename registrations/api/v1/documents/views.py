"""
Views for document review.
"""

from rest_framework.response import Response
from rest_framework.views import APIView

from registrations.gates import review_document
from registrations.roles import OPERATION_PERMISSIONS

from ..permissions import HasRolePermissions
from ..students.serializers import DocumentSerializer
from ..utils import error_response
from .serializers import DocumentReviewSerializer


class DocumentReviewView(APIView):
    """Approve or reject a pending document. A document is reviewed only once."""

    permission_classes = [HasRolePermissions]
    required_permissions = OPERATION_PERMISSIONS["review_document"]

    def post(self, request, document_id: int):
        """
        Example payload::

            {
                "status": "APPROVED"
            }

        """
        serializer = DocumentReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = review_document(document_id, serializer.validated_data["status"], reviewer=request.user)
        if not result.ok:
            return error_response(result)
        return Response(DocumentSerializer(result.value).data)
