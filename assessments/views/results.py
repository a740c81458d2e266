from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from assessments.models import Submission
from assessments.permissions import can_view_student, is_author, student_profile
from assessments.serializers import (
    AssignedTestSerializer,
    StudentResultSerializer,
    SubmissionSerializer,
    TestSummarySerializer,
)
from assessments.services.assignment_fanout import AssignmentFanOut
from assessments.services.results import ResultsAggregator
from assessments.services.roster import RosterService


def _visible_student(request, student_id):
    student = RosterService.get_student(student_id)
    if not can_view_student(request.user, student):
        raise PermissionDenied("You can only view your own results")
    return student


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def assigned_tests(request, target_type, target_id):
    """Active tests assigned to a student, a class, or by a teacher"""
    student_id = request.query_params.get('student_id')

    if not is_author(request.user):
        profile = student_profile(request.user)
        if target_type != 'student' or profile is None or profile.pk != target_id:
            raise PermissionDenied("You can only list your own assigned tests")

    rows = AssignmentFanOut.assigned_tests(
        target_type,
        target_id,
        student_id=int(student_id) if student_id and student_id.isdigit() else None,
    )
    return Response(AssignedTestSerializer(rows, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_submissions(request, student_id):
    student = _visible_student(request, student_id)
    submissions = (
        Submission.objects
        .filter(student=student)
        .select_related('test', 'student', 'graded_by')
        .order_by('-created_at')
    )
    return Response(SubmissionSerializer(submissions, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_results(request, student_id):
    student = _visible_student(request, student_id)
    rows = ResultsAggregator.student_results(student)
    return Response(StudentResultSerializer(rows, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_summary(request, student_id):
    """Best and average percentage, attempts and first pass per test, computed on read"""
    student = _visible_student(request, student_id)
    rows = ResultsAggregator.student_summary(student)
    return Response(TestSummarySerializer(rows, many=True).data, status=status.HTTP_200_OK)
