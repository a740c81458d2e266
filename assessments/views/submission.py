from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from assessments.models import Submission
from assessments.permissions import IsAuthorOrGrader, is_author, owns_student, student_profile
from assessments.serializers import (
    GradeSubmissionSerializer,
    SaveProgressSerializer,
    SubmissionDetailSerializer,
    SubmissionSerializer,
    SubmitSerializer,
)
from assessments.services.manual_grading import ManualGradingService
from assessments.services.submission_lifecycle import SubmissionLifecycle


def can_reveal_answers(user, submission):
    """
    Authors always see answer keys. Students see them once their attempt is
    graded, or as soon as it is submitted when the test shows results
    immediately.
    """
    if is_author(user):
        return True
    if not owns_student(user, submission.student):
        return False
    if submission.status == 'graded':
        return True
    return submission.is_terminal and submission.test.show_results_immediately


class SubmissionViewSet(mixins.RetrieveModelMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    queryset = Submission.objects.select_related('test', 'student', 'graded_by')
    serializer_class = SubmissionSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['test', 'student', 'status']
    search_fields = ['student__first_name', 'student__last_name', 'student__enrollment_number', 'test__name']
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        user = self.request.user
        queryset = Submission.objects.select_related('test', 'student', 'graded_by')

        if is_author(user):
            return queryset

        student = student_profile(user)
        if student is None:
            return Submission.objects.none()
        return queryset.filter(student=student)

    def _detail(self, submission):
        context = self.get_serializer_context()
        context['reveal_answers'] = can_reveal_answers(self.request.user, submission)
        return Response(SubmissionDetailSerializer(submission, context=context).data)

    def retrieve(self, request, *args, **kwargs):
        return self._detail(self.get_object())

    @action(detail=True, methods=['post'])
    def progress(self, request, pk=None):
        submission = self.get_object()
        serializer = SaveProgressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = SubmissionLifecycle.save_progress(
            submission,
            serializer.validated_data['question_id'],
            serializer.validated_data['answer'],
        )
        return Response({
            'submission_id': submission.pk,
            'question_id': serializer.validated_data['question_id'],
            'saved': True,
            'seconds_remaining': SubmissionLifecycle.seconds_remaining(submission),
        })

    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        submission = self.get_object()
        serializer = SubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = SubmissionLifecycle.submit(
            submission,
            answers=serializer.validated_data['answers'],
            forced=serializer.validated_data['forced'],
        )
        return self._detail(submission)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthorOrGrader])
    def grade(self, request, pk=None):
        submission = self.get_object()
        serializer = GradeSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = ManualGradingService.grade_submission(
            submission,
            serializer.validated_data['answer_grades'],
            grader=request.user,
            feedback=serializer.validated_data.get('feedback'),
        )
        return self._detail(submission)
