from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from assessments.models import Passage, Question, Submission, Test
from assessments.permissions import IsAuthorOrGrader, IsAuthorOrGraderOrReadOnly, is_author, student_profile
from assessments.serializers import (
    AssignmentSerializer,
    AssignTestSerializer,
    PassageSerializer,
    QuestionInputSerializer,
    QuestionSerializer,
    QuestionUpdateSerializer,
    StartTestSerializer,
    SubmissionDetailSerializer,
    SubmissionSerializer,
    TestDetailSerializer,
    TestResultsSerializer,
    TestSerializer,
    TestWriteSerializer,
)
from assessments.services.assignment_fanout import AssignmentFanOut
from assessments.services.exceptions import NotEligibleError
from assessments.services.results import ResultsAggregator
from assessments.services.roster import RosterService
from assessments.services.submission_lifecycle import SubmissionLifecycle
from assessments.services.test_definition import TestDefinitionService


def is_forced(request):
    """``?force=true`` lets authors edit a locked test"""
    return str(request.query_params.get('force', '')).lower() in ['1', 'true', 'yes']


def acting_student(request, student_id=None):
    """
    The student a lifecycle call acts for. Students always act for
    themselves; authors may name any student.
    """
    user = request.user
    if is_author(user) and student_id:
        return RosterService.get_student(student_id)

    profile = student_profile(user)
    if profile is None:
        raise NotEligibleError("Only students can take tests")
    if student_id and int(student_id) != profile.pk:
        raise NotEligibleError("Students can only take tests for themselves")
    return profile


class TestViewSet(viewsets.ModelViewSet):
    """
    Test authoring plus the per-test entry points of the assessment flow:
    activation, assignment, starting an attempt and results.
    """
    queryset = Test.objects.select_related('center', 'created_by')
    serializer_class = TestSerializer
    permission_classes = [IsAuthorOrGraderOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['center', 'test_type', 'is_active', 'subject']
    search_fields = ['name', 'description', 'subject']
    ordering_fields = ['created_at', 'name', 'start_date']
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        user = self.request.user
        queryset = Test.objects.select_related('center', 'created_by')

        if is_author(user):
            return queryset

        # Students only see active tests of their own center
        student = student_profile(user)
        if student is None:
            return Test.objects.none()
        return queryset.filter(center=student.center, is_active=True)

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return TestDetailSerializer
        if self.action in ['create', 'update', 'partial_update']:
            return TestWriteSerializer
        return TestSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['hide_answers'] = not is_author(self.request.user)
        return context

    def _detail(self, test, status_code=status.HTTP_200_OK):
        return Response(TestDetailSerializer(test, context=self.get_serializer_context()).data, status=status_code)

    def create(self, request, *args, **kwargs):
        serializer = TestWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        meta = dict(serializer.validated_data)
        questions = meta.pop('questions', [])
        passages = meta.pop('passages', [])
        assignments = meta.pop('assignments', [])

        test = TestDefinitionService.create_test(
            meta,
            questions=questions,
            passages=passages,
            author=request.user,
            assignments=assignments,
        )
        return self._detail(test, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        test = self.get_object()
        serializer = TestWriteSerializer(test, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        test = TestDefinitionService.update_test(test, serializer.validated_data, force=is_forced(request))
        return self._detail(test)

    def perform_destroy(self, instance):
        TestDefinitionService.delete_test(instance)

    @action(detail=True, methods=['post'])
    def activate(self, request, pk=None):
        test = TestDefinitionService.activate(self.get_object())
        return self._detail(test)

    @action(detail=True, methods=['post'])
    def deactivate(self, request, pk=None):
        test = TestDefinitionService.deactivate(self.get_object())
        return self._detail(test)

    @action(detail=True, methods=['get', 'post'], url_path='questions')
    def questions(self, request, pk=None):
        test = self.get_object()
        if request.method == 'GET':
            return Response(self._detail(test).data['questions'])

        serializer = QuestionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        question = TestDefinitionService.add_question(test, serializer.validated_data, force=is_forced(request))
        return Response(QuestionSerializer(question).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get', 'post'], url_path='passages')
    def passages(self, request, pk=None):
        test = self.get_object()
        if request.method == 'GET':
            return Response(PassageSerializer(test.passages.all(), many=True).data)

        serializer = PassageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        passage = TestDefinitionService.add_passage(test, serializer.validated_data, force=is_forced(request))
        return Response(PassageSerializer(passage).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthorOrGrader])
    def assign(self, request, pk=None):
        test = self.get_object()
        serializer = AssignTestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        rows = AssignmentFanOut.assign(test, serializer.validated_data['assignments'], assigned_by=request.user)
        return Response(
            {'assigned_count': len(rows), 'assignments': AssignmentSerializer(rows, many=True).data},
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAuthenticated])
    def start(self, request, pk=None):
        # Looked up directly so inactive tests answer "not eligible" rather than 404
        test = get_object_or_404(Test, pk=pk)
        serializer = StartTestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        student = acting_student(request, serializer.validated_data.get('student_id'))
        submission = SubmissionLifecycle.start(test, student, ip_address=request.META.get('REMOTE_ADDR'))

        data = dict(SubmissionDetailSerializer(submission, context={'request': request}).data)
        data['submission_id'] = submission.pk
        return Response(data)

    @action(detail=True, methods=['get'], permission_classes=[IsAuthorOrGrader])
    def submissions(self, request, pk=None):
        test = self.get_object()
        queryset = Submission.objects.filter(test=test).select_related('test', 'student', 'graded_by')

        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        return Response(SubmissionSerializer(queryset.order_by('-submitted_at', '-created_at'), many=True).data)

    @action(detail=True, methods=['get'], permission_classes=[IsAuthorOrGrader])
    def results(self, request, pk=None):
        results = ResultsAggregator.test_results(self.get_object())
        return Response(TestResultsSerializer(results).data)


class QuestionViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Edit or remove a single question; totals are kept in step by the authoring service"""
    queryset = Question.objects.select_related('test', 'passage')
    serializer_class = QuestionSerializer
    permission_classes = [IsAuthorOrGrader]
    lookup_value_regex = r'\d+'

    def update(self, request, *args, **kwargs):
        question = self.get_object()
        serializer = QuestionUpdateSerializer(data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)

        question = TestDefinitionService.update_question(question, serializer.validated_data, force=is_forced(request))
        return Response(QuestionSerializer(question).data)

    def partial_update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        TestDefinitionService.delete_question(self.get_object(), force=is_forced(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class PassageViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    queryset = Passage.objects.select_related('test')
    serializer_class = PassageSerializer
    permission_classes = [IsAuthorOrGrader]
    lookup_value_regex = r'\d+'

    def update(self, request, *args, **kwargs):
        passage = self.get_object()
        serializer = PassageSerializer(passage, data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)

        passage = TestDefinitionService.update_passage(passage, serializer.validated_data, force=is_forced(request))
        return Response(PassageSerializer(passage).data)

    def partial_update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        TestDefinitionService.delete_passage(self.get_object(), force=is_forced(request))
        return Response(status=status.HTTP_204_NO_CONTENT)
