from django.urls import path, include
from rest_framework.routers import SimpleRouter

from assessments.views import (
    TestViewSet,
    QuestionViewSet,
    PassageViewSet,
    SubmissionViewSet,
    assigned_tests,
    student_submissions,
    student_results,
    student_summary
)

router = SimpleRouter()
router.register(r'questions', QuestionViewSet, basename='question')
router.register(r'passages', PassageViewSet, basename='passage')
router.register(r'submissions', SubmissionViewSet, basename='submission')
router.register(r'', TestViewSet, basename='test')

urlpatterns = [
    # Assigned tests for a student, a class or a teacher
    path('assigned/<str:target_type>/<int:target_id>/', assigned_tests, name='assigned-tests'),

    # Per-student submissions and results
    path('student/<int:student_id>/submissions/', student_submissions, name='student-submissions'),
    path('student/<int:student_id>/results/', student_results, name='student-results'),
    path('student/<int:student_id>/summary/', student_summary, name='student-summary'),

    path('', include(router.urls)),
]
