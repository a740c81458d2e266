from django.urls import path, include

app_name = 'api'

urlpatterns = [
    # Tests, questions, passages, assignments, submissions and results
    path('tests/', include('assessments.urls.assessment')),
]
