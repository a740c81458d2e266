import itertools

import pytest
from django.contrib.auth import get_user_model

from assessments.models import Assignment, Center, Class, Student
from assessments.services.test_definition import TestDefinitionService

User = get_user_model()

_sequence = itertools.count(1)


@pytest.fixture
def api_client():
    """API client for making requests"""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def create_user():
    """Factory fixture for creating users"""
    def _create_user(email=None, password="testpass123", user_type="student", **kwargs):
        return User.objects.create_user(
            email=email or f"user{next(_sequence)}@example.com",
            password=password,
            user_type=user_type,
            **kwargs
        )
    return _create_user


@pytest.fixture
def teacher_user(create_user):
    """Create a teacher who authors and grades tests"""
    return create_user(email="teacher@example.com", user_type="teacher", first_name="Tola", last_name="Ade")


@pytest.fixture
def admin_user(create_user):
    """Create an admin user"""
    return create_user(
        email="admin@example.com",
        password="adminpass123",
        user_type="admin",
        is_staff=True,
        is_superuser=True
    )


@pytest.fixture
def center():
    return Center.objects.create(name="Lekki Center", code="LEK")


@pytest.fixture
def other_center():
    return Center.objects.create(name="Yaba Center", code="YAB")


@pytest.fixture
def school_class(center, teacher_user):
    return Class.objects.create(name="Level 1A", center=center, teacher=teacher_user)


@pytest.fixture
def create_student(center, create_user):
    """Factory fixture for students; pass ``with_user=False`` for a roster-only student"""
    def _create_student(center=center, classes=(), with_user=True, **kwargs):
        number = next(_sequence)
        user = create_user(email=f"student{number}@example.com") if with_user else None
        student = Student.objects.create(
            user=user,
            first_name=kwargs.pop('first_name', f"Student{number}"),
            last_name=kwargs.pop('last_name', "Test"),
            enrollment_number=kwargs.pop('enrollment_number', f"ENR{number:05d}"),
            center=center,
            **kwargs
        )
        if classes:
            student.classes.set(classes)
        return student
    return _create_student


@pytest.fixture
def student(create_student):
    return create_student()


@pytest.fixture
def student_user(student):
    return student.user


def mc_question(marks=2, correct=1, **kwargs):
    question = {
        'question_text': 'Pick the right option',
        'question_type': 'multiple_choice',
        'marks': marks,
        'options': ['A', 'B', 'C', 'D'],
        'correct_answer': {'index': correct},
    }
    question.update(kwargs)
    return question


def tf_question(marks=1, value=True, **kwargs):
    question = {
        'question_text': 'True or false?',
        'question_type': 'true_false',
        'marks': marks,
        'options': ['True', 'False'],
        'correct_answer': {'value': value},
    }
    question.update(kwargs)
    return question


def short_question(marks=1, answers=('Paris',), **kwargs):
    question = {
        'question_text': 'Capital of France?',
        'question_type': 'short_answer',
        'marks': marks,
        'correct_answer': {'answers': list(answers)},
    }
    question.update(kwargs)
    return question


def essay_question(marks=5, **kwargs):
    question = {
        'question_text': 'Write about your weekend',
        'question_type': 'essay',
        'marks': marks,
        'word_limit': 200,
    }
    question.update(kwargs)
    return question


@pytest.fixture
def question_builders():
    """Plain-dict question definitions by type"""
    return {
        'multiple_choice': mc_question,
        'true_false': tf_question,
        'short_answer': short_question,
        'essay': essay_question,
    }


@pytest.fixture
def create_test(center, teacher_user):
    """
    Factory fixture for tests built through the authoring service.

    Defaults to an active, timed multiple-choice/true-false test worth 3 marks.
    """
    def _create_test(questions=None, active=True, **meta):
        meta.setdefault('name', f"Test {next(_sequence)}")
        meta.setdefault('test_type', 'multiple_choice')
        meta.setdefault('center', center)
        meta.setdefault('duration_minutes', 30)
        test = TestDefinitionService.create_test(
            meta,
            questions=questions if questions is not None else [mc_question(), tf_question()],
            author=teacher_user,
        )
        if active:
            test = TestDefinitionService.activate(test)
        return test
    return _create_test


@pytest.fixture
def assign_to(teacher_user):
    """Assign a test directly to a student, without the fan-out service"""
    def _assign_to(test, student, **kwargs):
        return Assignment.objects.create(
            test=test,
            assigned_to_type='student',
            assigned_to_id=student.pk,
            assigned_by=teacher_user,
            **kwargs
        )
    return _assign_to


@pytest.fixture
def teacher_client(api_client, teacher_user):
    """API client authenticated as a teacher"""
    api_client.force_authenticate(user=teacher_user)
    return api_client


@pytest.fixture
def student_client(api_client, student_user):
    """API client authenticated as the default student"""
    api_client.force_authenticate(user=student_user)
    return api_client
