import pytest
from django.urls import reverse

from assessments.models import Assignment, Question
from assessments.models import assessment


@pytest.mark.django_db
@pytest.mark.assessment
class TestTestAuthoringApi:
    """Test create/update/delete endpoints"""

    def test_create_with_nested_questions(self, teacher_client, center, question_builders):
        """Creating a test stores its questions and derives totals"""
        url = reverse('api:test-list')
        data = {
            'name': 'Vocabulary Check',
            'test_type': 'multiple_choice',
            'center': center.pk,
            'duration_minutes': 15,
            'questions': [
                question_builders['multiple_choice'](marks=2),
                question_builders['true_false'](marks=3),
            ],
        }
        response = teacher_client.post(url, data, format='json')

        assert response.status_code == 201
        assert response.data['total_marks'] == 5
        assert response.data['passing_marks'] == 3
        assert response.data['is_active'] is False
        assert len(response.data['questions']) == 2
        assert response.data['questions'][0]['correct_answer'] == {'index': 1}

    def test_create_with_invalid_answer_key(self, teacher_client, center, question_builders):
        url = reverse('api:test-list')
        data = {
            'name': 'Broken',
            'test_type': 'multiple_choice',
            'center': center.pk,
            'duration_minutes': 15,
            'questions': [question_builders['multiple_choice'](correct=7)],
        }
        response = teacher_client.post(url, data, format='json')

        assert response.status_code == 400
        assert response.data['code'] == 'validation_error'
        assert not assessment.Test.objects.filter(name='Broken').exists()

    def test_student_cannot_create(self, student_client, center):
        url = reverse('api:test-list')
        response = student_client.post(url, {'name': 'Nope', 'center': center.pk}, format='json')
        assert response.status_code == 403

    def test_unauthenticated_denied(self, api_client):
        response = api_client.get(reverse('api:test-list'))
        assert response.status_code in [401, 403]

    def test_locked_test_edit_conflict(self, teacher_client, create_test, assign_to, student):
        """Editing an active, assigned test needs ?force=true"""
        test = create_test()
        assign_to(test, student)
        url = reverse('api:test-detail', kwargs={'pk': test.pk})

        response = teacher_client.patch(url, {'name': 'Renamed'}, format='json')
        assert response.status_code == 409
        assert response.data['code'] == 'state_conflict'
        assert 'error' in response.data

        response = teacher_client.patch(f"{url}?force=true", {'name': 'Renamed'}, format='json')
        assert response.status_code == 200
        assert response.data['name'] == 'Renamed'

    def test_deactivate_locked_test_allowed(self, teacher_client, create_test, assign_to, student):
        test = create_test()
        assign_to(test, student)

        response = teacher_client.post(reverse('api:test-deactivate', kwargs={'pk': test.pk}))

        assert response.status_code == 200
        assert response.data['is_active'] is False

    def test_activate(self, teacher_client, create_test):
        test = create_test(active=False)
        response = teacher_client.post(reverse('api:test-activate', kwargs={'pk': test.pk}))

        assert response.status_code == 200
        assert response.data['is_active'] is True

    def test_nested_questions_rejected_on_update(self, teacher_client, create_test, question_builders):
        test = create_test(active=False)
        url = reverse('api:test-detail', kwargs={'pk': test.pk})
        response = teacher_client.patch(url, {'questions': [question_builders['essay']()]}, format='json')
        assert response.status_code == 400

    def test_delete(self, teacher_client, create_test):
        test = create_test()
        response = teacher_client.delete(reverse('api:test-detail', kwargs={'pk': test.pk}))

        assert response.status_code == 204
        assert not Question.objects.filter(test_id=test.pk).exists()


@pytest.mark.django_db
@pytest.mark.assessment
class TestTestVisibility:
    """What students see of tests"""

    def test_student_sees_no_answer_keys(self, student_client, create_test):
        test = create_test()
        response = student_client.get(reverse('api:test-detail', kwargs={'pk': test.pk}))

        assert response.status_code == 200
        assert all('correct_answer' not in q for q in response.data['questions'])
        assert response.data['assignments'] == []

    def test_student_lists_only_active_tests_of_own_center(self, student_client, create_test, other_center):
        visible = create_test(name='Visible')
        create_test(name='Draft', active=False)
        create_test(name='Elsewhere', center=other_center)

        response = student_client.get(reverse('api:test-list'))

        assert response.status_code == 200
        assert [row['id'] for row in response.data] == [visible.pk]

    def test_filter_by_type(self, teacher_client, create_test, question_builders):
        create_test(name='Choice')
        create_test(name='Essay', test_type='essay', questions=[question_builders['essay']()])

        response = teacher_client.get(reverse('api:test-list'), {'test_type': 'essay'})

        assert [row['name'] for row in response.data] == ['Essay']


@pytest.mark.django_db
@pytest.mark.assessment
class TestQuestionEndpoints:
    """Per-question and per-passage editing"""

    def test_add_question(self, teacher_client, create_test, question_builders):
        test = create_test(active=False)
        url = reverse('api:test-questions', kwargs={'pk': test.pk})

        response = teacher_client.post(url, question_builders['short_answer'](marks=2), format='json')

        assert response.status_code == 201
        assert response.data['question_order'] == 3
        test.refresh_from_db()
        assert test.total_marks == 5

    def test_list_questions(self, teacher_client, create_test):
        test = create_test()
        response = teacher_client.get(reverse('api:test-questions', kwargs={'pk': test.pk}))

        assert response.status_code == 200
        assert [q['question_type'] for q in response.data] == ['multiple_choice', 'true_false']

    def test_update_question_marks(self, teacher_client, create_test):
        test = create_test(active=False)
        question = test.questions.get(question_type='multiple_choice')

        response = teacher_client.patch(
            reverse('api:question-detail', kwargs={'pk': question.pk}), {'marks': 4}, format='json'
        )

        assert response.status_code == 200
        assert response.data['marks'] == 4
        test.refresh_from_db()
        assert test.total_marks == 5

    def test_delete_question_on_locked_test(self, teacher_client, create_test, assign_to, student):
        test = create_test()
        assign_to(test, student)
        question = test.questions.first()
        url = reverse('api:question-detail', kwargs={'pk': question.pk})

        assert teacher_client.delete(url).status_code == 409
        assert teacher_client.delete(f"{url}?force=true").status_code == 204

    def test_student_cannot_edit_questions(self, student_client, create_test):
        question = create_test().questions.first()
        response = student_client.patch(
            reverse('api:question-detail', kwargs={'pk': question.pk}), {'marks': 9}, format='json'
        )
        assert response.status_code == 403

    def test_add_passage(self, teacher_client, create_test):
        test = create_test(active=False, test_type='reading_passage')
        url = reverse('api:test-passages', kwargs={'pk': test.pk})

        response = teacher_client.post(url, {'title': 'Harbour', 'content': 'Boats leave at dawn.'}, format='json')

        assert response.status_code == 201
        assert response.data['word_count'] == 4
        assert response.data['passage_order'] == 1


@pytest.mark.django_db
@pytest.mark.assessment
class TestAssignApi:
    """Assigning tests"""

    def test_assign_to_class(self, teacher_client, create_test, school_class):
        test = create_test()
        url = reverse('api:test-assign', kwargs={'pk': test.pk})
        data = {'assignments': [{'assigned_to_type': 'class', 'assigned_to_id': school_class.pk}]}

        response = teacher_client.post(url, data, format='json')

        assert response.status_code == 201
        assert response.data['assigned_count'] == 1
        assert Assignment.objects.filter(test=test, assigned_to_type='class').exists()

    def test_all_students_needs_no_id(self, teacher_client, create_test, create_student):
        create_student()
        create_student()
        test = create_test()

        response = teacher_client.post(
            reverse('api:test-assign', kwargs={'pk': test.pk}),
            {'assignments': [{'assigned_to_type': 'all_students'}]},
            format='json',
        )

        assert response.status_code == 201
        assert response.data['assigned_count'] == 2

    def test_missing_target_id(self, teacher_client, create_test):
        response = teacher_client.post(
            reverse('api:test-assign', kwargs={'pk': create_test().pk}),
            {'assignments': [{'assigned_to_type': 'student'}]},
            format='json',
        )
        assert response.status_code == 400

    def test_unknown_student_is_404(self, teacher_client, create_test):
        response = teacher_client.post(
            reverse('api:test-assign', kwargs={'pk': create_test().pk}),
            {'assignments': [{'assigned_to_type': 'student', 'assigned_to_id': 424242}]},
            format='json',
        )
        assert response.status_code == 404
        assert response.data['code'] == 'not_found'

    def test_student_cannot_assign(self, student_client, create_test, student):
        response = student_client.post(
            reverse('api:test-assign', kwargs={'pk': create_test().pk}),
            {'assignments': [{'assigned_to_type': 'student', 'assigned_to_id': student.pk}]},
            format='json',
        )
        assert response.status_code == 403


@pytest.mark.django_db
@pytest.mark.assessment
class TestActivationApi:
    """Turning a test on through create and update"""

    def test_create_active_without_questions(self, teacher_client, center):
        data = {
            'name': 'Empty',
            'test_type': 'essay',
            'center': center.pk,
            'duration_minutes': 15,
            'is_active': True,
        }
        response = teacher_client.post(reverse('api:test-list'), data, format='json')

        assert response.status_code == 400
        assert response.data['code'] == 'validation_error'
        assert not assessment.Test.objects.filter(name='Empty').exists()

    def test_put_active_without_questions(self, teacher_client, create_test, center):
        test = create_test(active=False, questions=[])
        data = {
            'name': test.name,
            'test_type': test.test_type,
            'center': center.pk,
            'duration_minutes': 30,
            'is_active': True,
        }
        response = teacher_client.put(reverse('api:test-detail', kwargs={'pk': test.pk}), data, format='json')

        assert response.status_code == 400
        test.refresh_from_db()
        assert test.is_active is False


@pytest.mark.django_db
@pytest.mark.assessment
class TestOpenAttemptLock:
    """Questions cannot change under a student mid-attempt"""

    def test_edit_while_attempt_in_progress(self, teacher_client, create_test, student, assign_to):
        from assessments.services.submission_lifecycle import SubmissionLifecycle
        test = create_test()
        assign_to(test, student)
        SubmissionLifecycle.start(test, student)
        teacher_client.post(reverse('api:test-deactivate', kwargs={'pk': test.pk}))
        question = test.questions.get(question_type='multiple_choice')

        response = teacher_client.patch(
            reverse('api:question-detail', kwargs={'pk': question.pk}), {'marks': 10}, format='json'
        )

        assert response.status_code == 409
        assert response.data['code'] == 'state_conflict'
