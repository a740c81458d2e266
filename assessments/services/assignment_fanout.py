"""
Assignment Fan-Out - turns one "assign this test" request into Assignment rows
"""
import logging

from django.db import transaction
from django.db.models import Q

from assessments.models import Assignment, Submission, Test

from .exceptions import NotFoundError, ValidationError
from .roster import RosterService

logger = logging.getLogger(__name__)

TARGET_TYPES = ['student', 'class', 'all_students']


class AssignmentFanOut:

    @classmethod
    def assign(cls, test: Test, requests, assigned_by=None):
        """
        Create or refresh assignments for ``test``.

        Each request is ``{assigned_to_type, assigned_to_id, due_date,
        is_mandatory, notes}``. ``class`` targets stay a single row and are
        resolved to students when a student starts the test. ``all_students``
        is expanded now, to every active student of the test's center.
        Re-assigning an existing target updates it in place.
        """
        if not requests:
            raise ValidationError("At least one assignment is required")

        rows = []
        with transaction.atomic():
            for position, request in enumerate(requests, start=1):
                target_type = request.get('assigned_to_type')
                if target_type not in TARGET_TYPES:
                    raise ValidationError(f"Assignment {position}: unsupported target type '{target_type}'")

                defaults = {
                    'due_date': request.get('due_date'),
                    'is_mandatory': request.get('is_mandatory', True) is not False,
                    'notes': request.get('notes') or '',
                    'assigned_by': assigned_by,
                }

                if target_type == 'all_students':
                    targets = [('student', s.pk) for s in RosterService.enrolled_students(test.center)]
                elif target_type == 'class':
                    klass = RosterService.get_class(request.get('assigned_to_id'))
                    cls._check_center(test, klass.center_id, f"Class {klass.pk}")
                    targets = [('class', klass.pk)]
                else:
                    student = RosterService.get_student(request.get('assigned_to_id'))
                    cls._check_center(test, student.center_id, f"Student {student.pk}")
                    targets = [('student', student.pk)]

                for assigned_to_type, assigned_to_id in targets:
                    assignment, _ = Assignment.objects.update_or_create(
                        test=test,
                        assigned_to_type=assigned_to_type,
                        assigned_to_id=assigned_to_id,
                        defaults=defaults,
                    )
                    rows.append(assignment)

        logger.info("Test %s assigned to %d targets by %s", test.pk, len(rows), getattr(assigned_by, 'pk', None))
        return rows

    @classmethod
    def _check_center(cls, test, center_id, label):
        if center_id != test.center_id:
            raise ValidationError(f"{label} does not belong to the test's center")

    @classmethod
    def covering_assignment(cls, test: Test, student):
        """The assignment that entitles ``student`` to ``test``, if any"""
        class_ids = RosterService.class_ids_for_student(student)
        return (
            Assignment.objects
            .filter(test=test)
            .filter(
                Q(assigned_to_type='student', assigned_to_id=student.pk) |
                Q(assigned_to_type='class', assigned_to_id__in=class_ids)
            )
            .order_by('due_date')
            .first()
        )

    @classmethod
    def assigned_tests(cls, target_type, target_id, student_id=None):
        """
        Active tests assigned to a student, a class or by a teacher.

        Returns plain dicts: ``{'test', 'assignment', 'attempts',
        'submission_status', 'score', 'submitted_at'}``. Attempt info is only
        filled when a student is in context.
        """
        if target_type == 'student':
            student = RosterService.get_student(target_id)
            class_ids = RosterService.class_ids_for_student(student)
            assignments = Assignment.objects.filter(
                Q(assigned_to_type='student', assigned_to_id=student.pk) |
                Q(assigned_to_type='class', assigned_to_id__in=class_ids)
            )
            student_id = student.pk
        elif target_type == 'class':
            klass = RosterService.get_class(target_id)
            assignments = Assignment.objects.filter(assigned_to_type='class', assigned_to_id=klass.pk)
        elif target_type == 'teacher':
            assignments = Assignment.objects.filter(assigned_by_id=target_id)
        else:
            raise NotFoundError(f"Unknown assignment target type '{target_type}'")

        assignments = assignments.filter(test__is_active=True).select_related('test')

        # One entry per test; a student covered twice keeps the earliest due date.
        by_test = {}
        for assignment in assignments:
            current = by_test.get(assignment.test_id)
            if current is None or cls._due_before(assignment, current):
                by_test[assignment.test_id] = assignment

        results = []
        for assignment in by_test.values():
            entry = {
                'test': assignment.test,
                'assignment': assignment,
                'attempts': None,
                'submission_status': None,
                'score': None,
                'submitted_at': None,
            }
            if student_id is not None:
                attempts = Submission.objects.filter(test_id=assignment.test_id, student_id=student_id)
                latest = attempts.order_by('-attempt_number').first()
                entry['attempts'] = attempts.count()
                if latest:
                    entry['submission_status'] = latest.status
                    entry['score'] = latest.score
                    entry['submitted_at'] = latest.submitted_at
            results.append(entry)

        results.sort(key=lambda e: (e['assignment'].due_date is None, e['assignment'].due_date or 0))
        return results

    @staticmethod
    def _due_before(candidate, current):
        if candidate.due_date is None:
            return False
        return current.due_date is None or candidate.due_date < current.due_date
