"""
Results Aggregator - read-only statistics recomputed from submissions
"""
from assessments.models import Submission, Test


def _percentage(submission):
    if submission.score is None:
        return None
    if not submission.total_marks:
        return 0.0
    return float(submission.score) / submission.total_marks * 100


def _mean(values):
    return round(sum(values) / len(values), 2) if values else None


class ResultsAggregator:

    @classmethod
    def test_results(cls, test: Test) -> dict:
        submissions = list(
            Submission.objects
            .filter(test=test)
            .select_related('student')
        )
        graded = [s for s in submissions if s.status == 'graded']
        percentages = [_percentage(s) for s in graded]
        times = [s.time_taken_seconds for s in graded if s.time_taken_seconds is not None]

        statistics = {
            'total_submissions': len(graded),
            'passed_count': sum(1 for s in graded if s.score >= s.passing_marks),
            'average_percentage': _mean(percentages),
            'min_percentage': round(min(percentages), 2) if percentages else None,
            'max_percentage': round(max(percentages), 2) if percentages else None,
            'pending_count': sum(1 for s in submissions if s.status == 'submitted'),
            'average_time_seconds': _mean(times),
        }
        graded.sort(key=lambda s: _percentage(s) or 0, reverse=True)
        return {'statistics': statistics, 'submissions': graded}

    @classmethod
    def student_results(cls, student):
        """Submitted and graded attempts, newest first, each with its percentage"""
        submissions = (
            Submission.objects
            .filter(student=student, status__in=['submitted', 'graded'])
            .select_related('test')
            .order_by('-submitted_at', '-attempt_number')
        )
        return [
            {
                'submission': s,
                'score': s.score,
                'percentage': round(_percentage(s), 2) if _percentage(s) is not None else None,
            }
            for s in submissions
        ]

    @classmethod
    def student_summary(cls, student):
        """Per-test roll-up over all attempts: best and average percentage, attempts, first pass"""
        summary = {}
        submissions = (
            Submission.objects
            .filter(student=student)
            .exclude(status__in=['not_started', 'in_progress'])
            .select_related('test')
            .order_by('submitted_at')
        )
        for s in submissions:
            row = summary.setdefault(s.test_id, {
                'test': s.test,
                'total_attempts': 0,
                'percentages': [],
                'last_attempt_at': None,
                'first_passed_at': None,
                'is_completed': False,
            })
            row['total_attempts'] += 1
            row['last_attempt_at'] = s.submitted_at
            if s.status == 'graded':
                row['is_completed'] = True
                row['percentages'].append(_percentage(s))
                if s.passed and row['first_passed_at'] is None:
                    row['first_passed_at'] = s.submitted_at

        rows = []
        for row in summary.values():
            percentages = row.pop('percentages')
            row['best_percentage'] = round(max(percentages), 2) if percentages else None
            row['average_percentage'] = _mean(percentages)
            rows.append(row)
        rows.sort(key=lambda r: r['last_attempt_at'].timestamp() if r['last_attempt_at'] else 0, reverse=True)
        return rows
