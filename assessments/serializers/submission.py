from rest_framework import serializers

from assessments.models import Answer, Submission
from assessments.services.submission_lifecycle import SubmissionLifecycle

from .question import StudentQuestionSerializer


class AnswerSerializer(serializers.ModelSerializer):
    """
    Materialized answer with its question. The answer key and explanation
    are only included when the context sets ``reveal_answers``.
    """

    question_text = serializers.CharField(source='question.question_text', read_only=True)
    question_type = serializers.CharField(source='question.question_type', read_only=True)
    question_order = serializers.IntegerField(source='question.question_order', read_only=True)
    marks = serializers.IntegerField(source='question.marks', read_only=True)
    options = serializers.JSONField(source='question.options', read_only=True)
    correct_answer = serializers.SerializerMethodField()
    explanation = serializers.SerializerMethodField()

    class Meta:
        model = Answer
        fields = [
            'id', 'question', 'question_text', 'question_type', 'question_order', 'marks',
            'options', 'correct_answer', 'explanation', 'student_answer', 'is_correct',
            'marks_awarded', 'feedback', 'is_manually_graded', 'graded_at'
        ]
        read_only_fields = fields

    def get_correct_answer(self, obj):
        if not self.context.get('reveal_answers'):
            return None
        return obj.question.correct_answer

    def get_explanation(self, obj):
        if not self.context.get('reveal_answers'):
            return None
        return obj.question.explanation


class SubmissionSerializer(serializers.ModelSerializer):
    test_name = serializers.CharField(source='test.name', read_only=True)
    test_type = serializers.CharField(source='test.test_type', read_only=True)
    student_name = serializers.CharField(source='student.get_full_name', read_only=True)
    enrollment_number = serializers.CharField(source='student.enrollment_number', read_only=True)
    graded_by_name = serializers.CharField(source='graded_by.get_full_name', read_only=True)
    deadline = serializers.SerializerMethodField()
    seconds_remaining = serializers.SerializerMethodField()

    class Meta:
        model = Submission
        fields = [
            'id', 'test', 'test_name', 'test_type', 'student', 'student_name', 'enrollment_number',
            'status', 'attempt_number', 'started_at', 'submitted_at', 'graded_at', 'graded_by',
            'graded_by_name', 'graded_by_type', 'total_marks', 'passing_marks', 'auto_score',
            'score', 'percentage', 'passed', 'time_taken_seconds', 'was_forced', 'feedback',
            'deadline', 'seconds_remaining', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_deadline(self, obj):
        deadline = SubmissionLifecycle.deadline(obj)
        return serializers.DateTimeField().to_representation(deadline) if deadline else None

    def get_seconds_remaining(self, obj):
        return SubmissionLifecycle.seconds_remaining(obj)


class SubmissionDetailSerializer(SubmissionSerializer):
    """Submission with its questions (in presentation order), drafts and answers"""

    answers = serializers.SerializerMethodField()
    questions = serializers.SerializerMethodField()

    class Meta(SubmissionSerializer.Meta):
        fields = SubmissionSerializer.Meta.fields + ['question_order', 'draft_answers', 'questions', 'answers']
        read_only_fields = fields

    def get_answers(self, obj):
        return AnswerSerializer(obj.answers.select_related('question'), many=True, context=self.context).data

    def get_questions(self, obj):
        questions = {q.pk: q for q in obj.test.questions.all()}
        ordered = [questions[pk] for pk in (obj.question_order or []) if pk in questions]
        ordered += [q for pk, q in questions.items() if pk not in set(obj.question_order or [])]
        return StudentQuestionSerializer(ordered, many=True).data


class StartTestSerializer(serializers.Serializer):
    student_id = serializers.IntegerField(required=False, allow_null=True)
    user_type = serializers.CharField(required=False, allow_blank=True)


class SaveProgressSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    answer = serializers.JSONField(allow_null=True)


class SubmitSerializer(serializers.Serializer):
    answers = serializers.DictField(child=serializers.JSONField(allow_null=True), required=False, default=dict)
    forced = serializers.BooleanField(required=False, default=False)


class GradeSubmissionSerializer(serializers.Serializer):
    """Entries are checked by the grading service so a bad one fails the whole call"""

    answer_grades = serializers.ListField(child=serializers.DictField(), allow_empty=True)
    feedback = serializers.CharField(required=False, allow_blank=True, allow_null=True)
