from rest_framework import serializers

from assessments.models import Test

from .assignment import AssignmentRequestSerializer, AssignmentSerializer
from .question import PassageSerializer, QuestionInputSerializer, QuestionSerializer, StudentQuestionSerializer


TEST_FIELDS = [
    'id', 'name', 'test_type', 'description', 'instructions', 'center', 'center_name', 'subject',
    'duration_minutes', 'total_marks', 'passing_marks', 'is_timed', 'shuffle_questions',
    'show_results_immediately', 'allow_retake', 'max_retakes', 'assignment_type', 'is_active',
    'start_date', 'end_date', 'created_by', 'created_by_name', 'created_at', 'updated_at',
]


class TestSerializer(serializers.ModelSerializer):
    """Test metadata with counts, for list views"""

    center_name = serializers.CharField(source='center.name', read_only=True)
    created_by_name = serializers.CharField(source='created_by.get_full_name', read_only=True)
    question_count = serializers.SerializerMethodField()
    submission_count = serializers.SerializerMethodField()

    class Meta:
        model = Test
        fields = TEST_FIELDS + ['question_count', 'submission_count']
        read_only_fields = fields

    def get_question_count(self, obj):
        return obj.questions.count()

    def get_submission_count(self, obj):
        return obj.submissions.count()


class TestDetailSerializer(TestSerializer):
    """
    Test with questions, passages and assignments.

    Pass ``hide_answers=True`` in the context to strip answer keys (student
    view); assignments are omitted in that case too.
    """

    questions = serializers.SerializerMethodField()
    passages = PassageSerializer(many=True, read_only=True)
    assignments = serializers.SerializerMethodField()

    class Meta(TestSerializer.Meta):
        fields = TestSerializer.Meta.fields + ['questions', 'passages', 'assignments']
        read_only_fields = fields

    def get_questions(self, obj):
        questions = obj.questions.order_by('question_order', 'id')
        if self.context.get('hide_answers'):
            return StudentQuestionSerializer(questions, many=True).data
        return QuestionSerializer(questions, many=True).data

    def get_assignments(self, obj):
        if self.context.get('hide_answers'):
            return []
        return AssignmentSerializer(obj.assignments.all(), many=True).data


class TestWriteSerializer(serializers.ModelSerializer):
    """Incoming test definition. Nested lists are only read on create."""

    questions = QuestionInputSerializer(many=True, required=False)
    passages = PassageSerializer(many=True, required=False)
    assignments = AssignmentRequestSerializer(many=True, required=False)
    passing_marks = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    class Meta:
        model = Test
        fields = [
            'name', 'test_type', 'description', 'instructions', 'center', 'subject',
            'duration_minutes', 'passing_marks', 'is_timed', 'shuffle_questions',
            'show_results_immediately', 'allow_retake', 'max_retakes', 'assignment_type',
            'is_active', 'start_date', 'end_date', 'questions', 'passages', 'assignments',
        ]

    def validate(self, data):
        if self.instance is not None:
            for nested in ('questions', 'passages', 'assignments'):
                if nested in data:
                    raise serializers.ValidationError(
                        {nested: f"Use the dedicated {nested} endpoints to change {nested} of an existing test"}
                    )
            if data.get('passing_marks', 0) is None:
                data.pop('passing_marks')
        return data
