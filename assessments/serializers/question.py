from rest_framework import serializers

from assessments.models import Passage, Question
from assessments.models.assessment import QUESTION_TYPE_CHOICES


class QuestionSerializer(serializers.ModelSerializer):
    """Full question, answer key included. For authors and graders."""

    passage_title = serializers.CharField(source='passage.title', read_only=True)

    class Meta:
        model = Question
        fields = [
            'id',
            'test',
            'passage',
            'passage_title',
            'question_text',
            'question_type',
            'marks',
            'options',
            'correct_answer',
            'explanation',
            'word_limit',
            'is_required',
            'question_order',
        ]
        read_only_fields = fields


class StudentQuestionSerializer(serializers.ModelSerializer):
    """Question as shown to a student taking the test"""

    class Meta:
        model = Question
        fields = [
            'id',
            'passage',
            'question_text',
            'question_type',
            'marks',
            'options',
            'word_limit',
            'is_required',
            'question_order',
        ]
        read_only_fields = fields


class QuestionInputSerializer(serializers.Serializer):
    """
    Incoming question definition.

    Field types are checked here; the answer key shape is checked against the
    question type by the authoring service.
    """

    question_text = serializers.CharField()
    question_type = serializers.ChoiceField(choices=QUESTION_TYPE_CHOICES)
    marks = serializers.IntegerField(required=False, default=1)
    options = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, allow_null=True)
    correct_answer = serializers.JSONField(required=False, allow_null=True)
    explanation = serializers.CharField(required=False, allow_blank=True, default='')
    word_limit = serializers.IntegerField(required=False, allow_null=True)
    is_required = serializers.BooleanField(required=False, default=True)
    passage_index = serializers.IntegerField(required=False, allow_null=True, write_only=True)
    passage = serializers.IntegerField(required=False, allow_null=True, write_only=True)


class QuestionUpdateSerializer(QuestionInputSerializer):
    question_text = serializers.CharField(required=False)
    question_type = serializers.ChoiceField(choices=QUESTION_TYPE_CHOICES, required=False)
    marks = serializers.IntegerField(required=False)
    explanation = serializers.CharField(required=False, allow_blank=True)
    is_required = serializers.BooleanField(required=False)


class PassageSerializer(serializers.ModelSerializer):

    class Meta:
        model = Passage
        fields = ['id', 'test', 'title', 'content', 'word_count', 'difficulty_level', 'passage_order']
        read_only_fields = ['id', 'test', 'passage_order']
        extra_kwargs = {
            'word_count': {'required': False},
        }
