from rest_framework import serializers

from .submission import SubmissionSerializer


class TestResultsSerializer(serializers.Serializer):
    statistics = serializers.DictField()
    submissions = SubmissionSerializer(many=True)


class StudentResultSerializer(serializers.Serializer):
    submission = SubmissionSerializer()
    score = serializers.DecimalField(max_digits=7, decimal_places=2, allow_null=True)
    percentage = serializers.FloatField(allow_null=True)


class TestSummarySerializer(serializers.Serializer):
    """Per-test roll-up of a student's attempts"""

    test_id = serializers.IntegerField(source='test.id')
    test_name = serializers.CharField(source='test.name')
    test_type = serializers.CharField(source='test.test_type')
    total_attempts = serializers.IntegerField()
    last_attempt_at = serializers.DateTimeField(allow_null=True)
    first_passed_at = serializers.DateTimeField(allow_null=True)
    is_completed = serializers.BooleanField()
    best_percentage = serializers.FloatField(allow_null=True)
    average_percentage = serializers.FloatField(allow_null=True)
