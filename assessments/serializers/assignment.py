from rest_framework import serializers

from assessments.models import Assignment


class AssignmentSerializer(serializers.ModelSerializer):
    test_name = serializers.ReadOnlyField(source='test.name')
    assigned_by_name = serializers.ReadOnlyField(source='assigned_by.get_full_name')

    class Meta:
        model = Assignment
        fields = [
            'id', 'test', 'test_name', 'assigned_to_type', 'assigned_to_id',
            'due_date', 'is_mandatory', 'notes', 'assigned_by', 'assigned_by_name',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class AssignmentRequestSerializer(serializers.Serializer):
    """One target of an assign call"""

    TARGET_CHOICES = [
        ('student', 'Student'),
        ('class', 'Class'),
        ('all_students', 'All Students'),
    ]

    assigned_to_type = serializers.ChoiceField(choices=TARGET_CHOICES)
    assigned_to_id = serializers.IntegerField(required=False, allow_null=True)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    is_mandatory = serializers.BooleanField(required=False, default=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, data):
        if data['assigned_to_type'] != 'all_students' and data.get('assigned_to_id') is None:
            raise serializers.ValidationError({'assigned_to_id': 'This field is required for student and class targets.'})
        return data


class AssignTestSerializer(serializers.Serializer):
    assignments = AssignmentRequestSerializer(many=True, allow_empty=False)


class AssignedTestSerializer(serializers.Serializer):
    """Row of the assigned-tests listing"""

    test_id = serializers.IntegerField(source='test.id')
    name = serializers.CharField(source='test.name')
    test_type = serializers.CharField(source='test.test_type')
    subject = serializers.CharField(source='test.subject')
    duration_minutes = serializers.IntegerField(source='test.duration_minutes')
    total_marks = serializers.IntegerField(source='test.total_marks')
    passing_marks = serializers.IntegerField(source='test.passing_marks')
    is_timed = serializers.BooleanField(source='test.is_timed')
    allow_retake = serializers.BooleanField(source='test.allow_retake')
    max_retakes = serializers.IntegerField(source='test.max_retakes')
    assigned_to_type = serializers.CharField(source='assignment.assigned_to_type')
    assigned_to_id = serializers.IntegerField(source='assignment.assigned_to_id')
    due_date = serializers.DateTimeField(source='assignment.due_date')
    is_mandatory = serializers.BooleanField(source='assignment.is_mandatory')
    assignment_notes = serializers.CharField(source='assignment.notes')
    attempts = serializers.IntegerField(allow_null=True)
    submission_status = serializers.CharField(allow_null=True)
    score = serializers.DecimalField(max_digits=7, decimal_places=2, allow_null=True)
    submitted_at = serializers.DateTimeField(allow_null=True)
