from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from .models import (
    User,
    Center,
    Class,
    Student,
    Test,
    Question,
    Passage,
    Assignment,
    Submission,
    Answer
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for custom User model"""

    list_display = ['email', 'user_type', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['user_type', 'is_active', 'is_staff', 'date_joined']
    search_fields = ['email', 'first_name', 'last_name']
    ordering = ['-date_joined']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('User Info'), {'fields': ('user_type', 'first_name', 'last_name')}),
        (_('Permissions'), {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        (_('Important dates'), {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'user_type', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['date_joined', 'last_login']


@admin.register(Center)
class CenterAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'code']


@admin.register(Class)
class ClassAdmin(admin.ModelAdmin):
    list_display = ['name', 'center', 'teacher', 'is_active']
    list_filter = ['center', 'is_active']
    search_fields = ['name']


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['enrollment_number', 'first_name', 'last_name', 'center', 'is_active']
    list_filter = ['center', 'is_active']
    search_fields = ['enrollment_number', 'first_name', 'last_name']
    filter_horizontal = ['classes']


class QuestionInline(admin.TabularInline):
    """Inline for Question in Test admin"""
    model = Question
    extra = 0
    fields = ['question_order', 'question_type', 'question_text', 'marks', 'passage']


class PassageInline(admin.StackedInline):
    model = Passage
    extra = 0
    fields = ['passage_order', 'title', 'content', 'difficulty_level']


@admin.register(Test)
class TestAdmin(admin.ModelAdmin):
    """Admin interface for Test model"""

    list_display = ['name', 'test_type', 'center', 'total_marks', 'passing_marks', 'is_active', 'created_at']
    list_filter = ['test_type', 'is_active', 'center', 'is_timed']
    search_fields = ['name', 'subject', 'description']
    readonly_fields = ['total_marks', 'created_by', 'created_at', 'updated_at']
    inlines = [PassageInline, QuestionInline]


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ['test', 'assigned_to_type', 'assigned_to_id', 'due_date', 'is_mandatory', 'assigned_by']
    list_filter = ['assigned_to_type', 'is_mandatory']
    search_fields = ['test__name']


class AnswerInline(admin.TabularInline):
    """Inline for Answer in Submission admin"""
    model = Answer
    extra = 0
    fields = ['question', 'student_answer', 'is_correct', 'marks_awarded', 'is_manually_graded']
    readonly_fields = ['question', 'student_answer']


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    """Admin interface for Submission model"""

    list_display = ['student', 'test', 'attempt_number', 'status', 'score', 'total_marks', 'passed', 'submitted_at']
    list_filter = ['status', 'passed', 'was_forced']
    search_fields = ['student__first_name', 'student__last_name', 'student__enrollment_number', 'test__name']
    readonly_fields = [
        'started_at', 'submitted_at', 'graded_at', 'total_marks', 'passing_marks',
        'auto_score', 'question_order', 'time_taken_seconds', 'ip_address'
    ]
    inlines = [AnswerInline]
