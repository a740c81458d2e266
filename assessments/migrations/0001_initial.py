import assessments.models.user
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('email', models.EmailField(max_length=254, unique=True, verbose_name='email address')),
                ('user_type', models.CharField(choices=[('student', 'Student'), ('teacher', 'Teacher'), ('superuser', 'Superuser'), ('admin', 'Admin')], default='student', max_length=20, verbose_name='user type')),
                ('first_name', models.CharField(blank=True, max_length=100, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=100, verbose_name='last name')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('is_staff', models.BooleanField(default=False, verbose_name='staff status')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'User',
                'verbose_name_plural': 'Users',
                'ordering': ['-date_joined'],
            },
            managers=[
                ('objects', assessments.models.user.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Center',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150, verbose_name='center name')),
                ('code', models.CharField(max_length=20, unique=True, verbose_name='center code')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
            ],
            options={
                'verbose_name': 'Center',
                'verbose_name_plural': 'Centers',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Class',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='class name')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('center', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='classes', to='assessments.center', verbose_name='center')),
                ('teacher', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='classes_taught', to=settings.AUTH_USER_MODEL, verbose_name='teacher')),
            ],
            options={
                'verbose_name': 'Class',
                'verbose_name_plural': 'Classes',
                'ordering': ['center', 'name'],
                'unique_together': {('center', 'name')},
            },
        ),
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=100, verbose_name='first name')),
                ('last_name', models.CharField(max_length=100, verbose_name='last name')),
                ('enrollment_number', models.CharField(max_length=30, unique=True, verbose_name='enrollment number')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('center', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='students', to='assessments.center', verbose_name='center')),
                ('classes', models.ManyToManyField(blank=True, related_name='students', to='assessments.class', verbose_name='classes')),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='student_profile', to=settings.AUTH_USER_MODEL, verbose_name='user')),
            ],
            options={
                'verbose_name': 'Student',
                'verbose_name_plural': 'Students',
                'ordering': ['last_name', 'first_name'],
            },
        ),
        migrations.CreateModel(
            name='Test',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='test name')),
                ('test_type', models.CharField(choices=[('multiple_choice', 'Multiple Choice'), ('essay', 'Essay'), ('short_answer', 'Short Answer'), ('true_false', 'True/False'), ('form_filling', 'Form Filling'), ('reading_passage', 'Reading Passage'), ('writing', 'Writing'), ('matching', 'Matching')], default='multiple_choice', max_length=20, verbose_name='test type')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('instructions', models.TextField(blank=True, verbose_name='instructions')),
                ('subject', models.CharField(blank=True, max_length=100, verbose_name='subject')),
                ('duration_minutes', models.PositiveIntegerField(blank=True, null=True, verbose_name='duration (minutes)')),
                ('total_marks', models.PositiveIntegerField(default=0, verbose_name='total marks')),
                ('passing_marks', models.PositiveIntegerField(default=0, verbose_name='passing marks')),
                ('is_timed', models.BooleanField(default=True, verbose_name='timed')),
                ('shuffle_questions', models.BooleanField(default=False, verbose_name='shuffle questions')),
                ('show_results_immediately', models.BooleanField(default=True, verbose_name='show results immediately')),
                ('allow_retake', models.BooleanField(default=False, verbose_name='allow retake')),
                ('max_retakes', models.PositiveSmallIntegerField(default=1, verbose_name='max retakes')),
                ('assignment_type', models.CharField(choices=[('all_students', 'All Students'), ('specific_classes', 'Specific Classes'), ('specific_students', 'Specific Students')], default='specific_students', max_length=20, verbose_name='assignment type')),
                ('is_active', models.BooleanField(default=False, verbose_name='active')),
                ('start_date', models.DateTimeField(blank=True, null=True, verbose_name='available from')),
                ('end_date', models.DateTimeField(blank=True, null=True, verbose_name='available until')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('center', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tests', to='assessments.center', verbose_name='center')),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_tests', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
            ],
            options={
                'verbose_name': 'Test',
                'verbose_name_plural': 'Tests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['center', 'is_active'], name='test_center_active_idx'),
                    models.Index(fields=['test_type'], name='test_type_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Passage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200, verbose_name='title')),
                ('content', models.TextField(verbose_name='content')),
                ('word_count', models.PositiveIntegerField(blank=True, null=True, verbose_name='word count')),
                ('difficulty_level', models.CharField(choices=[('easy', 'Easy'), ('medium', 'Medium'), ('hard', 'Hard')], default='medium', max_length=10, verbose_name='difficulty level')),
                ('passage_order', models.PositiveIntegerField(default=1, verbose_name='passage order')),
                ('test', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='passages', to='assessments.test', verbose_name='test')),
            ],
            options={
                'verbose_name': 'Passage',
                'verbose_name_plural': 'Passages',
                'ordering': ['test', 'passage_order'],
            },
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('question_text', models.TextField(verbose_name='question text')),
                ('question_type', models.CharField(choices=[('multiple_choice', 'Multiple Choice'), ('true_false', 'True/False'), ('short_answer', 'Short Answer'), ('form_filling', 'Form Filling'), ('matching', 'Matching'), ('essay', 'Essay'), ('writing', 'Writing')], max_length=20, verbose_name='question type')),
                ('marks', models.PositiveSmallIntegerField(default=1, verbose_name='marks')),
                ('options', models.JSONField(blank=True, null=True, verbose_name='options')),
                ('correct_answer', models.JSONField(blank=True, null=True, verbose_name='correct answer')),
                ('explanation', models.TextField(blank=True, verbose_name='explanation')),
                ('word_limit', models.PositiveIntegerField(blank=True, null=True, verbose_name='word limit')),
                ('is_required', models.BooleanField(default=True, verbose_name='required')),
                ('question_order', models.PositiveIntegerField(default=1, verbose_name='question order')),
                ('passage', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='questions', to='assessments.passage', verbose_name='passage')),
                ('test', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='assessments.test', verbose_name='test')),
            ],
            options={
                'verbose_name': 'Question',
                'verbose_name_plural': 'Questions',
                'ordering': ['test', 'question_order', 'id'],
                'indexes': [
                    models.Index(fields=['test', 'question_order'], name='question_test_order_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Assignment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('assigned_to_type', models.CharField(choices=[('student', 'Student'), ('class', 'Class')], max_length=10, verbose_name='assigned to type')),
                ('assigned_to_id', models.PositiveIntegerField(verbose_name='assigned to id')),
                ('due_date', models.DateTimeField(blank=True, null=True, verbose_name='due date')),
                ('is_mandatory', models.BooleanField(default=True, verbose_name='mandatory')),
                ('notes', models.TextField(blank=True, verbose_name='notes')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('assigned_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='test_assignments_made', to=settings.AUTH_USER_MODEL, verbose_name='assigned by')),
                ('test', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assignments', to='assessments.test', verbose_name='test')),
            ],
            options={
                'verbose_name': 'Assignment',
                'verbose_name_plural': 'Assignments',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['assigned_to_type', 'assigned_to_id'], name='assignment_target_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('test', 'assigned_to_type', 'assigned_to_id'), name='unique_assignment_target'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Submission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('not_started', 'Not Started'), ('in_progress', 'In Progress'), ('submitted', 'Submitted'), ('graded', 'Graded')], default='not_started', max_length=20, verbose_name='status')),
                ('attempt_number', models.PositiveSmallIntegerField(default=1, verbose_name='attempt number')),
                ('started_at', models.DateTimeField(blank=True, null=True, verbose_name='started at')),
                ('submitted_at', models.DateTimeField(blank=True, null=True, verbose_name='submitted at')),
                ('graded_at', models.DateTimeField(blank=True, null=True, verbose_name='graded at')),
                ('graded_by_type', models.CharField(blank=True, max_length=20, verbose_name='graded by type')),
                ('total_marks', models.PositiveIntegerField(default=0, verbose_name='total marks')),
                ('passing_marks', models.PositiveIntegerField(default=0, verbose_name='passing marks')),
                ('auto_score', models.DecimalField(blank=True, decimal_places=2, max_digits=7, null=True, verbose_name='auto score')),
                ('score', models.DecimalField(blank=True, decimal_places=2, max_digits=7, null=True, verbose_name='score')),
                ('percentage', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name='percentage')),
                ('passed', models.BooleanField(blank=True, null=True, verbose_name='passed')),
                ('question_order', models.JSONField(blank=True, null=True, verbose_name='question order')),
                ('question_marks', models.JSONField(blank=True, default=dict, verbose_name='question marks')),
                ('draft_answers', models.JSONField(blank=True, default=dict, verbose_name='draft answers')),
                ('time_taken_seconds', models.PositiveIntegerField(blank=True, null=True, verbose_name='time taken (seconds)')),
                ('was_forced', models.BooleanField(default=False, verbose_name='forced submission')),
                ('feedback', models.TextField(blank=True, verbose_name='feedback')),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True, verbose_name='ip address')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('graded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='graded_submissions', to=settings.AUTH_USER_MODEL, verbose_name='graded by')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='submissions', to='assessments.student', verbose_name='student')),
                ('test', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='submissions', to='assessments.test', verbose_name='test')),
            ],
            options={
                'verbose_name': 'Submission',
                'verbose_name_plural': 'Submissions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['test', 'status'], name='submission_test_status_idx'),
                    models.Index(fields=['student', 'status'], name='submission_student_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status__in', ['not_started', 'in_progress'])), fields=('student', 'test'), name='one_open_submission_per_student_test'),
                    models.UniqueConstraint(fields=('student', 'test', 'attempt_number'), name='unique_submission_attempt'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Answer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('student_answer', models.JSONField(blank=True, null=True, verbose_name='student answer')),
                ('is_correct', models.BooleanField(blank=True, null=True, verbose_name='is correct')),
                ('marks_awarded', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True, verbose_name='marks awarded')),
                ('feedback', models.TextField(blank=True, verbose_name='feedback')),
                ('is_manually_graded', models.BooleanField(default=False, verbose_name='manually graded')),
                ('graded_at', models.DateTimeField(blank=True, null=True, verbose_name='graded at')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='answers', to='assessments.question', verbose_name='question')),
                ('submission', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='answers', to='assessments.submission', verbose_name='submission')),
            ],
            options={
                'verbose_name': 'Answer',
                'verbose_name_plural': 'Answers',
                'ordering': ['submission', 'question__question_order', 'question_id'],
                'unique_together': {('submission', 'question')},
            },
        ),
    ]
