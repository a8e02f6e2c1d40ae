from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("fullname", models.CharField(help_text="Full course name shown to learners", max_length=254, verbose_name="Full Name")),
                ("shortname", models.CharField(help_text="Unique short course code", max_length=100, unique=True, verbose_name="Short Name")),
                ("is_visible", models.BooleanField(default=True, verbose_name="Visible")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Course",
                "verbose_name_plural": "Courses",
                "db_table": "elearning_course",
                "ordering": ["fullname"],
            },
        ),
        migrations.CreateModel(
            name="EnrolmentInstance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("enrol", models.CharField(default="payu", max_length=20, verbose_name="Enrolment Method")),
                ("name", models.CharField(blank=True, max_length=255, verbose_name="Name")),
                ("status", models.PositiveSmallIntegerField(choices=[(0, "Enabled"), (1, "Disabled")], default=0, verbose_name="Status")),
                ("cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Enrolment price; 0 uses the default cost", max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))], verbose_name="Cost")),
                ("currency", models.CharField(default="USD", max_length=3, verbose_name="Currency")),
                ("enrol_period", models.DurationField(blank=True, help_text="Leave empty for unlimited enrolment", null=True, verbose_name="Enrolment Period")),
                ("role", models.CharField(choices=[("manager", "Manager"), ("editingteacher", "Teacher"), ("teacher", "Non-editing teacher"), ("student", "Student")], default="student", max_length=20, verbose_name="Assigned Role")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrolment_instances", to="elearning.course", verbose_name="Course")),
            ],
            options={
                "verbose_name": "Enrolment Instance",
                "verbose_name_plural": "Enrolment Instances",
                "db_table": "elearning_enrolment_instance",
                "ordering": ["course", "id"],
            },
        ),
        migrations.CreateModel(
            name="CourseEnrolment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.PositiveSmallIntegerField(choices=[(0, "Active"), (1, "Suspended")], default=0, verbose_name="Status")),
                ("time_start", models.DateTimeField(blank=True, null=True, verbose_name="Starts")),
                ("time_end", models.DateTimeField(blank=True, null=True, verbose_name="Ends")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("instance", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrolments", to="elearning.enrolmentinstance", verbose_name="Enrolment Instance")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="course_enrolments", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Course Enrolment",
                "verbose_name_plural": "Course Enrolments",
                "db_table": "elearning_course_enrolment",
                "ordering": ["-created_at"],
                "unique_together": {("instance", "user")},
            },
        ),
        migrations.CreateModel(
            name="CourseRoleAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("manager", "Manager"), ("editingteacher", "Teacher"), ("teacher", "Non-editing teacher"), ("student", "Student")], max_length=20, verbose_name="Role")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="role_assignments", to="elearning.course", verbose_name="Course")),
                ("instance", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="role_assignments", to="elearning.enrolmentinstance", verbose_name="Enrolment Instance")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="course_role_assignments", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Course Role Assignment",
                "verbose_name_plural": "Course Role Assignments",
                "db_table": "elearning_course_role_assignment",
                "ordering": ["course", "user"],
                "unique_together": {("course", "user", "role")},
            },
        ),
    ]
