"""
E-Learning Application Django Admin Configuration

This module provides the Django admin interface configuration for the
course and enrolment models of the E-Learning system.

The admin interface is organized into logical sections:
- Course Management: Courses with their enrolment instances inline
- Enrolment Management: Enrolments and course role assignments

Features:
- Inline editing of enrolment instances (price, currency, period)
- Filtering and search on enrolments and roles
- Query optimization with select_related

Author: DSP Development Team
Version: 1.0.0
"""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

# Import all models from the central models registry
from .models import (
    Course,
    CourseEnrolment,
    CourseRoleAssignment,
    EnrolmentInstance,
)

# --- Course Management Administration ---


class EnrolmentInstanceInline(admin.TabularInline):
    """Inline admin for the enrolment instances of a course."""

    model = EnrolmentInstance
    extra = 0
    fields = ("enrol", "name", "status", "cost", "currency", "enrol_period", "role")


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    """
    Administration interface for courses.

    Enrolment instances (how a course is sold) are edited inline.
    """

    list_display = ("fullname", "shortname", "is_visible", "enrolment_count")
    list_filter = ("is_visible",)
    search_fields = ("fullname", "shortname")
    inlines = [EnrolmentInstanceInline]

    fieldsets = (
        (_("Basic Information"), {"fields": ("fullname", "shortname")}),
        (_("Visibility"), {"fields": ("is_visible",)}),
    )

    @admin.display(description=_("Enrolments"))
    def enrolment_count(self, obj: Course) -> int:
        return CourseEnrolment.objects.filter(instance__course=obj).count()


@admin.register(EnrolmentInstance)
class EnrolmentInstanceAdmin(admin.ModelAdmin):
    """Administration interface for enrolment instances."""

    list_display = ("__str__", "course", "enrol", "status", "cost", "currency", "enrol_period")
    list_filter = ("enrol", "status", "currency")
    search_fields = ("name", "course__fullname", "course__shortname")

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("course")


# --- Enrolment Management Administration ---


@admin.register(CourseEnrolment)
class CourseEnrolmentAdmin(admin.ModelAdmin):
    """Administration interface for course enrolments."""

    list_display = ("user", "instance", "status", "time_start", "time_end", "created_at")
    list_filter = ("status", "instance__course")
    search_fields = ("user__username", "user__email", "instance__course__shortname")
    readonly_fields = ("created_at", "updated_at")

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        """Optimize queryset for better performance."""
        return super().get_queryset(request).select_related("user", "instance__course")


@admin.register(CourseRoleAssignment)
class CourseRoleAssignmentAdmin(admin.ModelAdmin):
    """Administration interface for course role assignments."""

    list_display = ("user", "course", "role", "instance", "created_at")
    list_filter = ("role", "course")
    search_fields = ("user__username", "course__shortname")
