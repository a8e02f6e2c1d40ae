"""
E-Learning Course & Enrolment Models

This module defines the course catalogue and enrolment models of the
E-Learning system. Courses are sold through enrolment instances; a
successful purchase creates a CourseEnrolment and the matching role
assignment inside the course.

Models:
- Course: A course with full and short display names
- EnrolmentInstance: A configured enrolment method (price, currency, period)
- CourseEnrolment: A user's enrolment through an instance
- CourseRoleAssignment: A user's role inside a course

Roles:
- Roles carry an authority order (lower = more authority) used to pick the
  course teacher that receives enrolment notifications.
- Manager and editing teacher hold the "course update" capability.

Author: DSP Development Team
Version: 1.0.0
"""

from datetime import timedelta
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class CourseRole(models.TextChoices):
    MANAGER = "manager", _("Manager")
    EDITING_TEACHER = "editingteacher", _("Teacher")
    TEACHER = "teacher", _("Non-editing teacher")
    STUDENT = "student", _("Student")


# Reihenfolge der Rollen nach Autorität (kleiner = mehr Rechte)
ROLE_AUTHORITY = {
    CourseRole.MANAGER.value: 1,
    CourseRole.EDITING_TEACHER.value: 3,
    CourseRole.TEACHER.value: 4,
    CourseRole.STUDENT.value: 5,
}

COURSE_UPDATE_ROLES = (CourseRole.MANAGER.value, CourseRole.EDITING_TEACHER.value)


class Course(models.Model):
    """
    A course that users can enrol into.

    Attributes:
        fullname: Display name used in messages and transaction records
        shortname: Unique short code, used in message subjects
        is_visible: Catalogue visibility flag
    """

    fullname = models.CharField(
        max_length=254,
        verbose_name=_("Full Name"),
        help_text=_("Full course name shown to learners"),
    )

    shortname = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_("Short Name"),
        help_text=_("Unique short course code"),
    )

    is_visible = models.BooleanField(
        default=True,
        verbose_name=_("Visible"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.fullname

    class Meta:
        verbose_name = _("Course")
        verbose_name_plural = _("Courses")
        ordering = ["fullname"]
        db_table = "elearning_course"


class EnrolmentInstance(models.Model):
    """
    A configured way to enrol into a course.

    An instance belongs to exactly one course and carries its own price,
    currency and enrolment period. Only enabled instances accept payments.

    Attributes:
        course: Course the instance enrols into
        enrol: Enrolment method name (e.g. "payu")
        status: ENABLED or DISABLED
        cost: Price; zero means "use the plugin default cost"
        currency: ISO 4217 currency code the price is expressed in
        enrol_period: Length of the enrolment; empty means open ended
        role: Role granted inside the course on enrolment

    Example:
        >>> instance = EnrolmentInstance.objects.create(
        ...     course=course, cost=Decimal("49.00"), currency="EUR"
        ... )
        >>> instance.is_enabled
        True
    """

    class Status(models.IntegerChoices):
        ENABLED = 0, _("Enabled")
        DISABLED = 1, _("Disabled")

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="enrolment_instances",
        verbose_name=_("Course"),
    )

    enrol = models.CharField(
        max_length=20,
        default="payu",
        verbose_name=_("Enrolment Method"),
    )

    name = models.CharField(max_length=255, blank=True, verbose_name=_("Name"))

    status = models.PositiveSmallIntegerField(
        choices=Status.choices,
        default=Status.ENABLED,
        verbose_name=_("Status"),
    )

    cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        verbose_name=_("Cost"),
        help_text=_("Enrolment price; 0 uses the default cost"),
    )

    currency = models.CharField(
        max_length=3,
        default="USD",
        verbose_name=_("Currency"),
    )

    enrol_period = models.DurationField(
        null=True,
        blank=True,
        verbose_name=_("Enrolment Period"),
        help_text=_("Leave empty for unlimited enrolment"),
    )

    role = models.CharField(
        max_length=20,
        choices=CourseRole.choices,
        default=CourseRole.STUDENT,
        verbose_name=_("Assigned Role"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name or f"{self.enrol} ({self.course.shortname})"

    class Meta:
        verbose_name = _("Enrolment Instance")
        verbose_name_plural = _("Enrolment Instances")
        ordering = ["course", "id"]
        db_table = "elearning_enrolment_instance"

    @property
    def is_enabled(self) -> bool:
        return self.status == self.Status.ENABLED

    @property
    def has_enrol_period(self) -> bool:
        """True when the instance limits enrolments to a fixed duration."""
        return bool(self.enrol_period) and self.enrol_period > timedelta(0)


class CourseEnrolment(models.Model):
    """
    Enrolment of a user through a specific enrolment instance.

    ``time_start``/``time_end`` of None mean "no restriction".
    """

    class Status(models.IntegerChoices):
        ACTIVE = 0, _("Active")
        SUSPENDED = 1, _("Suspended")

    instance = models.ForeignKey(
        EnrolmentInstance,
        on_delete=models.CASCADE,
        related_name="enrolments",
        verbose_name=_("Enrolment Instance"),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="course_enrolments",
        verbose_name=_("User"),
    )

    status = models.PositiveSmallIntegerField(
        choices=Status.choices,
        default=Status.ACTIVE,
        verbose_name=_("Status"),
    )

    time_start = models.DateTimeField(null=True, blank=True, verbose_name=_("Starts"))
    time_end = models.DateTimeField(null=True, blank=True, verbose_name=_("Ends"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.user} in {self.instance.course.shortname}"

    class Meta:
        verbose_name = _("Course Enrolment")
        verbose_name_plural = _("Course Enrolments")
        unique_together = ("instance", "user")
        ordering = ["-created_at"]
        db_table = "elearning_course_enrolment"


class CourseRoleAssignment(models.Model):
    """
    Role of a user inside a course.

    Assignments created by an enrolment instance remember it in ``instance``
    so that unenrolling removes exactly those roles.
    """

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="role_assignments",
        verbose_name=_("Course"),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="course_role_assignments",
        verbose_name=_("User"),
    )

    role = models.CharField(
        max_length=20,
        choices=CourseRole.choices,
        verbose_name=_("Role"),
    )

    instance = models.ForeignKey(
        EnrolmentInstance,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="role_assignments",
        verbose_name=_("Enrolment Instance"),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.user} as {self.get_role_display()} in {self.course.shortname}"

    class Meta:
        verbose_name = _("Course Role Assignment")
        verbose_name_plural = _("Course Role Assignments")
        unique_together = ("course", "user", "role")
        ordering = ["course", "user"]
        db_table = "elearning_course_role_assignment"

    @property
    def authority(self) -> int:
        return get_role_authority(self.role)


def get_role_authority(role: Optional[str]) -> int:
    """Authority rank of a role name, unknown roles sort last."""
    if not role:
        return 99
    return ROLE_AUTHORITY.get(str(role), 99)
