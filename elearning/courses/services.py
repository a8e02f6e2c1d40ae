"""
Enrolment Service für DSP E-Learning Platform

Service layer for course enrolments. Payment integrations use it to grant
and revoke course access without touching the models directly:

- enrol_user / unenrol_user: manage CourseEnrolment + role assignment
- get_course_context: course scope used for capability queries
- get_course_teacher: highest-authority user allowed to update the course
- get_admins / get_primary_admin: site administrators (active superusers)

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from django.contrib.auth import get_user_model
from django.db import transaction

from .models import (
    COURSE_UPDATE_ROLES,
    Course,
    CourseEnrolment,
    CourseRoleAssignment,
    EnrolmentInstance,
)

logger = logging.getLogger(__name__)
User = get_user_model()


@dataclass(frozen=True)
class CourseContext:
    """Scope of a course for role and capability lookups."""

    course: Course

    @property
    def course_id(self) -> int:
        return self.course.pk


class EnrolmentService:
    """
    Service für Einschreibungen in Kurse.

    All writes run in short ``transaction.atomic()`` blocks so a failing
    role assignment never leaves a half-created enrolment behind.
    """

    def __init__(self):
        self.logger = logger

    def get_course_context(self, course_id: int) -> Optional[CourseContext]:
        course = Course.objects.filter(pk=course_id).first()
        if course is None:
            return None
        return CourseContext(course=course)

    def enrol_user(
        self,
        instance: EnrolmentInstance,
        user_id: int,
        role: Optional[str] = None,
        time_start: Optional[datetime] = None,
        time_end: Optional[datetime] = None,
    ) -> CourseEnrolment:
        """
        Enrol a user through the given instance.

        An existing enrolment is reactivated and gets the new time window.

        Args:
            instance: Enrolment instance to enrol through
            user_id: ID of the user to enrol
            role: Role to assign in the course (defaults to the instance role)
            time_start: Start of the enrolment, None for "immediately"
            time_end: End of the enrolment, None for "unlimited"

        Returns:
            The created or updated CourseEnrolment
        """
        role = role or instance.role

        with transaction.atomic():
            enrolment, created = CourseEnrolment.objects.update_or_create(
                instance=instance,
                user_id=user_id,
                defaults={
                    "status": CourseEnrolment.Status.ACTIVE,
                    "time_start": time_start,
                    "time_end": time_end,
                },
            )
            CourseRoleAssignment.objects.get_or_create(
                course=instance.course,
                user_id=user_id,
                role=role,
                defaults={"instance": instance},
            )

        if created:
            self.logger.info(
                "Enrolled user %s into course %s (instance=%s, role=%s).",
                user_id, instance.course_id, instance.pk, role,
            )
        else:
            self.logger.info(
                "Updated enrolment of user %s in course %s (instance=%s).",
                user_id, instance.course_id, instance.pk,
            )
        return enrolment

    def unenrol_user(self, instance: EnrolmentInstance, user_id: int) -> bool:
        """
        Remove a user's enrolment and the roles it granted.

        Returns:
            True if an enrolment existed, False otherwise
        """
        with transaction.atomic():
            CourseRoleAssignment.objects.filter(
                instance=instance, user_id=user_id
            ).delete()
            deleted, _ = CourseEnrolment.objects.filter(
                instance=instance, user_id=user_id
            ).delete()

        if deleted:
            self.logger.info(
                "Unenrolled user %s from course %s (instance=%s).",
                user_id, instance.course_id, instance.pk,
            )
        return bool(deleted)

    def get_course_teacher(self, context: CourseContext) -> Optional[User]:
        """
        Pick the user who should be told about new enrolments.

        Among active users holding a course-update role in the course, the one
        with the highest role authority wins; ties go to the lowest user id.
        """
        assignments = (
            CourseRoleAssignment.objects.filter(
                course=context.course,
                role__in=COURSE_UPDATE_ROLES,
                user__is_active=True,
            )
            .select_related("user")
            .order_by("user_id")
        )

        best = {}
        for assignment in assignments:
            authority = assignment.authority
            current = best.get(assignment.user_id)
            if current is None or authority < current[0]:
                best[assignment.user_id] = (authority, assignment.user)

        if not best:
            return None

        _, teacher = min(best.values(), key=lambda item: (item[0], item[1].pk))
        return teacher

    def get_admins(self) -> List[User]:
        return list(User.objects.filter(is_superuser=True, is_active=True).order_by("id"))

    def get_primary_admin(self) -> Optional[User]:
        return User.objects.filter(is_superuser=True, is_active=True).order_by("id").first()
