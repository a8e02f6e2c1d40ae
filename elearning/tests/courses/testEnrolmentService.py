"""
E-Learning Tests - Kurse und Einschreibungen

Test-Suite für den EnrolmentService: Einschreiben, Austragen, Auswahl des
Kursleiters und der Administratoren.

Author: DSP Development Team
Version: 1.0.0
"""

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth.models import User
from django.test import TestCase
from django.utils import timezone

from elearning.courses.models import (
    Course,
    CourseEnrolment,
    CourseRole,
    CourseRoleAssignment,
    EnrolmentInstance,
    get_role_authority,
)
from elearning.courses.services import EnrolmentService


class EnrolmentServiceTests(TestCase):
    # This setup is only executed once for the entire testfile
    @classmethod
    def setUpTestData(cls):
        cls.course = Course.objects.create(fullname="Python Grundlagen", shortname="PY101")
        cls.instance = EnrolmentInstance.objects.create(
            course=cls.course, cost=Decimal("49.00"), currency="EUR"
        )
        cls.student = User.objects.create_user(username="Max", password="Musterpassword")

    def setUp(self):
        self.service = EnrolmentService()

    def test_enrol_user_creates_enrolment_and_role(self):
        enrolment = self.service.enrol_user(self.instance, self.student.pk)

        self.assertEqual(enrolment.status, CourseEnrolment.Status.ACTIVE)
        self.assertIsNone(enrolment.time_start)
        self.assertIsNone(enrolment.time_end)
        assignment = CourseRoleAssignment.objects.get(course=self.course, user=self.student)
        self.assertEqual(assignment.role, CourseRole.STUDENT)
        self.assertEqual(assignment.instance, self.instance)

    def test_enrol_twice_updates_window(self):
        start = timezone.now()
        self.service.enrol_user(self.instance, self.student.pk)
        self.service.enrol_user(
            self.instance, self.student.pk, time_start=start, time_end=start + timedelta(days=10)
        )

        enrolment = CourseEnrolment.objects.get()
        self.assertEqual(enrolment.time_end, start + timedelta(days=10))
        self.assertEqual(CourseRoleAssignment.objects.count(), 1)

    def test_unenrol_removes_enrolment_and_instance_roles(self):
        self.service.enrol_user(self.instance, self.student.pk)
        # Rolle, die nicht über die Instanz vergeben wurde, bleibt erhalten
        CourseRoleAssignment.objects.create(
            course=self.course, user=self.student, role=CourseRole.TEACHER
        )

        self.assertTrue(self.service.unenrol_user(self.instance, self.student.pk))

        self.assertFalse(CourseEnrolment.objects.exists())
        self.assertEqual(
            list(CourseRoleAssignment.objects.values_list("role", flat=True)), ["teacher"]
        )

    def test_unenrol_without_enrolment(self):
        self.assertFalse(self.service.unenrol_user(self.instance, self.student.pk))

    def test_instance_is_enabled(self):
        self.assertTrue(self.instance.is_enabled)

        self.instance.status = EnrolmentInstance.Status.DISABLED
        self.assertFalse(self.instance.is_enabled)

    def test_get_course_context(self):
        context = self.service.get_course_context(self.course.pk)

        self.assertEqual(context.course_id, self.course.pk)
        self.assertIsNone(self.service.get_course_context(99999))


class CourseTeacherTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.course = Course.objects.create(fullname="Statistik", shortname="STAT1")
        cls.editing_a = User.objects.create_user(username="editing_a")
        cls.editing_b = User.objects.create_user(username="editing_b")
        cls.manager = User.objects.create_user(username="manager")
        cls.assistant = User.objects.create_user(username="assistant")

    def setUp(self):
        self.service = EnrolmentService()
        self.context = self.service.get_course_context(self.course.pk)

    def assign(self, user, role):
        CourseRoleAssignment.objects.create(course=self.course, user=user, role=role)

    def test_no_teacher(self):
        self.assign(self.assistant, CourseRole.TEACHER)
        self.assertIsNone(self.service.get_course_teacher(self.context))

    def test_lowest_user_id_wins_between_equal_roles(self):
        self.assign(self.editing_b, CourseRole.EDITING_TEACHER)
        self.assign(self.editing_a, CourseRole.EDITING_TEACHER)

        self.assertEqual(self.service.get_course_teacher(self.context), self.editing_a)

    def test_manager_has_more_authority(self):
        self.assign(self.editing_a, CourseRole.EDITING_TEACHER)
        self.assign(self.manager, CourseRole.MANAGER)

        self.assertEqual(self.service.get_course_teacher(self.context), self.manager)

    def test_inactive_users_are_ignored(self):
        self.assign(self.manager, CourseRole.MANAGER)
        self.assign(self.editing_b, CourseRole.EDITING_TEACHER)
        User.objects.filter(pk=self.manager.pk).update(is_active=False)

        self.assertEqual(self.service.get_course_teacher(self.context), self.editing_b)

    def test_assignment_authority(self):
        self.assertEqual(CourseRoleAssignment(role=CourseRole.MANAGER).authority, 1)
        self.assertEqual(CourseRoleAssignment(role="guest").authority, 99)

    def test_role_authority(self):
        self.assertLess(get_role_authority(CourseRole.MANAGER), get_role_authority("editingteacher"))
        self.assertEqual(get_role_authority("guest"), 99)
        self.assertEqual(get_role_authority(None), 99)


class AdminLookupTests(TestCase):
    def test_admins_are_active_superusers(self):
        first = User.objects.create_superuser("root", "root@example.com", "pw")
        second = User.objects.create_superuser("second", "second@example.com", "pw")
        User.objects.create_superuser("former", "former@example.com", "pw", is_active=False)
        User.objects.create_user(username="staff", is_staff=True)

        service = EnrolmentService()

        self.assertEqual(service.get_admins(), [first, second])
        self.assertEqual(service.get_primary_admin(), first)

    def test_no_admin(self):
        self.assertIsNone(EnrolmentService().get_primary_admin())
