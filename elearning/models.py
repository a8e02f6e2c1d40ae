"""
E-Learning Application Models Registry

This module serves as the central models registry for the E-Learning application.
It imports and exposes all models from the logical submodules so they are
properly registered with Django's ORM system.

Architecture:
- courses/: Course catalogue, enrolment instances, enrolments and roles

Author: DSP Development Team
Version: 1.0.0
"""

# Import all course-related models for registration with Django ORM
from .courses.models import *  # noqa: F401,F403
