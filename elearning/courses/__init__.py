"""
E-Learning Courses Package

Course catalogue, enrolment instances and the enrolment service used by the
payment integrations.
"""
