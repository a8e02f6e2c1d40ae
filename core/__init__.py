"""
Core Package - DSP

Platform-wide integrations shared by the apps (payment providers).
"""
