"""
Job Portal
A job board where seekers apply to jobs posted by employers.

Architecture:
- MongoDB: accounts, jobs, applications and server-side sessions
- Local disk: uploaded avatars and resumes, served under /uploads
- FastAPI: JSON API consumed by the presentation layer
"""

__version__ = "1.0.0"
