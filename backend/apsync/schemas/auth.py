"""
AP Exam Sync: Auth Request Schemas
===================================

What:  Bodies of the demo signup/login endpoints.

There are no tokens or sessions: both endpoints answer with the public user
record (`PublicUser`), and passwords are compared in plaintext.
"""

from typing import Optional

from apsync.models.document import CamelModel


class SignupRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
