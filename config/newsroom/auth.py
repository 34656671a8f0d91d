"""
Authentication state as an explicit value.

Templates and views receive an ``AuthState`` instead of reaching into the
request user. Only three variants matter to the site: anonymous visitors,
signed-in users without dashboard rights, and staff (admin/editor role).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from django.core.exceptions import ObjectDoesNotExist
from django.urls import reverse

from .models import DASHBOARD_ROLES


class AuthKind(enum.Enum):
    UNAUTHENTICATED = 'unauthenticated'
    AUTHENTICATED = 'authenticated'
    ADMIN = 'admin'


@dataclass(frozen=True)
class AuthState:
    kind: AuthKind = AuthKind.UNAUTHENTICATED
    username: str = ''
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.kind is not AuthKind.UNAUTHENTICATED

    @property
    def is_admin(self) -> bool:
        return self.kind is AuthKind.ADMIN

    @classmethod
    def anonymous(cls) -> 'AuthState':
        return cls()

    @classmethod
    def from_user(cls, user: Any) -> 'AuthState':
        """
        Classify a Django user.

        Superusers and profiles with an ``admin`` or ``editor`` role are
        admins; a user without a profile is treated as a plain user.
        """
        if user is None or not getattr(user, 'is_authenticated', False):
            return cls.anonymous()

        try:
            role = user.author_profile.role
        except ObjectDoesNotExist:
            role = None

        if user.is_superuser or role in DASHBOARD_ROLES:
            kind = AuthKind.ADMIN
        else:
            kind = AuthKind.AUTHENTICATED
        return cls(kind=kind, username=user.get_username(), role=role)


@dataclass(frozen=True)
class NavLink:
    label: str
    url: str


def admin_link(auth_state: Optional[AuthState]) -> NavLink:
    """Dashboard link for staff, login link for everybody else."""
    if auth_state is None or not auth_state.is_admin:
        return NavLink(label='Admin Login', url=reverse('login'))
    return NavLink(label='Admin Dashboard', url=reverse('newsroom:dashboard'))
