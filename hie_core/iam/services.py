# hie_core/iam/services.py
from __future__ import annotations

import structlog
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from hie_core.common.api.exceptions import AuthorizationError, ConflictError, ValidationError
from hie_core.iam.models import PROVISIONED_ROLES, Profile, Role

logger = structlog.get_logger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class IdentityService:
    """
    Identity creation. Usernames are the normalized email address.
    The profile row is created by the post_save trigger, not here.
    """

    @staticmethod
    @transaction.atomic
    def create_identity(*, email: str, password: str, first_name: str = "", last_name: str = ""):
        email = normalize_email(email)
        if not email:
            raise ValidationError({"email": "This field is required."})
        if not password:
            raise ValidationError({"password": "This field is required."})

        User = get_user_model()
        if User.objects.filter(username=email).exists():
            raise ConflictError(f"An account already exists for {email}.")

        try:
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=first_name or "",
                last_name=last_name or "",
            )
        except IntegrityError:
            raise ConflictError(f"An account already exists for {email}.")
        return user

    @staticmethod
    @transaction.atomic
    def sign_up(*, email: str, password: str, first_name: str = "", last_name: str = "", role: str = Role.MOH):
        """
        Self-service sign-up. Only the MoH role may be self-assigned.
        """
        user = IdentityService.create_identity(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        ProfileService.assign_self_service_role(user_id=user.pk, role=role)
        logger.info("self_service_signup", user_id=user.pk, role=role)
        return user


class ProfileService:
    @staticmethod
    @transaction.atomic
    def assign_self_service_role(*, user_id: int, role: str) -> Profile:
        if role in PROVISIONED_ROLES:
            raise AuthorizationError(f"The {role} role is assigned through registration approval only.")
        if role != Role.MOH:
            raise ValidationError({"role": f"Unknown role: {role}"})

        profile, _ = Profile.objects.select_for_update().get_or_create(user_id=user_id)
        profile.role = role
        profile.facility = None
        profile.save(update_fields=["role", "facility", "updated_at"])
        return profile

    @staticmethod
    @transaction.atomic
    def provision(
        *,
        user_id: int,
        role: str,
        facility_id: int | None,
        first_name: str = "",
        last_name: str = "",
    ) -> Profile:
        """
        Profile upsert used by the privileged approval operation only.
        """
        if role not in PROVISIONED_ROLES:
            raise ValidationError({"role": f"{role} cannot be provisioned through approval."})
        if role == Role.FACILITY_ADMIN and not facility_id:
            raise ValidationError({"facility_id": "FacilityAdmin profiles must be bound to a facility."})

        profile, _ = Profile.objects.update_or_create(
            user_id=user_id,
            defaults={
                "role": role,
                "facility_id": facility_id if role == Role.FACILITY_ADMIN else None,
                "first_name": first_name or "",
                "last_name": last_name or "",
            },
        )
        return profile


def split_display_name(name: str) -> tuple[str, str]:
    parts = (name or "").strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]
