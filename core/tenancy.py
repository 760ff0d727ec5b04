# core/tenancy.py
"""
Tenant/branch context resolution and the scoping helpers every
resource view relies on.

A request runs against exactly one clinic and, except for
clinic-wide administrator operations, exactly one branch.  The
context is derived from the authenticated principal and the
optional ``X-Branch-Id`` header, recomputed on every request.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from django.conf import settings
from django.db import models
from django.utils import timezone
from rest_framework.exceptions import NotFound

from core.constants import Role
from core.exceptions import (
    BranchAccessDenied,
    InvalidBranchHeader,
    MissingBranchContext,
    NoClinicAssigned,
)

logger = logging.getLogger(__name__)


# Never accepted from a client payload on update
IMMUTABLE_FIELDS = frozenset({
    'id', 'pk',
    'clinic', 'clinic_id',
    'branch', 'branch_id',
    'created_at', 'created_by', 'created_by_id',
})


# ======================================================
# REQUEST CONTEXT
# ======================================================

@dataclass(frozen=True)
class RequestContext:
    clinic_id: int
    branch_id: Optional[int]
    principal: Any

    @property
    def is_clinic_wide(self) -> bool:
        return self.branch_id is None

    @property
    def is_administrator(self) -> bool:
        return self.principal.role == Role.ADMINISTRATOR


def branch_header_meta_key() -> str:
    header = getattr(settings, 'BRANCH_HEADER', 'X-Branch-Id')
    return 'HTTP_' + header.upper().replace('-', '_')


def parse_branch_header(request) -> Optional[int]:
    """
    Read the requested branch from the dedicated header.
    Empty header means "no branch requested".
    """
    raw = request.META.get(branch_header_meta_key())
    if raw is None or not str(raw).strip():
        return None

    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidBranchHeader()


def resolve_context(principal, requested_branch_id: Optional[int] = None) -> RequestContext:
    """
    Compute the effective {clinic, branch} for a principal.

    - clinic always comes from the principal, never from the client
    - a requested branch must be in the allowed set; administrators may
      use any branch of their own clinic
    - without a request, the default branch applies; administrators
      without one operate clinic-wide, other roles are rejected
    """
    from apps.clinics.models import Branch

    clinic_id = principal.clinic_id
    if clinic_id is None:
        raise NoClinicAssigned()

    is_admin = principal.role == Role.ADMINISTRATOR

    if requested_branch_id is not None:
        if is_admin:
            allowed = Branch.objects.filter(
                pk=requested_branch_id,
                clinic_id=clinic_id,
            ).exists()
        else:
            allowed = principal.allowed_branches.filter(
                pk=requested_branch_id,
                clinic_id=clinic_id,
            ).exists()

        if not allowed:
            logger.warning(
                f"Branch access denied: user={principal.pk} "
                f"clinic={clinic_id} branch={requested_branch_id}"
            )
            raise BranchAccessDenied()

        return RequestContext(clinic_id, requested_branch_id, principal)

    if principal.default_branch_id is not None:
        return RequestContext(clinic_id, principal.default_branch_id, principal)

    if is_admin:
        return RequestContext(clinic_id, None, principal)

    raise MissingBranchContext()


def resolve_request_context(request) -> RequestContext:
    """Resolve and attach ``request.tenant`` for an authenticated request."""
    context = resolve_context(request.user, parse_branch_header(request))
    request.tenant = context
    return context


# ======================================================
# SCOPING CONTRACT
# ======================================================

def is_branch_scoped(model) -> bool:
    return getattr(model, 'branch_scoped', False)


class TenantQuerySet(models.QuerySet):
    """
    QuerySet helpers applying the tenant filter.

    Models opt in to branch scoping with ``branch_scoped = True``.
    """

    def for_context(self, context: RequestContext, clinic_wide: bool = False):
        qs = self.filter(clinic_id=context.clinic_id)

        if not is_branch_scoped(self.model) or clinic_wide:
            return qs

        if context.branch_id is None:
            raise MissingBranchContext()

        return qs.filter(branch_id=context.branch_id)


TenantManager = models.Manager.from_queryset(TenantQuerySet)


def stamp(context: RequestContext, model) -> Dict[str, Any]:
    """Ownership fields a new record must be created with."""
    fields = {'clinic_id': context.clinic_id}

    if is_branch_scoped(model):
        if context.branch_id is None:
            raise MissingBranchContext()
        fields['branch_id'] = context.branch_id

    return fields


def strip_immutable(data: Dict[str, Any], extra: Iterable[str] = ()) -> Dict[str, Any]:
    blocked = IMMUTABLE_FIELDS | set(extra)
    return {key: value for key, value in data.items() if key not in blocked}


def scoped_update(queryset, pk, changes: Dict[str, Any], extra_immutable: Iterable[str] = ()) -> int:
    """
    Apply ``changes`` with a single statement filtered by id and tenant.
    A row outside the tenant is reported exactly like a missing row.
    """
    changes = strip_immutable(changes, extra_immutable)
    model = queryset.model

    if any(field.name == 'updated_at' for field in model._meta.concrete_fields):
        changes.setdefault('updated_at', timezone.now())

    updated = queryset.filter(pk=pk).update(**changes)
    if not updated:
        raise NotFound()
    return updated


def scoped_delete(queryset, pk) -> None:
    deleted, _ = queryset.filter(pk=pk).delete()
    if not deleted:
        raise NotFound()
