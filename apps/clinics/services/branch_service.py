# apps/clinics/services/branch_service.py

import logging

from django.db import transaction
from rest_framework.exceptions import NotFound

from apps.clinics.models import Branch, Clinic, Sequence, clinic_scope
from core.exceptions import LastBranchProtected
from core.tenancy import scoped_delete

logger = logging.getLogger(__name__)


def next_clinic_code() -> str:
    # CL-1001, CL-1002, ...
    return f"CL-{Sequence.next_value('clinic', start=1000)}"


def next_branch_code(clinic_id) -> str:
    return f"BID-{Sequence.next_value(clinic_scope(clinic_id, 'branch')):03d}"


# ======================================================
# CREATE
# ======================================================

@transaction.atomic
def create_branch(context, **data) -> Branch:
    """
    Create a branch inside the context's clinic.

    The creating principal is granted access to the new branch and,
    if it had no default branch yet, the branch becomes its default.
    """
    creator = context.principal

    branch = Branch.objects.create(
        clinic_id=context.clinic_id,
        code=next_branch_code(context.clinic_id),
        created_by=creator,
        **data,
    )

    creator.allowed_branches.add(branch)
    if creator.default_branch_id is None:
        type(creator).objects.filter(pk=creator.pk).update(default_branch=branch)
        creator.default_branch = branch

    logger.info(f"Branch {branch.code} created in clinic {context.clinic_id} by user {creator.pk}")
    return branch


# ======================================================
# DELETE
# ======================================================

@transaction.atomic
def delete_branch(context, pk) -> None:
    """
    Delete a branch and detach it from every user of the clinic.

    Refused when it is the clinic's last branch. The clinic row is
    locked so two concurrent deletes cannot both pass the count.
    """
    from apps.accounts.models import User

    Clinic.objects.select_for_update().filter(pk=context.clinic_id).first()

    branches = Branch.objects.filter(clinic_id=context.clinic_id)
    if not branches.filter(pk=pk).exists():
        raise NotFound()

    if branches.count() <= 1:
        raise LastBranchProtected()

    User.allowed_branches.through.objects.filter(
        branch_id=pk,
        user__clinic_id=context.clinic_id,
    ).delete()
    User.objects.filter(
        clinic_id=context.clinic_id,
        default_branch_id=pk,
    ).update(default_branch=None)

    scoped_delete(branches, pk)
    logger.info(f"Branch {pk} deleted from clinic {context.clinic_id} by user {context.principal.pk}")
