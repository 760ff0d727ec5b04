# apps/inventory/services.py

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound

from core.constants import InventoryAction
from core.exceptions import InsufficientStock
from core.tenancy import scoped_update, stamp

from .models import InventoryItem, InventoryLog

logger = logging.getLogger(__name__)


def write_log(context, item, action, quantity_change, notes=''):
    return InventoryLog.objects.create(
        item=item,
        item_name=item.name,
        action=action,
        quantity_change=quantity_change,
        performed_by=context.principal,
        notes=notes,
        **stamp(context, InventoryLog),
    )


@transaction.atomic
def add_or_restock(context, *, name, quantity, **details):
    """
    Restock the branch's item with the same name (case-insensitive),
    or create it. Either way the movement is logged as Restock.
    """
    items = InventoryItem.objects.for_context(context)
    item = items.select_for_update().filter(name__iexact=name.strip()).first()
    now = timezone.now()

    if item is not None:
        changes = {'quantity': F('quantity') + quantity, 'last_restocked': now}
        if details.get('expiry_date'):
            changes['expiry_date'] = details['expiry_date']
        items.filter(pk=item.pk).update(**changes)
        item.refresh_from_db()
        created = False
    else:
        item = InventoryItem.objects.create(
            name=name.strip(),
            quantity=quantity,
            last_restocked=now,
            created_by=context.principal,
            **details,
            **stamp(context, InventoryItem),
        )
        created = True

    write_log(context, item, InventoryAction.RESTOCK, quantity, 'Initial Add' if created else 'Restock')
    return item, created


@transaction.atomic
def consume(context, item_id, quantity, reason=''):
    """Conditional decrement; never lets stock go negative."""
    items = InventoryItem.objects.for_context(context)
    updated = items.filter(pk=item_id, quantity__gte=quantity).update(quantity=F('quantity') - quantity)

    if not updated:
        if not items.filter(pk=item_id).exists():
            raise NotFound('Item not found.')
        raise InsufficientStock()

    item = items.get(pk=item_id)
    write_log(context, item, InventoryAction.CONSUMED, -quantity, reason or 'Manual Consumption')
    return item


@transaction.atomic
def update_item(context, item_id, changes, user=None):
    """Field edits; a quantity change is recorded as an Adjustment."""
    items = InventoryItem.objects.for_context(context)
    item = items.select_for_update().filter(pk=item_id).first()
    if item is None:
        raise NotFound('Item not found.')

    if user is not None:
        changes['updated_by'] = user
    scoped_update(items, item_id, changes)

    delta = changes['quantity'] - item.quantity if 'quantity' in changes else 0
    item.refresh_from_db()
    if delta:
        write_log(context, item, InventoryAction.ADJUSTMENT, delta, 'Manual adjustment')
    return item
