# apps/clinics/models/sequence.py
from django.db import models, transaction
from django.db.models import F


class Sequence(models.Model):
    """
    Monotonic counter per scope (e.g. "clinic", "clinic:7:branch").
    Incremented atomically, values are never reused.
    """

    scope = models.CharField(max_length=100, unique=True)
    value = models.PositiveBigIntegerField(default=0)

    class Meta:
        db_table = "sequences"

    def __str__(self):
        return f"{self.scope}={self.value}"

    @classmethod
    def next_value(cls, scope, start=0):
        """
        Return the next value of ``scope``; the first call yields start + 1.
        """
        with transaction.atomic():
            sequence, _ = cls.objects.get_or_create(scope=scope, defaults={"value": start})
            cls.objects.filter(pk=sequence.pk).update(value=F("value") + 1)
            return cls.objects.values_list("value", flat=True).get(pk=sequence.pk)


def clinic_scope(clinic_id, name):
    return f"clinic:{clinic_id}:{name}"
