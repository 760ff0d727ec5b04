from .clinic import Clinic
from .branch import Branch
from .sequence import Sequence, clinic_scope

__all__ = ["Clinic", "Branch", "Sequence", "clinic_scope"]
