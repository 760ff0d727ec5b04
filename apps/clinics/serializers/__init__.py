from .clinic import ClinicSerializer
from .branch import BranchSerializer
