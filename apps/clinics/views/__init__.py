from .branch import BranchViewSet
from .clinic import ClinicProfileView
