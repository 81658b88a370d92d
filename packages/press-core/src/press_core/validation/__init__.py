"""
Validation engine: sample selection, comparison, validators and report assembly.

Validators compare a local (source) dataset with the remote (destination)
copy and produce a report of where the two diverge.
"""

from .base import Validator, ValidatorRegistry, ValidatorState, registry
from .compare import CountComparator, FieldComparator
from .report import ReportAssembler
from .sampling import SampleStrategy
from .validators import PostValidator, TaxonomyValidator, UserValidator

registry.register(PostValidator)
registry.register(TaxonomyValidator)
registry.register(UserValidator)

__all__ = [
    "CountComparator",
    "FieldComparator",
    "PostValidator",
    "ReportAssembler",
    "SampleStrategy",
    "TaxonomyValidator",
    "UserValidator",
    "Validator",
    "ValidatorRegistry",
    "ValidatorState",
    "registry",
]
