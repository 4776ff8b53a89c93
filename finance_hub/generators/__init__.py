"""Demo data generators."""

from finance_hub.generators.activity import ActivityGenerator, ActivityReport
from finance_hub.generators.registrant import RegistrantGenerator

__all__ = ["ActivityGenerator", "ActivityReport", "RegistrantGenerator"]
