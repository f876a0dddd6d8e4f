"""Mini README: Reference data access for planning calls.

``client`` talks to the ILP REST service; ``snapshot`` defines the immutable
``ReferenceData`` each planning call works on and an in-memory provider for
offline use.
"""

from .client import IlpClient, ReferenceDataUnavailableError
from .snapshot import InMemoryProvider, ReferenceData, ReferenceProvider

__all__ = [
    "IlpClient",
    "InMemoryProvider",
    "ReferenceData",
    "ReferenceDataUnavailableError",
    "ReferenceProvider",
]
