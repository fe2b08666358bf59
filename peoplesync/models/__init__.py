from .document import PersonDocument, PersonDocumentPayload
from .migration import MigrationResult, MigrationStatus, VerificationResult
from .person import Person, PersonPayload

__all__ = [
    "MigrationResult",
    "MigrationStatus",
    "Person",
    "PersonDocument",
    "PersonDocumentPayload",
    "PersonPayload",
    "VerificationResult",
]
