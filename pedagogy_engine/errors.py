"""
Exceptions raised at the engine's request boundary.
"""


class PedagogyEngineError(Exception):
    """Base exception for pedagogy engine operations."""
    pass


class NotFoundError(PedagogyEngineError):
    """Raised when a requested domain or group does not exist."""
    pass


class DomainNotFoundError(NotFoundError):
    """Raised when no skill graph exists for a domain."""

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Domain '{domain}' not found")


class GroupNotFoundError(NotFoundError):
    """Raised when a learner group does not exist."""

    def __init__(self, group: str):
        self.group = group
        super().__init__(f"Group '{group}' not found")


class InvalidSkillReferenceError(PedagogyEngineError):
    """Raised when target skill IDs are not present in the domain graph."""

    def __init__(self, domain: str, invalid_ids: list[str], valid_ids: list[str]):
        self.domain = domain
        self.invalid_ids = invalid_ids
        self.valid_ids = valid_ids
        super().__init__(
            f"Unknown skill IDs not found in {domain} graph: {', '.join(invalid_ids)}"
        )


class LearnerRecordError(PedagogyEngineError):
    """Raised when a single learner record is missing or cannot be parsed."""

    def __init__(self, learner_id: str, reason: str = ""):
        self.learner_id = learner_id
        self.reason = reason
        message = f"Learner record '{learner_id}' could not be loaded"
        super().__init__(f"{message}: {reason}" if reason else message)
