"""Exception hierarchy for spendwise and the Flask handlers that map it to JSON.

- InvalidArgument: malformed caller input, rejected before any computation
- DataIntegrityFault: the ledger contradicts its own invariants
- CollaboratorUnavailable: a repository read failed
- NotFound: a requested row does not exist for the current owner
"""
import logging

from flask import jsonify

logger = logging.getLogger(__name__)


class SpendwiseError(Exception):
    """Base exception for all application errors."""

    status_code = 500
    code = "error"

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidArgument(SpendwiseError):
    status_code = 400
    code = "invalid_argument"


class DataIntegrityFault(SpendwiseError):
    status_code = 500
    code = "data_integrity"


class UnresolvedCategory(DataIntegrityFault):
    """Raised when an expense or budget points at a category its owner cannot see."""

    def __init__(self, category_id, owner_id):
        self.category_id = category_id
        self.owner_id = owner_id
        super().__init__(f"Category {category_id} is not visible to owner {owner_id}")


class CollaboratorUnavailable(SpendwiseError):
    status_code = 503
    code = "collaborator_unavailable"

    def __init__(self, collaborator: str, reason: str = "unavailable"):
        self.collaborator = collaborator
        self.reason = reason
        super().__init__(f"{collaborator} read failed: {reason}")


class NotFound(SpendwiseError):
    status_code = 404
    code = "not_found"


def register_error_handlers(app):
    @app.errorhandler(SpendwiseError)
    def handle_spendwise_error(err):
        if isinstance(err, DataIntegrityFault):
            logger.error("Ledger integrity fault: %s", err.message)
        elif isinstance(err, CollaboratorUnavailable):
            logger.warning("Collaborator unavailable: %s", err.message)
        return jsonify({"error": err.code, "message": err.message}), err.status_code
