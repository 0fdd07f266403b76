"""Complaint review by admins."""
from __future__ import annotations

from app.exceptions import InvalidOperationError, UnauthorizedError
from app.models.complaint import Complaint, ComplaintStatus
from app.models.user import User, UserRole
from app.schemas.complaint import ComplaintResponse
from app.services.hosts import to_complaint_response
from app.services.lifecycle import check_transition, decode_enum
from app.store import Store


class ComplaintService:
    def __init__(self, store: Store):
        self.store = store

    def list_complaints(self, actor: User, status: str | None = None) -> list[ComplaintResponse]:
        if actor.role != UserRole.ADMIN:
            raise UnauthorizedError("Only admins can review complaints")
        if status:
            complaints = self.store.find_by(Complaint, status=decode_enum(ComplaintStatus, status, "status"))
        else:
            complaints = self.store.find_by(Complaint)
        return [to_complaint_response(c) for c in complaints]

    def list_my_complaints(self, actor: User) -> list[ComplaintResponse]:
        return [to_complaint_response(c) for c in self.store.find_by(Complaint, user_id=actor.id)]

    def resolve(self, actor: User, complaint_id: int, outcome: str) -> ComplaintResponse:
        complaint = self.store.get(Complaint, complaint_id, "Complaint not found")
        if actor.role != UserRole.ADMIN:
            raise UnauthorizedError("Only admins can review complaints")
        target = decode_enum(ComplaintStatus, outcome, "outcome")
        if target == ComplaintStatus.PENDING:
            raise InvalidOperationError("Outcome must be RESOLVED or REJECTED")
        check_transition("Complaint", complaint.status, target)
        complaint.status = target
        self.store.save(complaint)
        return to_complaint_response(complaint)
