"""Payee domain service."""

import logging
from typing import Optional

from switchbooks.database.base import Database
from switchbooks.domain.entities import AutomationType, Payee
from switchbooks.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    dependency_summary,
    payee_not_found,
)

logger = logging.getLogger(__name__)


class PayeeService:
    """Service for managing payees."""

    def __init__(self, db: Database):
        self.db = db

    def _clean_name(self, name: str, payee_id: Optional[int] = None) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Payee name cannot be empty")
        existing = self.db.get_payee_by_name(name)
        if existing is not None and existing.id != payee_id:
            raise ConflictError(f"Payee '{name}' already exists")
        return name

    def create_payee(self, name: str) -> int:
        """Create a payee.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a payee with the same name exists
        """
        return self.db.create_payee(self._clean_name(name))

    def get_payee(self, payee_id: int) -> Optional[Payee]:
        return self.db.get_payee(payee_id)

    def require_payee(self, payee_id: int) -> Payee:
        payee = self.db.get_payee(payee_id)
        if payee is None:
            raise NotFoundError(payee_not_found(payee_id))
        return payee

    def get_payee_by_name(self, name: str) -> Optional[Payee]:
        return self.db.get_payee_by_name(name)

    def list_payees(self) -> list[Payee]:
        return self.db.list_payees()

    def rename_payee(self, payee_id: int, name: str) -> None:
        """Rename a payee.

        Payee automations that assign the old name are pointed at the new one.

        Raises:
            NotFoundError: If the payee does not exist
            ValidationError: If the name is empty
            ConflictError: If another payee already has the name
        """
        payee = self.require_payee(payee_id)
        name = self._clean_name(name, payee_id)

        with self.db.atomic():
            self.db.update_payee(payee_id, name)
            for rule in self.db.list_automations(automation_type=AutomationType.PAYEE.value):
                if rule.action_value == payee.name:
                    self.db.update_automation(rule.id, action_value=name)
        logger.info("Renamed payee %s from '%s' to '%s'", payee_id, payee.name, name)

    def delete_payee(self, payee_id: int) -> None:
        """Delete a payee nothing refers to.

        Raises:
            NotFoundError: If the payee does not exist
            DependencyError: If transactions, pending records or journal lines use it
        """
        payee = self.require_payee(payee_id)

        usage = self.db.get_payee_usage(payee_id)
        if any(usage.values()):
            raise DependencyError(
                f"Cannot delete payee '{payee.name}': it is used by {dependency_summary(usage)}. "
                "Please reassign or delete them first."
            )

        self.db.delete_payee(payee_id)
        logger.info("Deleted payee %s '%s'", payee_id, payee.name)
