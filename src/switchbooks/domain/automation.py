"""Automation rules: match pending transaction descriptions to categories and payees."""

import logging
from typing import Any, Optional, Union

from switchbooks.database.base import Database
from switchbooks.domain.entities import (
    Automation,
    AutomationType,
    ConditionType,
    PendingTransaction,
)
from switchbooks.domain.errors import NotFoundError, ValidationError, automation_not_found
from switchbooks.domain.transaction import TransactionService

logger = logging.getLogger(__name__)


def _coerce(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Unknown {label} '{value}'. Expected one of: {valid}")


def matches_condition(
    description: str,
    condition_type: Union[ConditionType, str],
    condition_value: str,
) -> bool:
    """Check a description against one rule condition, ignoring case."""
    condition_type = _coerce(ConditionType, condition_type, "condition type")
    text = (description or "").casefold()
    needle = (condition_value or "").casefold()

    if condition_type is ConditionType.CONTAINS:
        return needle in text
    if condition_type is ConditionType.EQUALS:
        return text == needle
    if condition_type is ConditionType.STARTS_WITH:
        return text.startswith(needle)
    return text.endswith(needle)


class AutomationService:
    """Service for managing and applying automation rules."""

    def __init__(self, db: Database):
        """Initialize automation service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)

    def create_automation(
        self,
        name: str,
        automation_type: Union[AutomationType, str],
        condition_type: Union[ConditionType, str],
        condition_value: str,
        action_value: str,
        enabled: bool = True,
        auto_add: bool = False,
    ) -> int:
        """Create an automation rule.

        Args:
            name: Rule name
            automation_type: 'category' or 'payee'
            condition_type: contains, equals, starts_with or ends_with
            condition_value: Text to look for in the description
            action_value: Category or payee name to assign
            enabled: Whether the rule is active
            auto_add: Post matching transactions immediately (category rules only)

        Returns:
            Automation ID

        Raises:
            ValidationError: If a field is empty or an enum value is unknown
        """
        automation_type = _coerce(AutomationType, automation_type, "automation type")
        condition_type = _coerce(ConditionType, condition_type, "condition type")
        for label, value in (("name", name), ("condition value", condition_value), ("action value", action_value)):
            if not (value or "").strip():
                raise ValidationError(f"Automation {label} cannot be empty")
        if auto_add and automation_type is not AutomationType.CATEGORY:
            raise ValidationError("Only category automations can auto-add transactions")

        automation_id = self.db.create_automation(
            name=name.strip(),
            automation_type=automation_type.value,
            condition_type=condition_type.value,
            condition_value=condition_value.strip(),
            action_value=action_value.strip(),
            enabled=enabled,
            auto_add=auto_add,
        )
        logger.info("Created %s automation %s '%s'", automation_type.value, automation_id, name)
        return automation_id

    def get_automation(self, automation_id: int) -> Optional[Automation]:
        return self.db.get_automation(automation_id)

    def list_automations(
        self, automation_type: Optional[Union[AutomationType, str]] = None
    ) -> list[Automation]:
        if automation_type is not None:
            automation_type = _coerce(AutomationType, automation_type, "automation type").value
        return self.db.list_automations(automation_type=automation_type)

    def require_automation(self, automation_id: int) -> Automation:
        automation = self.db.get_automation(automation_id)
        if automation is None:
            raise NotFoundError(automation_not_found(automation_id))
        return automation

    def update_automation(
        self,
        automation_id: int,
        name: Optional[str] = None,
        automation_type: Optional[Union[AutomationType, str]] = None,
        condition_type: Optional[Union[ConditionType, str]] = None,
        condition_value: Optional[str] = None,
        action_value: Optional[str] = None,
        auto_add: Optional[bool] = None,
    ) -> None:
        """Edit an automation rule. Fields left as None keep their value.

        The rule is validated as a whole after the change, exactly like a
        new rule.

        Raises:
            NotFoundError: If the rule does not exist
            ValidationError: If the edited rule would be invalid
        """
        current = self.require_automation(automation_id)

        automation_type = _coerce(
            AutomationType,
            automation_type if automation_type is not None else current.automation_type,
            "automation type",
        )
        condition_type = _coerce(
            ConditionType,
            condition_type if condition_type is not None else current.condition_type,
            "condition type",
        )
        merged = {
            "name": name if name is not None else current.name,
            "condition value": condition_value if condition_value is not None else current.condition_value,
            "action value": action_value if action_value is not None else current.action_value,
        }
        for label, value in merged.items():
            if not (value or "").strip():
                raise ValidationError(f"Automation {label} cannot be empty")
        auto_add = auto_add if auto_add is not None else current.auto_add
        if auto_add and automation_type is not AutomationType.CATEGORY:
            raise ValidationError("Only category automations can auto-add transactions")

        self.db.update_automation(
            automation_id,
            name=merged["name"].strip(),
            automation_type=automation_type.value,
            condition_type=condition_type.value,
            condition_value=merged["condition value"].strip(),
            action_value=merged["action value"].strip(),
            auto_add=auto_add,
        )
        logger.info("Updated automation %s", automation_id)

    def set_enabled(self, automation_id: int, enabled: bool) -> None:
        self.require_automation(automation_id)
        self.db.update_automation_enabled(automation_id, enabled)

    def delete_automation(self, automation_id: int) -> None:
        self.require_automation(automation_id)
        self.db.delete_automation(automation_id)

    def find_match(
        self, description: str, automation_type: Union[AutomationType, str]
    ) -> Optional[Automation]:
        """Return the first enabled rule of a type matching the description."""
        automation_type = _coerce(AutomationType, automation_type, "automation type")
        for automation in self.db.list_automations(
            automation_type=automation_type.value, enabled_only=True
        ):
            if matches_condition(description, automation.condition_type, automation.condition_value):
                return automation
        return None

    def _apply_to_pending(self, pending: PendingTransaction) -> tuple[bool, bool, bool]:
        """Apply the matching payee and category rules to one pending record.

        Returns:
            Whether a payee was assigned, a category was assigned, and the
            record was posted
        """
        assigned_payee = False
        payee_rule = self.find_match(pending.description, AutomationType.PAYEE)
        if payee_rule is not None and pending.payee_id is None:
            payee = self.db.get_payee_by_name(payee_rule.action_value)
            if payee is None:
                raise NotFoundError(
                    f"Automation '{payee_rule.name}': payee '{payee_rule.action_value}' not found"
                )
            self.db.update_pending_payee(pending.id, payee.id)
            assigned_payee = True

        category_rule = self.find_match(pending.description, AutomationType.CATEGORY)
        if category_rule is None:
            return assigned_payee, False, False

        category = self.db.get_chart_account_by_name(category_rule.action_value)
        if category is None:
            raise NotFoundError(
                f"Automation '{category_rule.name}': category "
                f"'{category_rule.action_value}' not found"
            )
        self.db.update_pending_category(pending.id, category.id)
        logger.debug(
            "Automation %s categorized pending transaction %s as '%s'",
            category_rule.id,
            pending.id,
            category.name,
        )

        if not category_rule.auto_add:
            return assigned_payee, True, False
        self.transaction_service.post_pending(pending.id)
        return assigned_payee, True, True

    def apply_automations(self, source_account_id: Optional[int] = None) -> dict[str, Any]:
        """Apply rules to pending transactions that have no category yet.

        Args:
            source_account_id: Optional source account to restrict to

        Returns:
            Dict with statistics:
            - categorized: number of pending transactions given a category
            - payees: number given a payee
            - posted: number posted because the matching rule has auto_add
            - errors: list of error messages
        """
        categorized = 0
        payees = 0
        posted = 0
        errors = []

        for pending in self.db.list_pending_transactions(source_account_id=source_account_id):
            if pending.selected_category_id is not None:
                continue

            # Each record is applied as a whole; a failure leaves it untouched.
            try:
                with self.db.atomic():
                    assigned_payee, assigned_category, added = self._apply_to_pending(pending)
            except ValueError as e:
                logger.warning("Automation failed for pending transaction %s: %s", pending.id, e)
                errors.append(f"Pending {pending.id}: {e}")
                continue

            payees += assigned_payee
            categorized += assigned_category
            posted += added

        logger.info(
            "Automations applied: %d categorized, %d payees, %d posted, %d errors",
            categorized,
            payees,
            posted,
            len(errors),
        )
        return {
            "categorized": categorized,
            "payees": payees,
            "posted": posted,
            "errors": errors,
        }
