"""Chart-of-accounts domain service and tree rendering."""

import logging
from collections import defaultdict
from typing import Iterable, Optional, Union

from switchbooks.database.base import Database
from switchbooks.domain.entities import AccountType, ChartAccount, ChartTreeNode
from switchbooks.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    chart_account_name_not_found,
    chart_account_not_found,
    dependency_summary,
)
from switchbooks.domain.posting import coerce_account_type

logger = logging.getLogger(__name__)


def _sort_name(account: ChartAccount) -> str:
    return account.name.casefold()


def order_chart_tree(accounts: Iterable[ChartAccount]) -> list[ChartTreeNode]:
    """Flatten accounts into rendering order.

    Roots come first sorted by type then name, each immediately followed by
    its children sorted by name. An account whose parent is not in the list
    is treated as a root.
    """
    accounts = list(accounts)
    by_id = {account.id: account for account in accounts}
    children: dict[int, list[ChartAccount]] = defaultdict(list)
    roots = []
    for account in accounts:
        if account.parent_id is not None and account.parent_id in by_id:
            children[account.parent_id].append(account)
        else:
            roots.append(account)

    roots.sort(key=lambda a: (a.type.value, _sort_name(a), a.id))

    result: list[ChartTreeNode] = []

    def visit(account: ChartAccount, depth: int, parent_name: Optional[str]) -> None:
        result.append(ChartTreeNode(account=account, depth=depth, parent_name=parent_name))
        for child in sorted(children.get(account.id, []), key=lambda a: (_sort_name(a), a.id)):
            visit(child, depth + 1, account.name)

    for root in roots:
        visit(root, 0, None)
    return result


def _node_matches(node: ChartTreeNode, needle: str) -> bool:
    account = node.account
    candidates = [account.name, account.type.value, account.subtype or ""]
    if node.parent_name:
        candidates.append(node.parent_name)
    return any(needle in value.casefold() for value in candidates)


def search_chart_tree(accounts: Iterable[ChartAccount], query: str) -> list[ChartTreeNode]:
    """Filter the rendered tree by a case-insensitive substring.

    A row matches on its own name, type or subtype, or on its parent's name,
    so searching for a parent also returns all of its children.
    """
    nodes = order_chart_tree(accounts)
    needle = (query or "").strip().casefold()
    if not needle:
        return nodes
    return [node for node in nodes if _node_matches(node, needle)]


class ChartOfAccountsService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize chart-of-accounts service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        account_type: Union[AccountType, str],
        subtype: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> int:
        """Create a chart-of-accounts row.

        Args:
            name: Account name
            account_type: One of Asset, Liability, Equity, Revenue, COGS, Expense
            subtype: Optional free-form subtype
            parent_id: Optional parent account (must be a root of the same type)

        Returns:
            Chart account ID

        Raises:
            ValidationError: If the name is empty, the type unknown or the parent invalid
            NotFoundError: If the parent does not exist
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        account_type = coerce_account_type(account_type)
        self._validate_parent(account_type, parent_id)

        account_id = self.db.create_chart_account(
            name=name,
            account_type=account_type.value,
            subtype=subtype or None,
            parent_id=parent_id,
        )
        logger.info("Created chart account %s '%s' (%s)", account_id, name, account_type.value)
        return account_id

    def _validate_parent(
        self,
        account_type: AccountType,
        parent_id: Optional[int],
        account_id: Optional[int] = None,
    ) -> None:
        if parent_id is None:
            return
        if account_id is not None and parent_id == account_id:
            raise ValidationError("An account cannot be its own parent")

        parent = self.db.get_chart_account(parent_id)
        if parent is None:
            raise NotFoundError(f"Parent account {parent_id} not found")
        if parent.parent_id is not None:
            raise ValidationError(
                f"'{parent.name}' is a subaccount; only root accounts can have children"
            )
        if parent.type != account_type:
            raise ValidationError(
                f"Parent account '{parent.name}' is {parent.type.value}, "
                f"but the account is {account_type.value}"
            )

    def get_account(self, account_id: int) -> Optional[ChartAccount]:
        return self.db.get_chart_account(account_id)

    def require_account(self, account_id: int) -> ChartAccount:
        """Get chart account by ID or raise NotFoundError."""
        account = self.db.get_chart_account(account_id)
        if account is None:
            raise NotFoundError(chart_account_not_found(account_id))
        return account

    def get_account_by_name(self, name: str) -> Optional[ChartAccount]:
        return self.db.get_chart_account_by_name(name)

    def require_account_by_name(self, name: str) -> ChartAccount:
        account = self.db.get_chart_account_by_name(name)
        if account is None:
            raise NotFoundError(chart_account_name_not_found(name))
        return account

    def list_accounts(self) -> list[ChartAccount]:
        return self.db.list_chart_accounts()

    def get_tree(self) -> list[ChartTreeNode]:
        """Get all accounts in rendering order."""
        return order_chart_tree(self.db.list_chart_accounts())

    def search(self, query: str) -> list[ChartTreeNode]:
        """Search accounts by name, type, subtype or parent name."""
        return search_chart_tree(self.db.list_chart_accounts(), query)

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[Union[AccountType, str]] = None,
        subtype: Optional[str] = None,
        parent_id: Optional[int] = None,
        clear_parent: bool = False,
    ) -> None:
        """Update a chart account.

        Args:
            account_id: Account to update
            name: Optional new name
            account_type: Optional new type
            subtype: Optional new subtype (empty string clears it)
            parent_id: Optional new parent
            clear_parent: If True, make the account a root

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the change would break the tree invariants
        """
        account = self.require_account(account_id)
        if clear_parent and parent_id is not None:
            raise ValidationError("Cannot set both parent_id and clear_parent")

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Account name cannot be empty")

        new_type = coerce_account_type(account_type) if account_type is not None else account.type
        if new_type != account.type:
            if account.linked_source_account_id is not None:
                raise ValidationError(
                    "Cannot change the type of an account linked to a source account"
                )
            children = self.db.get_chart_account_usage(account_id)["child account"]
            if children:
                raise ValidationError(
                    f"Cannot change the type of '{account.name}': it has {children} "
                    f"child account{'s' if children != 1 else ''} of type {account.type.value}"
                )

        new_parent_id = None if clear_parent else (parent_id if parent_id is not None else account.parent_id)
        if new_parent_id is not None:
            if parent_id is not None and self.db.get_chart_account_usage(account_id)["child account"]:
                raise ValidationError(
                    f"'{account.name}' has child accounts and cannot become a subaccount"
                )
            self._validate_parent(new_type, new_parent_id, account_id=account_id)

        self.db.update_chart_account(
            account_id=account_id,
            name=name,
            account_type=new_type.value if account_type is not None else None,
            subtype=subtype,
            parent_id=new_parent_id,
            update_parent=clear_parent or parent_id is not None,
        )
        logger.info("Updated chart account %s", account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete a chart account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If anything still references the account
        """
        account = self.require_account(account_id)
        if account.linked_source_account_id is not None:
            raise DependencyError(
                f"Cannot delete '{account.name}': it is linked to a source account. "
                "Delete the source account instead."
            )

        usage = self.db.get_chart_account_usage(account_id)
        if any(usage.values()):
            raise DependencyError(
                f"Cannot delete account '{account.name}': it has {dependency_summary(usage)}. "
                "Please reassign or delete them first."
            )

        self.db.delete_chart_account(account_id)
        logger.info("Deleted chart account %s '%s'", account_id, account.name)
