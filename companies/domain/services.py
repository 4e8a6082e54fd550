"""
Company domain services.

Parent type rules, tree traversal over the parent-id relation and
operator visibility scopes.
"""
import uuid
from collections import deque
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

from companies.domain.company import Company
from core.domain.exceptions import InvalidCompanyHierarchyError
from core.domain.value_objects import Actor, CompanyType, Role


class CompanyTypePolicy:
    """Which company types may sit under which parents."""

    ALLOWED_PARENTS: Mapping[CompanyType, FrozenSet[CompanyType]] = {
        CompanyType.RESELLER: frozenset(),
        CompanyType.SUB_COMPANY: frozenset({CompanyType.RESELLER, CompanyType.SUB_COMPANY}),
        CompanyType.AGENT: frozenset({CompanyType.RESELLER, CompanyType.SUB_COMPANY}),
        CompanyType.END_CLIENT: frozenset(
            {CompanyType.RESELLER, CompanyType.SUB_COMPANY, CompanyType.AGENT}
        ),
    }

    @classmethod
    def check_parent(cls, company_type: CompanyType, parent: Optional[Company]) -> None:
        """
        Ensure a company of ``company_type`` may hang under ``parent``.

        Args:
            company_type: Type of the child company
            parent: Parent company entity, or None for a root

        Raises:
            InvalidCompanyHierarchyError: If the combination is not allowed
        """
        allowed = cls.ALLOWED_PARENTS[company_type]
        if parent is None:
            if allowed:
                raise InvalidCompanyHierarchyError(
                    f"A company of type {company_type} requires a parent"
                )
            return
        if parent.company_type not in allowed:
            raise InvalidCompanyHierarchyError(
                f"A company of type {company_type} cannot be placed under "
                f"a company of type {parent.company_type}"
            )


class CompanyHierarchy:
    """
    Read-only view of the company tree.

    Built from a ``{company_id: parent_id}`` mapping so that traversal
    never issues per-node queries.
    """

    def __init__(self, parent_of: Mapping[uuid.UUID, Optional[uuid.UUID]]):
        self._parent_of: Dict[uuid.UUID, Optional[uuid.UUID]] = dict(parent_of)
        self._children: Dict[uuid.UUID, List[uuid.UUID]] = {}
        for company_id, parent_id in self._parent_of.items():
            if parent_id is not None:
                self._children.setdefault(parent_id, []).append(company_id)

    def __contains__(self, company_id: uuid.UUID) -> bool:
        return company_id in self._parent_of

    def children(self, company_id: uuid.UUID) -> List[uuid.UUID]:
        return list(self._children.get(company_id, []))

    def descendants(self, company_id: uuid.UUID) -> List[uuid.UUID]:
        """
        All companies below ``company_id``, breadth first.

        Args:
            company_id: Root of the subtree

        Returns:
            Descendant ids, not including ``company_id`` itself
        """
        found: List[uuid.UUID] = []
        seen: Set[uuid.UUID] = {company_id}
        queue = deque(self._children.get(company_id, []))
        while queue:
            current = queue.popleft()
            if current in seen:
                continue
            seen.add(current)
            found.append(current)
            queue.extend(self._children.get(current, []))
        return found

    def subtree(self, company_id: uuid.UUID) -> Set[uuid.UUID]:
        """``company_id`` plus all of its descendants."""
        return {company_id, *self.descendants(company_id)}

    def ancestors(self, company_id: uuid.UUID) -> List[uuid.UUID]:
        """Parents of ``company_id`` from nearest to root."""
        chain: List[uuid.UUID] = []
        current = self._parent_of.get(company_id)
        while current is not None and current not in chain and current != company_id:
            chain.append(current)
            current = self._parent_of.get(current)
        return chain

    def is_within(self, root_id: uuid.UUID, company_id: uuid.UUID) -> bool:
        """True when ``company_id`` is ``root_id`` or lies below it."""
        return company_id == root_id or root_id in self.ancestors(company_id)

    def would_create_cycle(self, company_id: uuid.UUID, new_parent_id: Optional[uuid.UUID]) -> bool:
        if new_parent_id is None:
            return False
        return new_parent_id == company_id or company_id in self.ancestors(new_parent_id)


class VisibilityScope:
    """Company ids an operator may see, derived from role and company."""

    SUBTREE_ROLES = (Role.ADMIN, Role.RESELLER)

    @classmethod
    def company_ids_for(
        cls, actor: Actor, hierarchy: CompanyHierarchy
    ) -> Optional[Set[uuid.UUID]]:
        """
        Resolve the visible company ids for an actor.

        Args:
            actor: Acting operator
            hierarchy: Current company tree

        Returns:
            None when the actor is unrestricted, otherwise the set of
            visible company ids (possibly empty)
        """
        if actor.is_superadmin:
            return None
        if actor.company_id is None:
            return set()
        if actor.role in cls.SUBTREE_ROLES:
            return hierarchy.subtree(actor.company_id)
        return {actor.company_id}

    @staticmethod
    def allows(scope: Optional[Iterable[uuid.UUID]], company_id: Optional[uuid.UUID]) -> bool:
        if scope is None:
            return True
        return company_id is not None and company_id in scope
