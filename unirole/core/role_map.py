"""
Role definitions and the registry of roles of interest.

The registry resolves functional assignment strings to the roles being
tracked. It is the only place role names are matched, so the counting
engine works purely with Role objects.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd
from loguru import logger

# Trailing comment on a functional assignment, e.g. "DNA polymerase # frameshift"
_COMMENT = re.compile(r"\s*#.*$")
# Separators for multifunctional assignments
_ROLE_SEPARATORS = re.compile(r"\s+/\s+|\s+@\s+|\s*;\s+")


@dataclass(frozen=True)
class Role:
    """A functional role, identified by its ID. The name is carried for reporting."""

    id: str
    name: str = field(compare=False)

    def __str__(self) -> str:
        return f"{self.id} ({self.name})"


def _name_key(name: str) -> str:
    return " ".join(name.split()).lower()


def split_function(function: Optional[str]) -> List[str]:
    """
    Split a functional assignment into its role names.

    Args:
        function: Functional assignment text (may be empty or None)

    Returns:
        List of role names, comments removed
    """
    if not function:
        return []
    text = _COMMENT.sub("", function).strip()
    if not text:
        return []
    return [part.strip() for part in _ROLE_SEPARATORS.split(text) if part.strip()]


class RoleMap:
    """
    Ordered registry of the roles of interest, keyed by role ID.
    """

    def __init__(self, roles: Optional[Iterable[Role]] = None):
        self._roles: Dict[str, Role] = {}
        self._by_name: Dict[str, Role] = {}
        if roles:
            self.register(*roles)

    def register(self, *roles: Role) -> None:
        """
        Add roles to the registry. Re-registering an ID replaces its name.

        When two IDs share a name, the name keeps resolving to the role
        registered first.
        """
        for role in roles:
            previous = self._roles.get(role.id)
            if previous is not None:
                previous_key = _name_key(previous.name)
                if self._by_name.get(previous_key) is previous:
                    del self._by_name[previous_key]
            self._roles[role.id] = role
            key = _name_key(role.name)
            holder = self._by_name.get(key)
            if holder is not None and holder.id != role.id:
                logger.warning(f"Role {role.id} has the same name as role {holder.id}; "
                               f"\"{role.name}\" resolves to {holder.id}")
            else:
                self._by_name[key] = role

    def get(self, role_id: str) -> Optional[Role]:
        """Return the role with the given ID, or None if it is not registered."""
        return self._roles.get(role_id)

    def find_by_name(self, name: str) -> Optional[Role]:
        """Return the role with the given name, ignoring case and spacing."""
        return self._by_name.get(_name_key(name))

    def resolve(self, function: Optional[str]) -> List[Role]:
        """
        Resolve a functional assignment to the registered roles it contains.

        A role named more than once in the same assignment is returned once.
        """
        found: List[Role] = []
        for role_name in split_function(function):
            role = self.find_by_name(role_name)
            if role is not None and role not in found:
                found.append(role)
        return found

    def values(self) -> List[Role]:
        """Return the registered roles in registration order."""
        return list(self._roles.values())

    def __len__(self) -> int:
        return len(self._roles)

    def __contains__(self, role_id: object) -> bool:
        return role_id in self._roles

    def __iter__(self):
        return iter(self._roles.values())

    @classmethod
    def load(cls, role_file: Union[str, Path]) -> "RoleMap":
        """
        Load a role registry from a tab-delimited file.

        Each record holds a role ID and a role name; further columns are ignored.

        Args:
            role_file: Path to the role file

        Returns:
            Populated RoleMap
        """
        role_file = Path(role_file)
        if not role_file.exists():
            raise FileNotFoundError(f"Role file not found: {role_file}")

        role_map = cls()
        try:
            df = pd.read_csv(role_file, sep="\t", header=None, usecols=[0, 1],
                             dtype=str, keep_default_na=False, quoting=3)
        except pd.errors.EmptyDataError:
            logger.warning(f"Role file {role_file} is empty")
            return role_map

        for line_no, (role_id, role_name) in enumerate(df.itertuples(index=False, name=None), start=1):
            role_id = role_id.strip() if isinstance(role_id, str) else ""
            role_name = role_name.strip() if isinstance(role_name, str) else ""
            if not role_id or not role_name:
                raise ValueError(f"Invalid role record at line {line_no} of {role_file}")
            role_map.register(Role(role_id, role_name))

        logger.info(f"Loaded {len(role_map)} roles from {role_file}")
        return role_map
