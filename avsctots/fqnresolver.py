"""Registry of fully qualified Avro type names."""

import logging
from typing import Optional, Set

from avsctots.errors import AmbiguousReferenceError

logger = logging.getLogger(__name__)


class FqnResolver:
    """Resolves short or qualified type names to their unique full name."""

    def __init__(self) -> None:
        self._fqns: Set[str] = set()

    @property
    def fqns(self) -> Set[str]:
        return set(self._fqns)

    def add(self, namespace: Optional[str], name: str) -> str:
        """Register ``namespace.name`` (or the bare name without a namespace). Idempotent."""
        fqn = f"{namespace}.{name}" if namespace else name
        if fqn not in self._fqns:
            logger.debug("Registered type %s", fqn)
        self._fqns.add(fqn)
        return fqn

    def get(self, name: str) -> Optional[str]:
        """
        Resolve a type name.

        Returns the name itself when it is already a registered full name, otherwise
        the single registered full name whose last segment equals ``name``.

        Returns:
            The full name, or None when nothing matches.

        Raises:
            AmbiguousReferenceError: more than one full name ends in ``name``.
        """
        if name in self._fqns:
            return name
        matching = [fqn for fqn in self._fqns if fqn.split('.')[-1] == name]
        if not matching:
            return None
        if len(matching) > 1:
            raise AmbiguousReferenceError(name, matching)
        return matching[0]

    def __contains__(self, fqn: str) -> bool:
        return fqn in self._fqns

    def __len__(self) -> int:
        return len(self._fqns)
