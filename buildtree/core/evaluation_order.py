# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Evaluation order constraint: one module is configured before all others.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from .config import DEFAULT_EVALUATION_ROOT
from .exceptions import ConfigurationError
from .project_tree import ProjectTree, normalize_module_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationOrder:
    """Every module in ``dependents`` depends on ``first`` being configured."""

    first: str
    dependents: Tuple[str, ...] = ()

    @property
    def dependencies(self) -> Dict[str, Tuple[str, ...]]:
        return {name: (self.first,) for name in self.dependents}

    def sequence(self) -> Tuple[str, ...]:
        """A valid configuration order: ``first``, then declaration order."""
        return (self.first,) + self.dependents

    def is_satisfied_by(self, order) -> bool:
        """Check that ``first`` precedes every dependent in ``order``."""
        order = list(order)
        if self.first not in order:
            return False
        first_index = order.index(self.first)
        return all(
            name in order and order.index(name) > first_index
            for name in self.dependents
        )

    def to_dict(self):
        return {
            "first": self.first,
            "sequence": list(self.sequence()),
            "dependencies": {k: list(v) for k, v in self.dependencies.items()},
        }


def enforce_evaluation_order(
    tree: ProjectTree, module_name: str = DEFAULT_EVALUATION_ROOT
) -> EvaluationOrder:
    """
    Declare that every other module's configuration depends on ``module_name``.

    Raises:
        ConfigurationError: If the tree has no module of that name
    """
    name = normalize_module_name(module_name)
    if name not in tree:
        raise ConfigurationError(
            f"Evaluation order target module not found: {name}",
            name=name,
            details={"available_modules": tree.names()},
        )

    dependents = tuple(other for other in tree.names() if other != name)
    logger.debug(f"{len(dependents)} modules depend on '{name}' being evaluated first")
    return EvaluationOrder(first=name, dependents=dependents)
