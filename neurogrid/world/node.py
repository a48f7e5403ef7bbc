"""ComputeNode — a neuron bound to one grid cell.

Nodes mirror the entity layer position by position.  A node holds a plain
reference to the entity at its coordinate (or ``None`` once that cell has been
cleared) and a receptive field of up to eight neighbouring nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from neurogrid.world.entity import Entity

MAX_RECEPTIVE_FIELD = 8


@dataclass(eq=False)
class ComputeNode:
    """Activation state for a single cell.

    Attributes:
        x: Column position.
        y: Row position.
        weight: Multiplier applied to ``current_value`` on activation.
        bias: Additive offset applied on activation.
        current_value: Latest input value (set from iota propagation).
        activation: Output of the most recent ``activate`` call.
        entity: Entity currently stored at this coordinate, or None.
        receptive_field: Neighbouring nodes this node senses (at most 8).
    """

    x: int
    y: int
    weight: float = 1.0
    bias: float = 0.0
    current_value: float = 0.0
    activation: float = 0.0
    entity: Entity | None = None
    receptive_field: list[ComputeNode] = field(default_factory=list, repr=False)

    @property
    def is_empty(self) -> bool:
        """Return True if no entity is bound to this node."""
        return self.entity is None

    def bind(self, entity: Entity) -> None:
        """Associate ``entity`` with this node."""
        self.entity = entity

    def unbind(self) -> None:
        """Drop the entity reference, leaving the node in the empty state."""
        self.entity = None

    def set_iota(self, value: float) -> None:
        """Store an incoming stimulus as the node's current value."""
        self.current_value = value

    def add_to_receptive_field(self, node: ComputeNode) -> bool:
        """Append ``node`` to the receptive field.

        Returns:
            False if the field was already full and nothing was added.
        """
        if len(self.receptive_field) >= MAX_RECEPTIVE_FIELD:
            return False
        self.receptive_field.append(node)
        return True

    def activate(self) -> float:
        """Compute the logistic activation of ``weight * current_value + bias``.

        Returns:
            The new activation, also stored on ``self.activation``.
        """
        z = self.weight * self.current_value + self.bias
        self.activation = float(1.0 / (1.0 + np.exp(-z)))
        return self.activation
