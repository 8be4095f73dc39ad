"""
Stopping criteria for local search.

Swap refinement runs in passes; a pass either accepts an improving swap or
finds none. The criteria here decide when to stop.
"""

from typing import Dict, Any

from ..base.interfaces import ConvergenceCriterion


class NoImprovement(ConvergenceCriterion):
    """Converged once ``patience`` consecutive passes accepted no swap."""

    def __init__(self, patience: int = 1):
        """
        Args:
            patience: Number of idle passes to wait before declaring convergence
        """
        super().__init__()
        self.patience = patience
        self._idle_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        improved = bool(current_state['improved'])

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'cost': current_state.get('cost'),
            'improved': improved
        })

        if improved:
            self._idle_count = 0
            return False

        self._idle_count += 1
        return self._idle_count >= self.patience

    def reset(self):
        super().reset()
        self._idle_count = 0
