"""Package operators for executing removal requests.

This module provides the abstract operator interface and the pacman
implementation.
"""

from dude.operators.base import Operator
from dude.operators.pacman import PacmanOperator

__all__ = ["Operator", "PacmanOperator"]
