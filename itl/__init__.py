# Core type aliases for ITL's data model.
# Runtime values are plain Python objects: float for numbers, str for strings,
# bool for booleans, the Nil singleton for the absent value, and callables.
#
# Naming guidance:
# - ItlValue: use in evaluator/runtime code to denote evaluated values.
# - Node ids are ints drawn from a process-wide counter (see itl.types.nodes).

from typing import Any

# Runtime value alias
ItlValue = Any
