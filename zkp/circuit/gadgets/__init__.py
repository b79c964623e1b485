from zkp.circuit.gadgets.boolean import Boolean
from zkp.circuit.gadgets.field import Field

__all__ = ["Boolean", "Field"]
