"""
Assignment Authority - where positions are assigned and read back

- base.py: AssignmentAuthority interface
- rpc_client.py: deployed contract over JSON-RPC
- sandbox.py: in-process contract emulation
- strategy.py: pluggable zone assignment
"""

from .base import AssignmentAuthority
from .rpc_client import RpcAuthority, JsonRpcError, encode_call, decode_result, function_selector
from .sandbox import SandboxAuthority, PositionAssigned
from .strategy import (
    AssignmentStrategy,
    WeightedZoneStrategy,
    UniformZoneStrategy,
    ScriptedStrategy,
    create_strategy,
)

__all__ = [
    "AssignmentAuthority",
    "RpcAuthority",
    "JsonRpcError",
    "encode_call",
    "decode_result",
    "function_selector",
    "SandboxAuthority",
    "PositionAssigned",
    "AssignmentStrategy",
    "WeightedZoneStrategy",
    "UniformZoneStrategy",
    "ScriptedStrategy",
    "create_strategy",
]
