"""Function-calling (tools) helpers.

Tools are declared as ``{"functionDeclarations": [...]}`` objects; the model
answers with ``functionCall`` parts, and the caller replies with a
``functionResponse`` part built by :func:`create_tool_response`.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.dto import FunctionCallDTO
from ..base.models import GeminiResponse, part_type


def define_tool(
    name: str,
    description: str,
    parameters: Mapping[str, Any],
    required_parameters: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Declare one function the model may call.

    ``parameters`` is a JSON schema; ``required_parameters`` is written to its
    ``required`` key (an empty list when omitted).
    """
    return {
        "functionDeclarations": [
            {
                "name": name,
                "description": description,
                "parameters": {**parameters, "required": list(required_parameters or [])},
            }
        ]
    }


def add_tools_to_params(params: Mapping[str, Any], tools: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return ``params`` with every declaration of ``tools`` merged under one ``tools`` entry."""
    declarations: List[Dict[str, Any]] = []
    for tool in tools:
        declarations.extend(tool.get("functionDeclarations", []))
    return {**params, "tools": [{"functionDeclarations": declarations}]}


def extract_function_calls(response: GeminiResponse) -> List[FunctionCallDTO]:
    """Return the function calls requested in ``response``, in part order."""
    calls: List[FunctionCallDTO] = []
    for part in response.parts:
        if part_type(part) != "function_call":
            continue
        call = part.get("functionCall") or {}
        calls.append(FunctionCallDTO(name=call.get("name"), arguments=call.get("args") or {}))
    return calls


def create_tool_response(name: str, response: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the ``functionResponse`` part answering a call to ``name``."""
    return {
        "functionResponse": {
            "name": name,
            "response": {"name": name, "content": dict(response)},
        }
    }


__all__ = ["add_tools_to_params", "create_tool_response", "define_tool", "extract_function_calls"]
