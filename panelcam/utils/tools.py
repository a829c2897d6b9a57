"""Tool catalog lookup and cutting-rate selection."""
from typing import Dict, Iterable, Mapping, Optional, Union

from ..machine import MachineProfile
from ..models import InvalidTool, Tool, ToolKind

Catalog = Union[Mapping[str, Tool], Iterable[Tool]]


def build_catalog(tools: Iterable[Tool]) -> Dict[str, Tool]:
    """
    Index tools by identifier.

    Raises:
        InvalidTool: if two tools share an identifier
    """
    catalog: Dict[str, Tool] = {}
    for tool in tools:
        if tool.id in catalog:
            raise InvalidTool(f"Duplicate tool id {tool.id!r} in catalog")
        catalog[tool.id] = tool
    return catalog


def resolve_tool(tool_id: str, catalog: Catalog) -> Optional[Tool]:
    """
    Look up a tool by exact identifier.

    Args:
        tool_id: Identifier referenced by an operation
        catalog: Mapping keyed by id, or any iterable of tools

    Returns:
        The matching tool, or None when the catalog has no such id
    """
    if isinstance(catalog, Mapping):
        return catalog.get(tool_id)
    for tool in catalog:
        if tool.id == tool_id:
            return tool
    return None


def plunge_rate_for(tool: Tool, profile: MachineProfile) -> float:
    """Vertical feed: the milling bit's own plunge rate, else the profile default."""
    if (profile.use_tool_rates and tool.kind == ToolKind.MILLING_BIT
            and tool.plunge_rate is not None):
        return tool.plunge_rate
    return profile.plunge_rate


def feed_rate_for(tool: Tool, profile: MachineProfile) -> float:
    """Horizontal cutting feed: the tool's feed rate, else the profile default."""
    if profile.use_tool_rates:
        return tool.feed_rate
    return profile.feed_rate
