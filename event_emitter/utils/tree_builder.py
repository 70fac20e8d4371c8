"""Tree building utilities for visualizing listener registries."""

from .formatters import format_event_name, format_listener, format_threshold


def build_registry_tree(snapshot) -> str:
    """Build a tree-style view of a registry similar to the `tree` command.
    
    Events are listed in registry order with their listeners below them,
    in dispatch order. Events over the leak threshold are marked with a
    comment-like "# over limit".
    
    Args:
        snapshot: RegistrySnapshot to render
        
    Returns:
        Formatted tree string representation
    """
    over_limit = set(snapshot.over_limit())
    lines = [f". (max listeners: {format_threshold(snapshot.max_listeners)})"]

    names = snapshot.event_names
    for idx, name in enumerate(names):
        is_last = idx == len(names) - 1
        connector = "└── " if is_last else "├── "
        marker = " # over limit" if name in over_limit else ""
        lines.append(f"{connector}{format_event_name(name)}/{marker}")

        prefix = "    " if is_last else "│   "
        infos = snapshot.for_event(name)
        for jdx, info in enumerate(infos):
            leaf = "└── " if jdx == len(infos) - 1 else "├── "
            lines.append(f"{prefix}{leaf}{format_listener(info.listener)}")

    return "\n".join(lines)
