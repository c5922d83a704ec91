"""Document inspection CLI command."""

from __future__ import annotations

from pathlib import Path

from ..utils.layout import ElementInfo, iter_elements


def inspect_file(file_path: Path) -> None:
    """Print the element layout of a BSON file.

    Args:
        file_path: Path to a file holding one BSON document
    """
    data = file_path.read_bytes()
    inspect_document(data, title=file_path.name)


def inspect_document(data: bytes, title: str = "document") -> None:
    """Print a breakdown of every element in a BSON document.

    Args:
        data: BSON document bytes
        title: Name shown in the header
    """
    elements = list(iter_elements(data))
    top_level = [info for info in elements if info.depth == 0]

    print("|" * 7, "dynbson: BSON codec for dynamic values", "|" * 7)
    print(f"{len(top_level)} top-level element{'s' if len(top_level) != 1 else ''} loaded.")
    print("Sizes are in bytes.")
    print()

    print(f"{'=' * 19} {title} {'=' * 19}")
    print(f"Document size: {len(data)} bytes")
    print(f"        length prefix{'.' * 25}4")
    print(f"        elements{'.' * 30}{sum(info.size for info in top_level)}")
    print(f"        terminator{'.' * 28}1")
    print()

    print(f"{'-' * 26} Elements {'-' * 26}")
    for info in elements:
        _print_element(info)
    print()

    counts: dict[str, int] = {}
    for info in elements:
        counts[info.element_type.label] = counts.get(info.element_type.label, 0) + 1

    print(f"{'=' * 24} Summary {'=' * 24}")
    print(f"Total elements: {len(elements)}")
    print(f"Maximum depth: {max((info.depth for info in elements), default=-1) + 1}")
    for label, count in sorted(counts.items()):
        print(f"        {label}{'.' * max(1, 38 - len(label))}{count}")
    print()


def _print_element(info: ElementInfo) -> None:
    indent = "    " * info.depth
    field_desc = f"{indent}{info.name}"
    type_desc = info.element_type.label
    dots_needed = 54 - len(field_desc) - len(str(info.size)) - len(type_desc) - 2
    dots = "." * max(1, dots_needed)
    print(f"        {field_desc}{dots}{info.size} {type_desc} @{info.offset}")
