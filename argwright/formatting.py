"""
Argwright help and usage rendering (rich).

Only the help action and the error path call into this module; the engine never
does. Everything returns rich renderables so the caller decides where they go.

Palette keys
- usage-label, program-name, description-section, epilog-section
- group-label, argument-description
- option-name, metavar, children

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Group
from rich.table import Table
from rich.text import Text

from .arguments import ArgumentKind
from .arity import ArityKind
from .utils import SUPPRESS


def _styles(colorful):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "description-section": "italic #A3A3A3",
        "epilog-section": "#737373",

        "group-label": "bold #FFFFFF",
        "argument-description": "#9CA3AF",

        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "children": "bold #36C5F0",
    } | getattr(__import__("__main__"), "__styles__", {}))
    return styles if colorful else defaultdict(str)


def metavar(argument):
    """
    Placeholder shown for an argument's values.

    an explicit metavar wins, then the brace-wrapped choices; otherwise options
    use their dest in upper case and positionals their dest.
    """
    if argument.metavar is not None:
        return argument.metavar
    if argument.choices:
        return "{" + ",".join(argument.choices) + "}"
    if argument.kind is ArgumentKind.OPTIONAL:
        return argument.dest.upper()
    return argument.dest


def shape(argument):
    """
    Arity decoration around the metavar: "M", "[M]", "[M ...]", "M [M ...]", ...
    """
    name = metavar(argument)
    arity = argument.nargs
    match arity.kind:
        case ArityKind.NONE:
            return name
        case ArityKind.OPTIONAL:
            return f"[{name}]"
        case ArityKind.ZERO_OR_MORE:
            return f"[{name} ...]"
        case ArityKind.ONE_OR_MORE:
            return f"{name} [{name} ...]"
        case ArityKind.REMAINDER:
            return "..."
        case ArityKind.SUBCOMMAND:
            return f"{name} ..."
        case ArityKind.SUPPRESSED:
            return ""
        case ArityKind.EXACT:
            return " ".join([name] * arity.count)


def _invocation(argument):
    if argument.kind is not ArgumentKind.OPTIONAL:
        return shape(argument)
    if not (values := shape(argument)):
        return ", ".join(argument.names)
    return ", ".join(f"{name} {values}" for name in argument.names)


def _usage_part(argument):
    if argument.kind is not ArgumentKind.OPTIONAL:
        return shape(argument)
    part = argument.names[0]
    if values := shape(argument):
        part = f"{part} {values}"
    return part if argument.required else f"[{part}]"


def format_usage(parser):
    """
    "usage: prog [-h] [--count COUNT] filename" as a rich Text.
    """
    styles = _styles(parser.colorful)
    if parser.usage is not None:
        body = Text(parser.usage)
    else:
        visible = [argument for argument in parser.arguments if argument.help != SUPPRESS]
        options = [_usage_part(argument) for argument in visible if argument.kind is ArgumentKind.OPTIONAL]
        positionals = [_usage_part(argument) for argument in visible if argument.kind is not ArgumentKind.OPTIONAL]
        body = Text.assemble(
            (parser.prog, styles["program-name"]),
            *((" " + part, "") for part in (*options, *positionals) if part),
        )
    return Text.assemble(("usage: ", styles["usage-label"]), body)


def _section(title, rows, styles, description=None):
    table = Table.grid(padding=(0, 4))
    table.add_column(no_wrap=True)
    table.add_column()
    for invocation, details, style in rows:
        table.add_row(
            Text(invocation, styles[style]),
            Text(details or "", styles["argument-description"])
        )
    heading = [Text(title, styles["group-label"])]
    if description:
        heading += [Text(description, styles["description-section"]), Text("")]
    return Group(*heading, table)


def format_help(parser):
    """
    Full help: usage, description, argument sections, subcommands, epilog.
    """
    styles = _styles(parser.colorful)
    renders = [format_usage(parser)]

    if parser.description:
        renders += [Text(""), Text(parser.description, styles["description-section"])]

    grouped = {id(argument) for group in parser.groups if group.title is not None for argument in group.arguments}
    visible = [
        argument for argument in parser.arguments
        if argument.help != SUPPRESS and id(argument) not in grouped
    ]

    positionals = [argument for argument in visible if argument.kind is not ArgumentKind.OPTIONAL]
    if positionals:
        renders += [Text(""), _section("positional arguments:", [
            (_invocation(argument), argument.help, "metavar") for argument in positionals
        ], styles)]

    options = [argument for argument in visible if argument.kind is ArgumentKind.OPTIONAL]
    if options:
        renders += [Text(""), _section("options:", [
            (_invocation(argument), argument.help, "option-name") for argument in options
        ], styles)]

    for group in parser.groups:
        if group.title is None:
            continue
        members = [argument for argument in group.arguments if argument.help != SUPPRESS]
        renders += [Text(""), _section(f"{group.title}:", [
            (_invocation(argument), argument.help, "option-name") for argument in members
        ], styles, group.description)]

    if (subcommands := parser.subcommands) is not None and subcommands.entries:
        rows = []
        for entry in subcommands.entries:
            label = entry.name if not entry.aliases else f"{entry.name} ({", ".join(entry.aliases)})"
            rows.append((label, entry.help, "children"))
        renders += [Text(""), _section(f"{subcommands.title or "subcommands"}:", rows, styles)]

    if parser.epilog:
        renders += [Text(""), Text(parser.epilog, styles["epilog-section"])]

    return Group(*renders)


__all__ = (
    "metavar",
    "shape",
    "format_usage",
    "format_help",
)
